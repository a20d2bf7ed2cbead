"""Base repository class shared by the workspace and item family repositories.

Every mutating method commits before returning, so callers that need
failure isolation only have to roll back on exception.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from app.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Primary-key CRUD for one ORM model."""

    def __init__(self, model: type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get_by_id(self, db: Session, id: str) -> ModelType | None:
        """Get entity by ID, soft-deleted or not.

        Args:
            db: Database session
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        return db.get(self.model, id)

    def create(self, db: Session, obj_in: dict[str, Any]) -> ModelType:
        """Insert a new entity and commit.

        Args:
            db: Database session
            obj_in: Column values, including the generated ID

        Returns:
            Created entity, refreshed from the database
        """
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, db_obj: ModelType, obj_in: dict[str, Any]) -> ModelType:
        """Write the given columns onto an entity and commit.

        Keys that are not attributes of the model are ignored.
        """
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, id: str) -> bool:
        """Hard delete an entity by ID.

        Returns:
            True if deleted, False if not found
        """
        obj = db.get(self.model, id)
        if obj is None:
            return False
        db.delete(obj)
        db.commit()
        return True
