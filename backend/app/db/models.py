"""SQLAlchemy ORM models for MOMU.

Entity Hierarchy:
    Workspace -> Item                         (items family, single table)
    Workspace -> File -> FileNote | FileVideo | FileFolder
                                              (files family, base + companion)
    Workspace -> WorkspaceShare
    Workspace -> AIChat                       (per-user AI conversation history)

Timestamps are integer milliseconds. Soft-deleted rows keep their identifier
so they can be restored.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship

ITEM_TYPES = ("note", "video", "folder", "task", "section")
FILE_TYPES = ("note", "video", "folder")


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Workspace(Base):
    """Workspace - root container owned by a single user."""

    __tablename__ = "workspaces"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)
    cover_color = Column(String(32), nullable=True)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    # Relationships
    shares = relationship("WorkspaceShare", back_populates="workspace", cascade="all, delete-orphan")
    items = relationship("Item", back_populates="workspace", cascade="all, delete-orphan")
    files = relationship("File", back_populates="workspace", cascade="all, delete-orphan")
    ai_chats = relationship("AIChat", back_populates="workspace", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_workspaces_user_id", "user_id"),)

    def __repr__(self) -> str:
        return f"<Workspace(id={self.id}, title={self.title})>"


class WorkspaceShare(Base):
    """Read access to a workspace granted to another user."""

    __tablename__ = "workspace_shares"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    shared_with_user_id = Column(String(64), nullable=False)
    created_at = Column(BigInteger, nullable=False)

    workspace = relationship("Workspace", back_populates="shares")

    __table_args__ = (
        Index("idx_workspace_shares_workspace_id", "workspace_id"),
        Index("idx_workspace_shares_user_id", "shared_with_user_id"),
    )

    def __repr__(self) -> str:
        return f"<WorkspaceShare(workspace_id={self.workspace_id}, user={self.shared_with_user_id})>"


class Item(Base):
    """Item - tree node of the items family; every payload field lives here."""

    __tablename__ = "items"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    parent_id = Column(String(64), nullable=True)  # NULL = root level
    type = Column(Enum(*ITEM_TYPES, name="item_type"), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    youtube_url = Column(String(512), nullable=True)
    youtube_id = Column(String(64), nullable=True)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(BigInteger, nullable=True)
    order_index = Column(Integer, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=True)
    deleted_at = Column(BigInteger, nullable=True)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    workspace = relationship("Workspace", back_populates="items")

    __table_args__ = (
        Index("idx_items_workspace_parent", "workspace_id", "parent_id"),
        Index("idx_items_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, type={self.type}, title={self.title})>"


class File(Base):
    """File - tree node of the files family; payload lives in a companion row."""

    __tablename__ = "files"

    id = Column(String(64), primary_key=True)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(*FILE_TYPES, name="file_type"), nullable=False)
    parent_id = Column(String(64), nullable=True)  # NULL = root level
    order_index = Column(Integer, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    deleted_at = Column(BigInteger, nullable=True)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    # Companion rows (exactly one matches `type`)
    workspace = relationship("Workspace", back_populates="files")
    note = relationship("FileNote", uselist=False, back_populates="file", cascade="all, delete-orphan")
    video = relationship("FileVideo", uselist=False, back_populates="file", cascade="all, delete-orphan")
    folder = relationship("FileFolder", uselist=False, back_populates="file", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_files_workspace_parent", "workspace_id", "parent_id"),
        Index("idx_files_active", "active"),
    )

    def __repr__(self) -> str:
        return f"<File(id={self.id}, type={self.type})>"


class FileNote(Base):
    """Note payload of a file."""

    __tablename__ = "files_note"

    file_id = Column(String(64), ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    updated_at = Column(BigInteger, nullable=True)

    file = relationship("File", back_populates="note")


class FileVideo(Base):
    """Video payload of a file."""

    __tablename__ = "files_video"

    file_id = Column(String(64), ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    title = Column(String(255), nullable=False)
    youtube_url = Column(String(512), nullable=True)
    youtube_id = Column(String(64), nullable=True)
    updated_at = Column(BigInteger, nullable=True)

    file = relationship("File", back_populates="video")


class FileFolder(Base):
    """Folder payload of a file."""

    __tablename__ = "files_folder"

    file_id = Column(String(64), ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    updated_at = Column(BigInteger, nullable=True)

    file = relationship("File", back_populates="folder")


class AIChat(Base):
    """Saved AI conversation of one user inside one workspace."""

    __tablename__ = "ai_chats"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False)
    workspace_id = Column(String(64), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    messages = Column(JSON, nullable=False, default=list)  # [{role, content, ...}]
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    workspace = relationship("Workspace", back_populates="ai_chats")

    __table_args__ = (Index("idx_ai_chats_user_workspace", "user_id", "workspace_id"),)

    def __repr__(self) -> str:
        return f"<AIChat(id={self.id}, title={self.title})>"
