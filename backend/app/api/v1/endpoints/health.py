"""Health check API endpoint."""

from fastapi import APIRouter

from app.db import check_connection

router = APIRouter(tags=["Health"])


@router.get("")
def health_check():
    """Liveness plus a database connectivity check."""
    return {
        "status": "healthy",
        "database": "connected" if check_connection() else "unavailable",
    }
