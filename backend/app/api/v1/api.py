"""API v1 Router Aggregator.

Aggregates all v1 API endpoints into a single router.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import ai, files, health, items, workspaces

api_router = APIRouter()

# Mount endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["Workspaces"])
api_router.include_router(files.router, prefix="/files", tags=["Files"])
api_router.include_router(items.router, prefix="/folders", tags=["Items"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
