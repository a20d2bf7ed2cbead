"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from .api.v1.api import api_router
from .components.sync import (
    MissingCallerError,
    SyncAuthorizationError,
    WorkspaceAccessDeniedError,
    WorkspaceNotFoundError,
)
from .db import close_db, init_db
from .settings import settings
from .utils import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

_SYNC_ERROR_STATUS = {
    MissingCallerError: 401,
    WorkspaceAccessDeniedError: 403,
    WorkspaceNotFoundError: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_configuration()
    init_db()
    if not settings.is_ai_configured() and settings.environment != "test":
        logger.warning("OPENROUTER_API_KEY is not set; /ai endpoints will fail upstream")
    logger.info(f"MOMU API started ({settings.environment}) on {settings.host}:{settings.port}")
    yield
    close_db()


app = FastAPI(
    title="MOMU API",
    description="Workspace and item tree backend with offline batch sync",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SyncAuthorizationError)
async def sync_authorization_handler(request: Request, exc: SyncAuthorizationError):
    status_code = _SYNC_ERROR_STATUS.get(type(exc), 403)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    message = str(exc)
    logger.error(f"Database error on {request.method} {request.url.path}: {message}")
    if "timeout" in message.lower():
        return JSONResponse(
            status_code=504,
            content={
                "error": "Request timeout",
                "message": "The database took too long to respond",
                "code": "TIMEOUT",
            },
        )
    return JSONResponse(
        status_code=503,
        content={
            "error": "Database connection error",
            "message": "Unable to reach the database, please try again",
            "code": "DB_CONNECTION_ERROR",
        },
    )


# Include routers
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "status": "ok",
        "service": "MOMU API",
        "version": "0.1.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
