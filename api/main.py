"""
FastAPI application for the competition participants backend.

This module creates and configures the FastAPI application, registering
all routers, middleware and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from api.config import settings, ensure_upload_dir
from api.dependencies import get_session_store, get_storage_service
from api.routers import admin, pages, participants, upload
from api.schemas.common import ErrorResponse, HealthCheckResponse
from backend.models.participant import UploadCategory
from services.exceptions import ParticipantsError
from services.session_service import RedisSessionStore, SessionStore
from services.storage_service import StorageService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT,
    handlers=[
        logging.FileHandler(settings.LOG_FILE),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.API_TITLE} v{settings.API_VERSION}")
    logger.info(f"Session backend: {settings.SESSION_BACKEND}")
    if settings.SESSION_TTL_SECONDS is None:
        logger.warning("Admin sessions never expire; set SESSION_TTL_SECONDS to limit them")

    ensure_upload_dir()
    logger.info(f"Upload directory: {settings.UPLOAD_DIR}")

    yield

    # Shutdown
    logger.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS
)


# Exception handlers

@app.exception_handler(ParticipantsError)
async def participants_error_handler(request: Request, exc: ParticipantsError):
    """Map service errors to {success: false, message}."""
    logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Report malformed requests in the {success: false, message} envelope.

    A login body that does not validate is a failed login (401); an upload
    whose file field is missing or not a file is a missing file (400).
    """
    path = request.url.path
    logger.info(f"{request.method} {path} failed validation: {exc.errors()}")

    if path == '/admin/login':
        status_code, message = status.HTTP_401_UNAUTHORIZED, "Invalid password"
    elif path.startswith('/upload/'):
        status_code, message = status.HTTP_400_BAD_REQUEST, "No file was uploaded."
    else:
        status_code, message = status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request"

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            message=str(exc) if settings.DEBUG else "Internal server error"
        ).model_dump()
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    """Handle 404 Not Found errors."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(message=f"Not found: {request.url.path}").model_dump()
    )


# Register routers
app.include_router(admin.router)
app.include_router(upload.router)
app.include_router(participants.router, prefix='/api')
app.include_router(pages.router)


@app.get('/health', response_model=HealthCheckResponse, tags=['health'])
async def health_check(
    sessions: SessionStore = Depends(get_session_store),
    storage: StorageService = Depends(get_storage_service)
):
    """
    Health check endpoint.

    Reports which categories have an upload and, for the Redis session
    backend, whether Redis is reachable.

    **Example:**
    ```bash
    curl http://localhost:3000/health
    ```
    """
    uploaded = storage.uploaded_categories()
    health_status = {
        'status': 'healthy',
        'timestamp': datetime.utcnow(),
        'version': settings.API_VERSION,
        'upload_dir': storage.upload_dir,
        'session_backend': settings.SESSION_BACKEND,
        'uploads': {c.value: c in uploaded for c in UploadCategory}
    }

    if isinstance(sessions, RedisSessionStore):
        try:
            sessions.client.ping()
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            health_status['status'] = 'degraded'

    return HealthCheckResponse(**health_status)


# Middleware for request logging

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.info(f"{request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} - {response.status_code}")
    return response


# Remaining front-end assets (css, js, images) from PUBLIC_DIR
if Path(settings.PUBLIC_DIR).is_dir():
    app.mount('/', StaticFiles(directory=settings.PUBLIC_DIR), name='public')


if __name__ == '__main__':
    import uvicorn

    uvicorn.run(
        'api.main:app',
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
