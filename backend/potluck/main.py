import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from .api import build_api_router
from .core.config import Settings, settings as default_settings
from .core.database import create_database_engine, create_tables
from .core.errors import AuthenticationError, PotluckError, ServerError, ValidationError
from .core.storage import ensure_upload_dir

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _error_response(exc: PotluckError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or ValidationError.default_message


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(PotluckError)
    async def potluck_error_handler(request: Request, exc: PotluckError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ValidationError(_describe_validation_error(exc)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return _error_response(ServerError(str(exc) if settings.DEBUG else None))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API from explicit settings."""
    settings = settings or default_settings

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting up {settings.APP_NAME}...")
        if settings.AUTO_CREATE_TABLES:
            logger.info("Auto-creating database tables...")
            create_tables(app.state.engine)
            logger.info("Database tables created successfully!")

        yield

        logger.info(f"Shutting down {settings.APP_NAME}...")
        app.state.engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Share recipes with the groups you cook with",
        version=VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_database_engine(settings)

    # CORS middleware for the single-page client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)
    app.include_router(build_api_router(settings.API_PREFIX))

    # Uploaded recipe photos
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=str(ensure_upload_dir(settings))),
        name="uploads",
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": settings.APP_NAME, "version": VERSION}

    @app.get("/health")
    @app.get(f"{settings.API_PREFIX}/health")
    def health_check():
        """Health check endpoint with database status."""
        status = {"status": "healthy", "database": "unknown"}

        try:
            with app.state.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["database"] = "connected"
        except Exception as e:
            logger.warning(f"Health check could not reach the database: {e}")
            status["database"] = "error"
            status["status"] = "degraded"

        return status

    return app
