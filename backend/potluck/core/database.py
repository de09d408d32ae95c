import logging
from pathlib import Path
from typing import Generator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from .config import Settings

# Import all models to register them with SQLModel metadata
from .. import models  # noqa: F401

logger = logging.getLogger(__name__)


def _redact(url: str) -> str:
    return url.split("@")[1] if "@" in url else url.split("://")[0] + "://..."


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((Exception,)),
    reraise=True,
)
def create_database_engine(settings: Settings) -> Engine:
    """Create database engine with retry logic."""
    url = settings.DATABASE_URL
    logger.info(f"Attempting to connect to database: {_redact(url)}")

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection keeps the in-memory database alive
            kwargs["poolclass"] = StaticPool
        elif url.startswith("sqlite:///"):
            Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, echo=settings.DEBUG, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(
            url,
            echo=settings.DEBUG,
            pool_pre_ping=True,
            pool_recycle=300,  # Recycle connections every 5 minutes
            pool_size=10,
            max_overflow=20,
        )

    # Test the connection
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
        logger.info("Database connection successful!")

    return engine


def create_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session bound to the application's engine."""
    with Session(request.app.state.engine) as session:
        yield session
