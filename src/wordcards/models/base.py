"""Base model configuration."""
import sqlite3
from datetime import UTC, datetime
from typing import Generator, Optional

from sqlalchemy import Column, DateTime, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from wordcards.config import settings


def make_engine(url: str, echo: bool = False, timeout: Optional[float] = None) -> Engine:
    """Create an engine; SQLite gets a busy timeout so a locked file surfaces as an error."""
    connect_args = {}
    if url.startswith("sqlite") and timeout is not None:
        connect_args["timeout"] = timeout
    return create_engine(url, echo=echo, connect_args=connect_args)


# Create SQLAlchemy engine
engine = make_engine(
    settings.database.url,
    echo=settings.database.echo,
    timeout=settings.database.timeout,
)


# Composite foreign keys are only enforced by SQLite when asked to
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key enforcement on SQLite connections."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create declarative base class
Base = declarative_base()


class TimestampMixin:
    """Mixin to add timestamp columns to models."""
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Initialize database."""
    # Register the mapped classes before creating tables
    import wordcards.models.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)  # Create tables if they don't exist
