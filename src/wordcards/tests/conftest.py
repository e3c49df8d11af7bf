"""Test configuration."""
import os
from datetime import UTC, datetime, timedelta
from typing import Generator

import pytest
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Import after environment setup
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wordcards.models.base import init_db
from wordcards.models.progress_models import AccountContext
from wordcards.services.catalog_service import ContentCatalog, get_catalog
from wordcards.services.progress_service import ProgressService
from wordcards.services.progress_store import ProgressStore

fake = Faker()


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Create a database session for each test."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 10, 9, 30, tzinfo=UTC))


@pytest.fixture
def catalog() -> ContentCatalog:
    return get_catalog()


@pytest.fixture
def store(db: Session, catalog: ContentCatalog, clock: FakeClock) -> ProgressStore:
    """Create a progress store on the test database."""
    return ProgressStore(db, catalog=catalog, clock=clock, timezone="UTC")


@pytest.fixture
def progress_service(store: ProgressStore) -> ProgressService:
    return ProgressService(store)


@pytest.fixture
def account() -> AccountContext:
    """Create a signed-in account context."""
    return AccountContext(
        account_id=fake.uuid4(),
        email=fake.email(),
        username=fake.user_name(),
        token=fake.sha256(),
    )
