"""
Pytest fixtures: in-memory SQLite session, in-process caches, API client
"""
import os

# Must be set before the app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_catalog.db")
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_service.main import app
from catalog_service.core.database import Base, get_db, enable_sqlite_transactions
from catalog_service.core.dependencies import get_cache_store
from catalog_service.core.redis import MemoryCache
from catalog_service.services.export_cache import ExportCacheManager
from catalog_service.services.translation_service import TranslationService


# Test database (in-memory SQLite shared through one connection)
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_transactions(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Manually advanced monotonic clock for TTL tests"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture(scope="function")
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Cache with key listing (pattern invalidation)"""
    return MemoryCache(supports_key_listing=True, clock=clock)


@pytest.fixture
def degraded_cache(clock):
    """Cache without key listing (degraded invalidation)"""
    return MemoryCache(supports_key_listing=False, clock=clock)


@pytest.fixture
def export_cache(db_session, cache):
    return ExportCacheManager(db_session, cache, ttl=300, metadata_ttl=3600, pattern_invalidation=True)


@pytest.fixture
def service(db_session, export_cache):
    return TranslationService(db_session, export_cache)


@pytest.fixture
def make_translation(service):
    """Create a translation through the service"""
    def _make(key="greeting", value="Hello", locale="en", tags=None):
        return service.create(key, value, locale, tag_names=tags)
    return _make


@pytest.fixture
def client(db_session, cache):
    """Test client sharing the test session and cache"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_store] = lambda: cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
