"""
Pytest fixtures for SkillShare tests.

Uses an in-memory SQLite database per test and locally signed JWTs so the
suite runs without PostgreSQL, Redis or network access.
"""

import fnmatch
import os
from datetime import datetime, timedelta, timezone

# Settings are cached on first use; configure before importing core
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_PROVIDER"] = "jwt"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-skillshare-suite-0123456789"
os.environ["CACHE_ENABLED"] = "false"

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from core.cache import cache  # noqa: E402
from core.config import get_settings  # noqa: E402
from core.db import Base, build_engine  # noqa: E402
from core.models import UserProfile  # noqa: E402
from core.services import Identity  # noqa: E402

get_settings.cache_clear()


class FakeCache:
    """Dict-backed stand-in for RedisCache with the same JSON interface."""

    def __init__(self):
        self.store: dict[str, dict] = {}
        self.ttls: dict[str, int] = {}

    @property
    def is_available(self) -> bool:
        return True

    def get_json(self, key):
        return self.store.get(key)

    def set_json(self, key, value, ttl=3600):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def get_json_or_compute(self, key, compute_fn, ttl=3600):
        result = self.get_json(key)
        if result is not None:
            return result
        result = compute_fn()
        self.set_json(key, result, ttl)
        return result

    def delete(self, key):
        return self.store.pop(key, None) is not None

    def delete_pattern(self, pattern):
        keys = [key for key in self.store if fnmatch.fnmatch(key, pattern)]
        for key in keys:
            del self.store[key]
        return len(keys)


@pytest.fixture(autouse=True)
def _reset_cache():
    """Keep the shared cache singleton disabled between tests."""
    cache.reset()
    yield
    cache.reset()


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield "sqlite://", TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def alice():
    return Identity(uid="uid-alice", email="alice@example.com")


@pytest.fixture
def bob():
    return Identity(uid="uid-bob", email="bob@example.com")


@pytest.fixture
def make_profile(test_session):
    """
    Insert a profile directly, bypassing the service.

    created_at is spaced one minute apart per call so ordering is deterministic.
    """
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(uid=None, display_name=None, skills=("python",), availability=(), interests=(), **columns):
        counter["n"] += 1
        n = counter["n"]
        profile = UserProfile(
            uid=uid or f"uid-{n}",
            email=f"user{n}@example.com",
            display_name=display_name or f"User {n}",
            created_at=base_time + timedelta(minutes=n),
            updated_at=base_time + timedelta(minutes=n),
            social_links=[],
            **columns,
        )
        profile.set_tags("skill", list(skills))
        profile.set_tags("availability", list(availability))
        profile.set_tags("interest", list(interests))
        test_session.add(profile)
        test_session.commit()
        return profile

    return _make
