import os
import sys
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.auth.jwt import create_access_token  # noqa: E402
from backend.app.database import get_db  # noqa: E402
from backend.app.main import create_app  # noqa: E402


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    _, TestingSessionLocal, _ = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    # Not used as a context manager: startup would connect to the configured database
    client = TestClient(app)
    yield client, TestingSessionLocal
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[..., dict]:
    def _headers(uid: str = "uid-alice", email: str = "alice@example.com") -> dict:
        return {"Authorization": f"Bearer {create_access_token(uid, email)}"}

    return _headers


@pytest.fixture
def profile_payload() -> dict:
    return {
        "displayName": "Alice Smith",
        "bio": "Python tutor at Stanford",
        "skills": ["python", "sql"],
        "interests": ["chess"],
        "availability": ["tutoring"],
        "university": "Stanford University",
        "year": "2025",
        "contactInfo": {
            "email": "alice.contact@example.com",
            "phone": "555-0100",
            "socialLinks": [{"platform": "github", "url": "https://github.com/alice"}],
        },
    }
