"""
Shared fixtures.

Service tests run against the in-memory stores. API tests use FastAPI's
TestClient with get_db overridden to a private in-memory SQLite database.
"""

import os

# Set before careerhub is imported so the module-level engine never touches a file
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from careerhub.core.config import settings
from careerhub.db.base import Base
from careerhub.db.session import get_db
from careerhub.main import app
from careerhub.repositories import memory_stores
from careerhub.services import auth
from careerhub.services.whitelist import add_entry

RESIDENT_EMAIL = "resident@example.com"
OTHER_RESIDENT_EMAIL = "neighbour@example.com"


# ===== SERVICE FIXTURES =====

@pytest.fixture
def stores():
    return memory_stores()


@pytest.fixture
def admin(stores):
    """Identity of the shared admin."""
    token = auth.admin_login(stores, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)["session_id"]
    return auth.resolve_session(stores, token)


@pytest.fixture
def resident(stores):
    """Identity of a whitelisted resident."""
    add_entry(stores, RESIDENT_EMAIL, name="Layla Hassan", unit="B2-104")
    token = auth.login(stores, RESIDENT_EMAIL)["session_id"]
    return auth.resolve_session(stores, token)


@pytest.fixture
def other_resident(stores):
    add_entry(stores, OTHER_RESIDENT_EMAIL, name="Karim Adel", unit="C1-201")
    token = auth.login(stores, OTHER_RESIDENT_EMAIL)["session_id"]
    return auth.resolve_session(stores, token)


@pytest.fixture
def job_fields():
    return {
        "title": "Senior Python Developer",
        "company": "Nile Analytics",
        "description": "Build data services with Python and Django on AWS.",
        "requirements": "PostgreSQL and Docker experience",
        "skills": "python, django, aws",
        "industry": "Technology",
        "contact_email": "careers@nile.example",
        "contact_phone": "+20 2 0000 0000",
    }


@pytest.fixture
def internship_fields():
    return {
        "title": "Finance Intern",
        "company": "Delta Capital",
        "description": "Support monthly reporting.",
        "duration": "3 months",
        "contact_email": "interns@delta.example",
    }


@pytest.fixture
def course_fields():
    return {
        "title": "Intro to Project Management",
        "description": "Planning, risk and communication.",
        "type": "workshop",
    }


# ===== API FIXTURES =====

@pytest.fixture
def client():
    """TestClient bound to a fresh in-memory database (lifespan not run)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/v1/auth/admin-login",
        json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['session_id']}"}


@pytest.fixture
def resident_headers(client, admin_headers):
    response = client.post(
        "/api/v1/whitelist",
        json={"email": RESIDENT_EMAIL, "name": "Layla Hassan", "unit": "B2-104"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    response = client.post("/api/v1/auth/login", json={"email": RESIDENT_EMAIL})
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['session_id']}"}
