"""Shared helpers for tests that go through the HTTP API against a throwaway SQLite database."""

import unittest
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models import Base

API = "/api"

STRONG_PASSWORD = "Secret123"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables, shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def signup_body(role: str = "BROKER", **overrides: Any) -> dict[str, Any]:
    """Valid signup payload for the role; overrides replace or add keys (None removes)."""
    body: dict[str, Any] = {
        "role": role,
        "fullName": "Jane Wanjiru",
        "email": "jane@acme-insurance.co.ke",
        "username": "jane.w",
        "password": STRONG_PASSWORD,
    }
    role_fields = {
        "UNDERWRITER": {"specialtyLine": "Property", "yearsExp": 6},
        "BROKER": {"organization": "Acme Insurance"},
        "INSURER": {"organization": "Acme Insurance", "industry": "General"},
        "CLAIMS": {"organization": "Acme Insurance", "avgClaimsPerMonth": 40},
        "REINSURER": {"organization": "Acme Re", "reinsurerType": "Treaty"},
    }
    body.update(role_fields.get(role, {}))
    for key, value in overrides.items():
        if value is None:
            body.pop(key, None)
        else:
            body[key] = value
    return body


class ApiTestCase(unittest.TestCase):
    """Each test gets its own empty database wired into the app via get_db override."""

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.pop(get_db, None)
        self.client.close()

    def new_client(self) -> TestClient:
        """A second browser: same app and database, separate cookie jar."""
        client = TestClient(app)
        self.addCleanup(client.close)
        return client

    def signup(self, client: TestClient | None = None, **overrides: Any) -> dict[str, Any]:
        client = client or self.client
        resp = client.post(f"{API}/auth/signup", json=signup_body(**overrides))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["user"]

    def create_property(self, client: TestClient | None = None, **overrides: Any) -> dict[str, Any]:
        client = client or self.client
        body = {
            "address": "Westlands, Nairobi",
            "latitude": -1.2676,
            "longitude": 36.8095,
            "property_type": "commercial",
            "estimated_value": 50000000,
        }
        body.update(overrides)
        resp = client.post(f"{API}/properties", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()
