import os
import unittest

# Keep the module-level engine away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import app  # noqa: E402
from config import Settings  # noqa: E402
from core.database import get_db, init_db  # noqa: E402
from core.dependencies import get_settings  # noqa: E402
from utils.user_manager import UserManager  # noqa: E402

TEST_SECRET = "test-signing-secret"


def make_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


class BaseAPITestCase(unittest.TestCase):
    """Runs the app against a fresh in-memory database per test."""

    settings = Settings(jwt_secret=TEST_SECRET)

    def setUp(self):
        self.engine, self.SessionLocal = make_session_factory()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(self, username, email=None, password="secret-pw"):
        email = email or f"{username}@example.com"
        res = self.client.post(
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def login(self, email, password="secret-pw"):
        res = self.client.post("/auth/login", json={"email": email, "password": password})
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["accessToken"]

    def auth_headers(self, username, role=None):
        """Register ``username`` (optionally with a role) and return auth headers."""
        self.register(username)
        if role:
            with self.SessionLocal() as db:
                UserManager(db).set_role(username, role)
        token = self.login(f"{username}@example.com")
        return {"Authorization": f"Bearer {token}"}

    def create_request(self, headers, name="laptop", **extra):
        res = self.client.post("/requests", json={"name": name, **extra}, headers=headers)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()
