import unittest
from datetime import datetime, timedelta
from unittest import mock

from _support_api import BaseAPITestCase

from config import Settings
from core.security import create_access_token, verify_token
from models.user import UserModel
from utils.user_manager import UserManager


class RegisterTests(BaseAPITestCase):
    def test_register_returns_public_projection(self):
        user = self.register("alice")
        self.assertEqual(set(user), {"id", "username", "email", "createdAt"})
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["email"], "alice@example.com")

    def test_register_requires_all_fields(self):
        for body in (
            {"email": "a@example.com", "password": "pw"},
            {"username": "a", "password": "pw"},
            {"username": "a", "email": "a@example.com", "password": ""},
        ):
            res = self.client.post("/auth/register", json=body)
            self.assertEqual(res.status_code, 400)
            self.assertIn("error", res.json())

    def test_duplicate_email_or_username_conflicts(self):
        first = self.register("alice")

        res = self.client.post(
            "/auth/register",
            json={"username": "alice2", "email": "alice@example.com", "password": "x"},
        )
        self.assertEqual(res.status_code, 409)

        res = self.client.post(
            "/auth/register",
            json={"username": "alice", "email": "other@example.com", "password": "x"},
        )
        self.assertEqual(res.status_code, 409)

        # First user unaffected
        token = self.login("alice@example.com")
        self.assertTrue(token)
        with self.SessionLocal() as db:
            self.assertEqual(db.query(UserModel).count(), 1)
            stored = db.query(UserModel).one()
            self.assertEqual(stored.id, first["id"])
            self.assertEqual(stored.role, "MEMBER")
            self.assertNotEqual(stored.password_hash, "secret-pw")

    def test_unique_constraint_race_is_a_conflict(self):
        self.register("alice")
        # Both requests passed the lookup; only the constraint sees the clash
        with mock.patch.object(UserManager, "_find_existing", return_value=False):
            res = self.client.post(
                "/auth/register",
                json={"username": "alice", "email": "new@example.com", "password": "x"},
            )
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json(), {"error": "Email or username is already in use."})

        res = self.client.post(
            "/auth/register",
            json={"username": "bob", "email": "bob@example.com", "password": "x"},
        )
        self.assertEqual(res.status_code, 201)

    def test_created_at_carries_utc_offset(self):
        user = self.register("alice")
        created_at = datetime.fromisoformat(user["createdAt"].replace("Z", "+00:00"))
        self.assertEqual(created_at.utcoffset(), timedelta(0))


class LoginTests(BaseAPITestCase):
    def test_login_returns_access_token(self):
        user = self.register("alice")
        token = self.login("alice@example.com")
        claims = verify_token(token, self.settings)
        self.assertEqual(claims["sub"], str(user["id"]))
        self.assertEqual(claims["name"], "alice")

    def test_wrong_password_and_unknown_email_look_the_same(self):
        self.register("alice")
        wrong = self.client.post(
            "/auth/login", json={"email": "alice@example.com", "password": "nope"}
        )
        unknown = self.client.post(
            "/auth/login", json={"email": "ghost@example.com", "password": "nope"}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json(), {"error": "Invalid credentials."})

    def test_login_requires_email_and_password(self):
        res = self.client.post("/auth/login", json={"email": "alice@example.com"})
        self.assertEqual(res.status_code, 400)

    def test_missing_signing_secret_is_internal_error(self):
        self.register("alice")
        self.settings = Settings()
        res = self.client.post(
            "/auth/login", json={"email": "alice@example.com", "password": "secret-pw"}
        )
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"error": "Internal server error."})


class BearerGateTests(BaseAPITestCase):
    def test_missing_token_is_unauthenticated(self):
        res = self.client.get("/requests")
        self.assertEqual(res.status_code, 401)
        res = self.client.get("/requests", headers={"Authorization": "Basic abc"})
        self.assertEqual(res.status_code, 401)

    def test_invalid_token_is_forbidden(self):
        res = self.client.get("/requests", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(res.status_code, 403)

    def test_expired_token_is_forbidden(self):
        user = self.register("alice")
        token = create_access_token(
            user["id"], "alice", self.settings, expires_delta=timedelta(seconds=-5)
        )
        res = self.client.get("/requests", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(res.status_code, 403)

    def test_missing_signing_secret_fails_closed(self):
        headers = self.auth_headers("alice")
        self.settings = Settings()
        res = self.client.get("/requests", headers=headers)
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"error": "Internal server error."})

    def test_valid_token_passes(self):
        headers = self.auth_headers("alice")
        res = self.client.get("/requests", headers=headers)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), [])


if __name__ == "__main__":
    unittest.main()
