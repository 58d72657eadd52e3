"""Unit tests for app.core.security: bcrypt helpers, session JWT lifetime, session cookie."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from starlette.responses import Response

from app.core.config import settings
from app.core.security import (
    clear_session_cookie,
    create_access_token,
    decode_access_token,
    hash_password,
    set_session_cookie,
    verify_password,
    verify_session_token,
)

TOKEN_LIFETIME = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("Secret123")
        self.assertNotEqual(hashed, "Secret123")
        self.assertTrue(verify_password("Secret123", hashed))
        self.assertFalse(verify_password("Secret124", hashed))

    def test_explicit_rounds_are_used(self) -> None:
        hashed = hash_password("Secret123", rounds=5)
        self.assertTrue(hashed.startswith("$2b$05$"))

    def test_garbage_hash_does_not_raise(self) -> None:
        self.assertFalse(verify_password("Secret123", "not-a-bcrypt-hash"))


class TestSessionToken(unittest.TestCase):
    def test_claims(self) -> None:
        token = create_access_token(sub=7, email="jane@acme-insurance.co.ke", role="BROKER")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["email"], "jane@acme-insurance.co.ke")
        self.assertEqual(payload["role"], "BROKER")
        self.assertEqual(payload["exp"] - payload["iat"], int(TOKEN_LIFETIME.total_seconds()))

    def test_single_lifetime_policy_is_seven_days(self) -> None:
        self.assertEqual(TOKEN_LIFETIME, timedelta(days=7))

    def test_valid_until_expiry(self) -> None:
        issued = datetime.now(UTC) - TOKEN_LIFETIME + timedelta(seconds=30)
        token = create_access_token(sub=1, email="a@acme.co.ke", role="BROKER", now=issued)
        self.assertIsNotNone(verify_session_token(token))

    def test_rejected_one_second_after_expiry(self) -> None:
        issued = datetime.now(UTC) - TOKEN_LIFETIME - timedelta(seconds=1)
        token = create_access_token(sub=1, email="a@acme.co.ke", role="BROKER", now=issued)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)
        self.assertIsNone(verify_session_token(token))

    def test_wrong_signature_rejected(self) -> None:
        now = datetime.now(UTC)
        forged = jwt.encode(
            {"sub": "1", "email": "a@acme.co.ke", "role": "BROKER", "iat": now, "exp": now + TOKEN_LIFETIME},
            "some-other-secret",
            algorithm="HS256",
        )
        self.assertIsNone(verify_session_token(forged))

    def test_missing_or_malformed(self) -> None:
        self.assertIsNone(verify_session_token(None))
        self.assertIsNone(verify_session_token(""))
        self.assertIsNone(verify_session_token("not.a.jwt"))


class TestSessionCookie(unittest.TestCase):
    def test_set_cookie_attributes(self) -> None:
        response = Response()
        set_session_cookie(response, "tok")
        header = response.headers["set-cookie"]
        self.assertIn(f"{settings.SESSION_COOKIE_NAME}=tok", header)
        self.assertIn("HttpOnly", header)
        self.assertIn("Path=/", header)
        self.assertIn("SameSite=lax", header)
        self.assertIn(f"Max-Age={settings.JWT_EXPIRE_MINUTES * 60}", header)
        # APP_ENV=dev in tests
        self.assertNotIn("Secure", header)

    def test_clear_cookie(self) -> None:
        response = Response()
        clear_session_cookie(response)
        header = response.headers["set-cookie"]
        self.assertIn(f"{settings.SESSION_COOKIE_NAME}=", header)
        self.assertIn("Max-Age=0", header)


if __name__ == "__main__":
    unittest.main()
