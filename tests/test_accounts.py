"""Tests for app.services.accounts: unique-constraint conflicts (incl. concurrent signups) and credential checks."""

import os
import tempfile
import threading
import unittest
from unittest.mock import MagicMock

from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from api_support import make_session_factory, signup_body

from app.models import Base, User
from app.services.accounts import (
    INVALID_CREDENTIALS_MESSAGE,
    EmailInUseError,
    InvalidCredentialsError,
    UsernameInUseError,
    authenticate,
    create_account,
)
from app.services.signup import validate_signup


def _signup(role: str = "BROKER", **overrides: object):
    return validate_signup(signup_body(role, **overrides))


class TestCreateAccount(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        self.db = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()

    def test_stores_hash_and_role_fields(self) -> None:
        user = create_account(self.db, _signup("UNDERWRITER"))
        self.assertIsNotNone(user.id)
        self.assertNotEqual(user.password_hash, "Secret123")
        self.assertTrue(user.password_hash.startswith("$2b$"))
        self.assertEqual(user.role, "UNDERWRITER")
        self.assertEqual(user.specialty_line, "Property")
        self.assertEqual(user.years_exp, 6)
        self.assertIsNone(user.organization)
        self.assertIsNone(user.reinsurer_type)

    def test_duplicate_email(self) -> None:
        create_account(self.db, _signup())
        with self.assertRaises(EmailInUseError) as ctx:
            create_account(self.db, _signup(username="someone.else"))
        self.assertEqual(ctx.exception.message, "Email already in use")
        self.assertEqual(self.db.scalar(select(func.count(User.id))), 1)

    def test_duplicate_username(self) -> None:
        create_account(self.db, _signup())
        with self.assertRaises(UsernameInUseError) as ctx:
            create_account(self.db, _signup(email="other@acme-insurance.co.ke"))
        self.assertEqual(ctx.exception.message, "Username already in use")
        self.assertEqual(self.db.scalar(select(func.count(User.id))), 1)

    def test_email_conflict_reported_first(self) -> None:
        create_account(self.db, _signup())
        with self.assertRaises(EmailInUseError):
            create_account(self.db, _signup())


class TestCreateAccountConflictTranslation(unittest.TestCase):
    """The insert is attempted directly; a rejected commit is rolled back and classified."""

    def test_integrity_error_rolls_back(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))
        session.scalar.side_effect = [None, 5]  # email free, username taken
        with self.assertRaises(UsernameInUseError):
            create_account(session, _signup(), rounds=4)
        session.rollback.assert_called_once()
        session.refresh.assert_not_called()

    def test_no_existence_check_before_insert(self) -> None:
        session = MagicMock()
        create_account(session, _signup(), rounds=4)
        session.scalar.assert_not_called()
        session.add.assert_called_once()
        session.commit.assert_called_once()


class TestConcurrentSignup(unittest.TestCase):
    """Two simultaneous signups with the same email: exactly one row, one conflict."""

    def test_exactly_one_succeeds(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            engine = create_engine(
                f"sqlite:///{os.path.join(tmp, 'signup.db')}",
                connect_args={"check_same_thread": False, "timeout": 30},
            )
            Base.metadata.create_all(engine)
            SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            barrier = threading.Barrier(2)
            outcomes: list[str] = []
            lock = threading.Lock()

            def worker(username: str) -> None:
                signup = _signup(username=username)
                db = SessionLocal()
                try:
                    barrier.wait()
                    create_account(db, signup)
                    result = "created"
                except EmailInUseError:
                    result = "conflict"
                finally:
                    db.close()
                with lock:
                    outcomes.append(result)

            threads = [
                threading.Thread(target=worker, args=(name,))
                for name in ("first.user", "second.user")
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=60)

            self.assertEqual(sorted(outcomes), ["conflict", "created"])
            with SessionLocal() as db:
                self.assertEqual(db.scalar(select(func.count(User.id))), 1)
            engine.dispose()


class TestAuthenticate(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        self.db = self.SessionLocal()
        create_account(self.db, _signup())

    def tearDown(self) -> None:
        self.db.close()

    def test_valid_credentials(self) -> None:
        user = authenticate(self.db, "jane@acme-insurance.co.ke", "Secret123")
        self.assertEqual(user.username, "jane.w")

    def test_email_lookup_is_case_insensitive(self) -> None:
        user = authenticate(self.db, "  JANE@acme-insurance.co.ke ", "Secret123")
        self.assertEqual(user.username, "jane.w")

    def test_wrong_password_and_unknown_email_are_identical(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong_pw:
            authenticate(self.db, "jane@acme-insurance.co.ke", "Wrong1234")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            authenticate(self.db, "nobody@acme-insurance.co.ke", "Secret123")
        self.assertEqual(wrong_pw.exception.message, INVALID_CREDENTIALS_MESSAGE)
        self.assertEqual(unknown.exception.message, wrong_pw.exception.message)


if __name__ == "__main__":
    unittest.main()
