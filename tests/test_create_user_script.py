"""Tests for the create_user bootstrap CLI."""

import contextlib
import io
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userdesk.core.config import settings
from userdesk.models import Base, User
from userdesk.scripts import create_user


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False)
        for patcher in (
            patch.object(create_user, "SessionLocal", self.SessionLocal),
            patch.object(settings, "BCRYPT_ROUNDS", 4),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)

    def _users(self) -> list[User]:
        db = self.SessionLocal()
        try:
            return db.query(User).all()
        finally:
            db.close()

    def test_creates_admin(self) -> None:
        code = create_user.main(["Site Admin", "admin@example.com", "Password123!", "admin"])
        self.assertEqual(code, 0)
        users = self._users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].role, "admin")
        self.assertEqual(users[0].status, "active")
        self.assertNotEqual(users[0].password_hash, "Password123!")

    def test_duplicate_email_fails(self) -> None:
        create_user.main(["Site Admin", "admin@example.com", "Password123!", "admin"])
        with contextlib.redirect_stderr(io.StringIO()) as err:
            code = create_user.main(["Other Admin", "admin@example.com", "Password123!"])
        self.assertEqual(code, 1)
        self.assertIn("already exists", err.getvalue())
        self.assertEqual(len(self._users()), 1)

    def test_weak_password_fails(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()) as err:
            code = create_user.main(["Site Admin", "admin@example.com", "password"])
        self.assertEqual(code, 1)
        self.assertIn("password", err.getvalue())
        self.assertEqual(self._users(), [])
