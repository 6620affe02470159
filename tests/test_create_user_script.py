"""Tests for the create_user admin script against a temporary SQLite file."""

import os
import tempfile
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pulsevote.core.security import verify_password
from pulsevote.models import Base, User
from pulsevote.scripts.create_user import create_user
from support import make_settings


class TestCreateUser(unittest.TestCase):
    def setUp(self) -> None:
        fd, self.path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        self.settings = make_settings(DATABASE_URL=f"sqlite:///{self.path}")
        self.engine = create_engine(self.settings.DATABASE_URL)
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def tearDown(self) -> None:
        self.engine.dispose()
        os.remove(self.path)

    def test_creates_admin(self) -> None:
        code, message = create_user(self.settings, "root", "AdminPw1", "Root@X.com", "admin")
        self.assertEqual(code, 0, message)
        with self.Session() as db:
            user = db.query(User).filter(User.username == "root").one()
            self.assertEqual(user.role, "admin")
            self.assertEqual(user.email, "root@x.com")
            self.assertTrue(verify_password("AdminPw1", user.password_hash))

    def test_rejects_duplicate(self) -> None:
        self.assertEqual(create_user(self.settings, "root", "AdminPw1", "root@x.com", "admin")[0], 0)
        code, _ = create_user(self.settings, "root", "AdminPw1", "other@x.com", "user")
        self.assertEqual(code, 1)

    def test_rejects_unknown_role(self) -> None:
        code, message = create_user(self.settings, "root", "AdminPw1", "root@x.com", "superuser")
        self.assertEqual(code, 1)
        self.assertIn("superuser", message)

    def test_rejects_short_password(self) -> None:
        code, message = create_user(self.settings, "root", "123", "root@x.com")
        self.assertEqual(code, 1)
        self.assertIn("6 characters", message)


if __name__ == "__main__":
    unittest.main()
