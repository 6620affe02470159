"""Unit tests for AccessGuard: authenticate (token to live user) and authorize (role membership)."""

import unittest
from datetime import UTC, datetime, timedelta

from pulsevote.core.security import TokenService
from pulsevote.models.user import Role, User
from pulsevote.repositories.users import UserRepository
from pulsevote.services.access import AccessGuard, AuthFailure
from support import FakeClock, add_user, make_session, make_settings


class TestAuthenticate(unittest.TestCase):
    def setUp(self) -> None:
        self.session, self.engine = make_session()
        self.clock = FakeClock()
        self.tokens = TokenService(make_settings())
        self.repo = UserRepository(self.session)
        self.guard = AccessGuard(self.repo, self.tokens, clock=self.clock)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def test_valid_token_for_live_user(self) -> None:
        user = add_user(self.session)
        result = self.guard.authenticate(self.tokens.issue(user.id))
        self.assertTrue(result.authenticated)
        self.assertEqual(result.user.id, user.id)
        self.assertIsNone(result.failure)

    def test_no_token(self) -> None:
        for token in (None, ""):
            result = self.guard.authenticate(token)
            self.assertFalse(result.authenticated)
            self.assertEqual(result.failure, AuthFailure.NO_TOKEN)

    def test_expired_token(self) -> None:
        user = add_user(self.session)
        token = self.tokens.issue(user.id, now=datetime.now(UTC) - timedelta(days=8))
        result = self.guard.authenticate(token)
        self.assertEqual(result.failure, AuthFailure.TOKEN_EXPIRED)
        self.assertIsNone(result.user)

    def test_token_from_other_key(self) -> None:
        user = add_user(self.session)
        other = TokenService(make_settings(JWT_SECRET="a-completely-different-signing-key-0000"))
        result = self.guard.authenticate(other.issue(user.id))
        self.assertEqual(result.failure, AuthFailure.TOKEN_INVALID)
        self.assertIsNone(result.user)

    def test_unknown_user(self) -> None:
        result = self.guard.authenticate(self.tokens.issue(999))
        self.assertEqual(result.failure, AuthFailure.USER_NOT_FOUND)

    def test_deactivated_account(self) -> None:
        user = add_user(self.session, is_active=False)
        result = self.guard.authenticate(self.tokens.issue(user.id))
        self.assertEqual(result.failure, AuthFailure.ACCOUNT_INACTIVE)
        self.assertIsNone(result.user)

    def test_inactive_checked_before_lock(self) -> None:
        user = add_user(
            self.session, is_active=False, lock_until=self.clock.now + timedelta(hours=1)
        )
        result = self.guard.authenticate(self.tokens.issue(user.id))
        self.assertEqual(result.failure, AuthFailure.ACCOUNT_INACTIVE)

    def test_locked_account(self) -> None:
        user = add_user(self.session, login_attempts=5, lock_until=self.clock.now + timedelta(hours=1))
        result = self.guard.authenticate(self.tokens.issue(user.id))
        self.assertEqual(result.failure, AuthFailure.ACCOUNT_LOCKED)

    def test_expired_lock_is_not_locked(self) -> None:
        user = add_user(self.session, login_attempts=5, lock_until=self.clock.now - timedelta(seconds=1))
        result = self.guard.authenticate(self.tokens.issue(user.id))
        self.assertTrue(result.authenticated)

    def test_does_not_touch_lockout_state(self) -> None:
        user = add_user(self.session, login_attempts=3)
        self.guard.authenticate(self.tokens.issue(user.id))
        self.guard.authenticate("garbage")
        self.session.expire_all()
        reloaded = self.repo.get_by_id(user.id)
        self.assertEqual(reloaded.login_attempts, 3)
        self.assertIsNone(reloaded.lock_until)


class TestAuthorize(unittest.TestCase):
    def _user(self, role: str) -> User:
        return User(id=1, username="u", email="u@x.com", password_hash="x", role=role)

    def test_admin_only(self) -> None:
        self.assertFalse(AccessGuard.authorize(self._user("user"), {"admin"}))
        self.assertTrue(AccessGuard.authorize(self._user("admin"), {"admin"}))

    def test_role_in_set_always_permits(self) -> None:
        for role in Role:
            self.assertTrue(AccessGuard.authorize(self._user(role.value), {role.value}))
            self.assertTrue(
                AccessGuard.authorize(self._user(role.value), {r.value for r in Role})
            )

    def test_moderator_set(self) -> None:
        allowed = {"moderator", "admin"}
        self.assertFalse(AccessGuard.authorize(self._user("user"), allowed))
        self.assertTrue(AccessGuard.authorize(self._user("moderator"), allowed))

    def test_empty_set_denies(self) -> None:
        self.assertFalse(AccessGuard.authorize(self._user("admin"), set()))

    def test_unknown_role_is_a_data_fault(self) -> None:
        with self.assertRaises(ValueError):
            AccessGuard.authorize(self._user("superuser"), {"admin"})


if __name__ == "__main__":
    unittest.main()
