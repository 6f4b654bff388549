"""Unit tests for kinship.services.sessions: logout preconditions and session clearing."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from kinship.core.database import Database
from kinship.core.security import PasswordHasher, TokenService
from kinship.services.auth import AuthenticationFlow
from kinship.services.errors import AuthenticationError, InternalError, NotFoundError
from kinship.services.sessions import SessionInvalidator
from kinship.services.users import UserRepository

SECRET = "unit-test-signing-secret-0123456789abcdef"


class TestLogout(unittest.TestCase):
    """Each logout step fails with its own error; success clears session_id."""

    def setUp(self) -> None:
        self.database = Database("sqlite://")
        self.database.create_all()
        self.session = self.database.SessionLocal()
        self.users = UserRepository(self.session)
        self.tokens = TokenService(secret=SECRET)
        self.flow = AuthenticationFlow(self.users, PasswordHasher(rounds=4), self.tokens)
        self.invalidator = SessionInvalidator(self.users, self.tokens)
        self.flow.register("alice", "secret123")
        self.token = self.flow.login("alice", "secret123")

    def tearDown(self) -> None:
        self.session.close()
        self.database.dispose()

    def test_clears_session_id(self) -> None:
        self.assertIsNotNone(self.users.get_by_name("alice").session_id)
        self.invalidator.logout(self.token)
        self.assertIsNone(self.users.get_by_name("alice").session_id)

    def test_log_lines_carry_user_and_reason(self) -> None:
        user_id = self.users.get_by_name("alice").id
        with self.assertLogs("kinship.services.sessions", level="INFO") as logs:
            self.invalidator.logout(self.token)
            with self.assertRaises(InternalError):
                self.invalidator.logout("garbage")
        self.assertIn(f"Logout succeeded: user_id={user_id}", logs.output[0])
        self.assertIn("Logout rejected: reason=malformed", logs.output[1])
        self.assertNotIn(self.token, "\n".join(logs.output))

    def test_repeat_logout_with_same_token_succeeds(self) -> None:
        # The stored session id is not compared on logout, only the password fingerprint.
        self.invalidator.logout(self.token)
        user = self.invalidator.logout(self.token)
        self.assertIsNone(user.session_id)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        self.invalidator.logout(f"  {self.token}  ")
        self.assertIsNone(self.users.get_by_name("alice").session_id)

    def test_missing_token(self) -> None:
        for token in (None, "", "   "):
            with self.subTest(token=token):
                with self.assertRaises(AuthenticationError) as ctx:
                    self.invalidator.logout(token)
                self.assertEqual(ctx.exception.status_code, 401)
                self.assertEqual(ctx.exception.message, "No token provided.")

    def test_undecodable_token_is_a_server_error(self) -> None:
        with self.assertRaises(InternalError) as ctx:
            self.invalidator.logout("garbage")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, "Failed to authenticate token.")

    def test_token_signed_with_other_secret(self) -> None:
        forged = TokenService(secret="another-secret-another-secret-1234").issue(
            1, "alice", "Admin", "s", "h"
        )
        with self.assertRaises(InternalError):
            self.invalidator.logout(forged)

    def test_unknown_user(self) -> None:
        token = self.tokens.issue(99, "ghost", "Viewer", "s", "h")
        with self.assertRaises(NotFoundError) as ctx:
            self.invalidator.logout(token)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "No user found.")

    def test_password_changed_since_issue(self) -> None:
        self.flow.update_account("alice", "new-password")
        with self.assertRaises(AuthenticationError) as ctx:
            self.invalidator.logout(self.token)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Invalid password.")

    def test_commit_failure_is_internal(self) -> None:
        stored = self.users.get_by_name("alice")
        users = MagicMock()
        users.get_by_name.return_value = stored
        users.save.side_effect = OperationalError("UPDATE", {}, Exception("down"))
        invalidator = SessionInvalidator(users, self.tokens)
        with self.assertRaises(InternalError) as ctx:
            invalidator.logout(self.token)
        self.assertEqual(ctx.exception.message, "Failed to end session")
