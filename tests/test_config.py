"""Unit tests for kinship.core.config: required secret and value validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from kinship.core.config import Settings, get_settings
from kinship.main import create_app

SECRET = "unit-test-signing-secret-0123456789abcdef"


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"JWT_SECRET": SECRET, "DATABASE_URL": "sqlite://"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestJwtSecret(unittest.TestCase):
    """A missing or blank JWT_SECRET is fatal."""

    def test_missing_secret(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_read_from_environment(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": SECRET}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), SECRET)
        self.assertNotIn(SECRET, repr(settings))

    def test_app_refuses_to_start_without_secret(self) -> None:
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {}, clear=True), patch(
                "kinship.main.load_dotenv"
            ):
                with self.assertRaises(ValidationError):
                    create_app()
        finally:
            get_settings.cache_clear()


class TestValidators(unittest.TestCase):
    """Out-of-range values are rejected at load time."""

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://localhost/db")
        self.assertEqual(_settings(DATABASE_URL="  sqlite://  ").DATABASE_URL, "sqlite://")

    def test_expire_minutes_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=10081)

    def test_bcrypt_rounds_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        self.assertEqual(_settings(BCRYPT_ROUNDS=4).BCRYPT_ROUNDS, 4)

    def test_algorithm_must_be_hmac(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_session_check_off_by_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertFalse(_settings().AUTH_VERIFY_SESSION)
