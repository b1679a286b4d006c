from __future__ import annotations

import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.config import Settings


class TestApiSettingsSecurity(unittest.TestCase):
    _short_secret = "short-secret"  # noqa: S105
    _strong_secret = "this-is-a-very-strong-jwt-secret-12345"  # noqa: S105

    def test_non_production_allows_empty_jwt_secret(self) -> None:
        settings = Settings(app_env="development", auth_jwt_secret="")
        self.assertEqual(settings.app_env, "development")

    def test_production_rejects_empty_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(app_env="production", auth_jwt_secret="")

    def test_production_rejects_short_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(app_env="prod", auth_jwt_secret=self._short_secret)

    def test_production_accepts_strong_jwt_secret(self) -> None:
        settings = Settings(
            app_env="production",
            auth_jwt_secret=self._strong_secret,
        )
        self.assertEqual(settings.app_env, "production")

    def test_league_defaults(self) -> None:
        settings = Settings(app_env="development")
        self.assertEqual(settings.league_default_timezone, "America/New_York")
        self.assertEqual(settings.league_default_max_slots, 4)
        self.assertEqual(settings.league_booking_opens_days_before, 7)
        self.assertEqual(settings.league_booking_closes_time, "18:00")
        self.assertEqual(settings.league_max_strokes_given, 20)

    def test_sqlite_url_is_detected(self) -> None:
        self.assertTrue(Settings(database_url="sqlite+aiosqlite:///./league.db").uses_sqlite)
        self.assertFalse(Settings(database_url="postgresql+asyncpg://u:p@db/x").uses_sqlite)


if __name__ == "__main__":
    unittest.main()
