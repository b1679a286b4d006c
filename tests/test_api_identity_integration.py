from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from collections.abc import AsyncGenerator
from pathlib import Path
from uuid import UUID

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.app import create_app
from api.config.settings import Settings, get_settings
from api.db import models as _models
from api.db.models import User
from api.db.session import get_session

del _models


class TestApiIdentityIntegration(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(cls.tmpdir.name) / "identity_integration.db"
        cls.database_url = f"sqlite+aiosqlite:///{db_path}"
        cls.engine = create_async_engine(cls.database_url, echo=False)
        cls.sessionmaker = async_sessionmaker(
            bind=cls.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async def _init_db() -> None:
            async with cls.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        asyncio.run(_init_db())

        cls.settings = Settings(
            database_url=cls.database_url,
            auth_jwt_secret="identity-integration-secret-0123456789ab",
            app_log_json=False,
            app_log_requests=False,
        )
        app = create_app(cls.settings)

        async def _get_session_override() -> AsyncGenerator[AsyncSession, None]:
            async with cls.sessionmaker() as session:
                try:
                    yield session
                except Exception:
                    await session.rollback()
                    raise

        app.dependency_overrides[get_session] = _get_session_override
        app.dependency_overrides[get_settings] = lambda: cls.settings
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()

        async def _dispose() -> None:
            await cls.engine.dispose()

        asyncio.run(_dispose())
        cls.tmpdir.cleanup()

    def test_member_directory_and_handicaps(self) -> None:
        admin = self._register_and_login("id-admin", "id-admin@example.com", "Zed Admin")
        self._promote_user_to_admin(admin["user_id"])

        user_a = self._register_and_login("id-user-a", "id-user-a@example.com", "amy Alpha")
        user_b = self._register_and_login("id-user-b", "id-user-b@example.com", "Ben Beta")

        get_other = self.client.get(
            f"/api/v1/users/{user_b['user_id']}",
            headers={"Authorization": f"Bearer {user_a['access_token']}"},
        )
        self.assertEqual(get_other.status_code, 200)
        self.assertEqual(get_other.json()["name"], "Ben Beta")
        self.assertEqual(get_other.json()["strokes_given"], 0)

        list_resp = self.client.get(
            "/api/v1/users?limit=10",
            headers={"Authorization": f"Bearer {user_a['access_token']}"},
        )
        self.assertEqual(list_resp.status_code, 200)
        page = list_resp.json()
        self.assertGreaterEqual(page["total"], 3)
        names = [row["name"] for row in page["items"]]
        self.assertEqual(names, sorted(names, key=str.lower))

        forbidden = self.client.patch(
            f"/api/v1/users/{user_b['user_id']}/handicap",
            json={"strokes_given": 12},
            headers={"Authorization": f"Bearer {user_a['access_token']}"},
        )
        self.assertEqual(forbidden.status_code, 403)

        updated = self.client.patch(
            f"/api/v1/users/{user_b['user_id']}/handicap",
            json={"strokes_given": 12},
            headers={"Authorization": f"Bearer {admin['access_token']}"},
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["strokes_given"], 12)

        too_high = self.client.patch(
            f"/api/v1/users/{user_b['user_id']}/handicap",
            json={"strokes_given": self.settings.league_max_strokes_given + 1},
            headers={"Authorization": f"Bearer {admin['access_token']}"},
        )
        self.assertEqual(too_high.status_code, 422)
        self.assertEqual(too_high.json()["error_code"], "validation_error")

    def test_get_user_not_found(self) -> None:
        member = self._register_and_login("id-member", "id-member@example.com", "Member")
        missing = "00000000-0000-0000-0000-000000000001"
        resp = self.client.get(
            f"/api/v1/users/{missing}",
            headers={"Authorization": f"Bearer {member['access_token']}"},
        )
        self.assertEqual(resp.status_code, 404)
        self.assertIn("User not found", resp.json()["detail"])

    def _register_and_login(self, username: str, email: str, name: str) -> dict[str, str]:
        register = self.client.post(
            "/api/v1/auth/register",
            json={
                "username": username,
                "email": email,
                "name": name,
                "password": "supersecret123",
            },
        )
        self.assertEqual(register.status_code, 201)
        user_id = register.json()["id"]

        login = self.client.post(
            "/api/v1/auth/login",
            json={"username_or_email": username, "password": "supersecret123"},
        )
        self.assertEqual(login.status_code, 200)
        return {"user_id": user_id, "access_token": login.json()["access_token"]}

    def _promote_user_to_admin(self, user_id: str) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                user = await session.get(User, UUID(user_id))
                if user is None:
                    raise AssertionError("User not found for admin promotion")
                user.is_admin = True
                session.add(user)
                await session.commit()

        asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
