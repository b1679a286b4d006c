from __future__ import annotations

import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.app import create_app
from api.config import Settings


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "app_name": "League Tee Sheet API (Test)",
        "app_env": "test",
        "app_docs_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class TestApiHealth(unittest.TestCase):
    def test_health_endpoint_returns_ok(self) -> None:
        client = TestClient(create_app(settings=_settings()))

        response = client.get("/health")
        self.assertEqual(response.status_code, 200)

        payload = response.json()
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["app"], "League Tee Sheet API (Test)")
        self.assertEqual(payload["env"], "test")

    def test_docs_disabled_hides_docs_routes(self) -> None:
        client = TestClient(create_app(settings=_settings()))

        self.assertEqual(client.get("/docs").status_code, 404)
        self.assertEqual(client.get("/redoc").status_code, 404)

    def test_ready_endpoint_reports_active_season(self) -> None:
        client = TestClient(create_app(settings=_settings()))
        with patch(
            "api.modules.health.router._count_active_seasons",
            new=AsyncMock(return_value=1),
        ):
            response = client.get("/health/ready")

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "ready")
        self.assertEqual(payload["checks"], {"db": True, "active_season": True})

    def test_ready_endpoint_without_active_season_is_still_ready(self) -> None:
        client = TestClient(create_app(settings=_settings()))
        with patch(
            "api.modules.health.router._count_active_seasons",
            new=AsyncMock(return_value=0),
        ):
            response = client.get("/health/ready")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["checks"]["active_season"], False)

    def test_ready_endpoint_returns_503_when_db_unreachable(self) -> None:
        client = TestClient(create_app(settings=_settings()), raise_server_exceptions=False)
        with patch(
            "api.modules.health.router._count_active_seasons",
            new=AsyncMock(side_effect=OSError("connection refused")),
        ):
            response = client.get("/health/ready")

        self.assertEqual(response.status_code, 503)
        payload = response.json()
        self.assertEqual(payload["error_code"], "service_unavailable")
        self.assertEqual(payload["detail"], "Database unavailable")

    def test_cors_headers_are_present_when_origins_configured(self) -> None:
        app = create_app(settings=_settings(app_cors_origins=["http://localhost:5173"]))
        client = TestClient(app)

        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.headers.get("access-control-allow-origin"),
            "http://localhost:5173",
        )

    def test_request_logging_emits_api_request_log(self) -> None:
        app = create_app(settings=_settings(app_log_requests=True, app_log_json=False))
        client = TestClient(app)

        with self.assertLogs("api.request", level="INFO") as captured:
            response = client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertIn("request_completed", "\n".join(captured.output))


if __name__ == "__main__":
    unittest.main()
