"""Auth service process tests."""

from __future__ import annotations

import os
import unittest
from datetime import datetime

from fastapi.testclient import TestClient

from authcore.core.config import get_settings
from authcore.main import create_app


class CoreHealthTests(unittest.TestCase):
    def test_health_reports_core_service(self) -> None:
        client = TestClient(create_app())

        response = client.get("/health")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["service"], "core")
        self.assertTrue(body["timestamp"].endswith("Z"))
        datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))

    def test_auth_operations_are_not_exposed_over_http(self) -> None:
        client = TestClient(create_app())

        response = client.post("/auth/signin", json={"email": "a@b.com", "password": "secret1"})

        self.assertEqual(response.status_code, 404)


class CoreCorsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._old_origins = os.environ.get("AUTHGATE_CORE_CORS_ORIGINS")
        get_settings.cache_clear()

    def tearDown(self) -> None:
        if self._old_origins is None:
            os.environ.pop("AUTHGATE_CORE_CORS_ORIGINS", None)
        else:
            os.environ["AUTHGATE_CORE_CORS_ORIGINS"] = self._old_origins
        get_settings.cache_clear()

    def test_preflight_from_any_origin_is_allowed_by_default(self) -> None:
        os.environ.pop("AUTHGATE_CORE_CORS_ORIGINS", None)
        client = TestClient(create_app())

        response = client.options(
            "/health",
            headers={"Origin": "capacitor://localhost", "Access-Control-Request-Method": "GET"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn(response.headers["access-control-allow-origin"], {"*", "capacitor://localhost"})

    def test_configured_origins_limit_cross_origin_reads(self) -> None:
        os.environ["AUTHGATE_CORE_CORS_ORIGINS"] = '["https://app.example.com"]'
        client = TestClient(create_app())

        allowed = client.get("/health", headers={"Origin": "https://app.example.com"})
        other = client.get("/health", headers={"Origin": "https://evil.example.com"})

        self.assertEqual(allowed.headers["access-control-allow-origin"], "https://app.example.com")
        self.assertNotIn("access-control-allow-origin", other.headers)


if __name__ == "__main__":
    unittest.main()
