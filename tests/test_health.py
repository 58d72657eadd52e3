"""Tests for the health endpoint."""

import unittest
from unittest.mock import patch

from api_support import API, ApiTestCase


class TestHealth(ApiTestCase):
    def test_reports_database_connected(self) -> None:
        resp = self.client.get(f"{API}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok", "environment": "dev", "database": "connected"})

    @patch("app.api.v1.health.check_db_connected", return_value=False)
    def test_unreachable_database_still_200(self, _mock_check) -> None:
        resp = self.client.get(f"{API}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "disconnected")


if __name__ == "__main__":
    unittest.main()
