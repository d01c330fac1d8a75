"""Tests for the health endpoint."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from api.main import app


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["services"]["mongodb"]["status"], "healthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_ping_failure_is_degraded(self, mock_get_client):
        client = MagicMock()
        client.admin.command.side_effect = PyMongoError("timeout")
        mock_get_client.return_value = client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")

    @patch('api.routes.health.get_mongodb_client')
    def test_no_client_is_degraded(self, mock_get_client):
        mock_get_client.return_value = None

        self.assertEqual(self.client.get("/health").status_code, 503)


if __name__ == '__main__':
    unittest.main()
