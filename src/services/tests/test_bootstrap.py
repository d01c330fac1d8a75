"""Tests for default admin bootstrap."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.account_repository import FakeAccountRepository
from domain.model.account import Account
from domain.model.errors import DuplicateError
from services.bootstrap import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    ensure_default_admin_exists,
)
from services.credentials import verify_password


class TestEnsureDefaultAdmin(unittest.TestCase):

    def test_creates_admin_on_empty_store(self):
        repo = FakeAccountRepository()

        admin = ensure_default_admin_exists(repo)

        self.assertEqual(admin.username, DEFAULT_ADMIN_USERNAME)
        self.assertTrue(admin.is_admin)
        self.assertTrue(admin.is_active)
        self.assertTrue(admin.has_paid)
        self.assertIsNotNone(admin.vip_expiry_date)
        self.assertTrue(verify_password(DEFAULT_ADMIN_PASSWORD, admin.password_hash))

    def test_second_run_is_noop(self):
        repo = FakeAccountRepository()
        first = ensure_default_admin_exists(repo)

        second = ensure_default_admin_exists(repo)

        self.assertEqual(first.id, second.id)
        self.assertEqual(repo.count(), 1)

    def test_existing_admin_left_untouched(self):
        repo = FakeAccountRepository()
        existing = repo.create(Account.create(DEFAULT_ADMIN_USERNAME, "ops@x.com", "custom-hash", is_admin=True))

        result = ensure_default_admin_exists(repo)

        self.assertIs(result, existing)
        self.assertEqual(result.password_hash, "custom-hash")

    def test_concurrent_creation_returns_winner(self):
        winner = Account.create(DEFAULT_ADMIN_USERNAME, "admin@x.com", "hash", is_admin=True)
        repo = MagicMock()
        repo.get_by_username.side_effect = [None, winner]
        repo.create.side_effect = DuplicateError("User already exists")

        self.assertIs(ensure_default_admin_exists(repo), winner)

    def test_duplicate_without_admin_propagates(self):
        repo = MagicMock()
        repo.get_by_username.return_value = None
        repo.create.side_effect = DuplicateError("User already exists")

        with self.assertRaises(DuplicateError):
            ensure_default_admin_exists(repo)


if __name__ == '__main__':
    unittest.main()
