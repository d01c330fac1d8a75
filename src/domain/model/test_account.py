"""Unit tests for Account domain model: VIP membership and state transitions.

Tests focus on the invariants other layers rely on:
- has_paid and the VIP dates always agree (grant/revoke atomicity)
- transitions return new objects and leave unrelated fields alone
- lazy VIP expiry check
"""

import unittest
from datetime import datetime, timedelta, timezone

from domain.model.account import Account, AccountStats, VipMembership


def _make_account(**kwargs) -> Account:
    account = Account.create(username='alice', email='a@x.com', password_hash='hash')
    for key, value in kwargs.items():
        setattr(account, key, value)
    return account


class TestAccountCreate(unittest.TestCase):

    def test_create_applies_defaults(self):
        """A new account is active, not admin, not VIP, not blocked."""
        account = _make_account()

        self.assertTrue(account.is_active)
        self.assertFalse(account.is_admin)
        self.assertFalse(account.has_paid)
        self.assertIsNone(account.vip_start_date)
        self.assertIsNone(account.vip_expiry_date)
        self.assertFalse(account.is_blocked)
        self.assertFalse(account.needs_password_change)
        self.assertEqual(len(account.id), 32)

    def test_create_generates_unique_ids(self):
        self.assertNotEqual(_make_account().id, _make_account().id)


class TestVipMembership(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_grant_sets_window_and_reference(self):
        vip = VipMembership.grant(self.now, 30)

        self.assertEqual(vip.start, self.now)
        self.assertEqual(vip.expiry, self.now + timedelta(days=30))
        self.assertTrue(vip.reference.startswith('ADMIN_GRANTED_'))

    def test_with_vip_sets_flag_and_dates_together(self):
        account = _make_account().with_vip(VipMembership.grant(self.now))

        self.assertTrue(account.has_paid)
        self.assertEqual(account.vip_start_date, self.now)
        self.assertIsNotNone(account.vip_expiry_date)

    def test_with_vip_none_clears_flag_and_dates_together(self):
        account = _make_account().with_vip(VipMembership.grant(self.now)).with_vip(None)

        self.assertFalse(account.has_paid)
        self.assertIsNone(account.vip_start_date)
        self.assertIsNone(account.vip_expiry_date)

    def test_has_active_vip_false_after_expiry(self):
        """Expiry is checked lazily: flag stays set but access lapses."""
        account = _make_account().with_vip(VipMembership.grant(self.now, 30))

        self.assertTrue(account.has_active_vip(self.now + timedelta(days=29)))
        self.assertFalse(account.has_active_vip(self.now + timedelta(days=30)))
        self.assertTrue(account.has_paid)

    def test_has_active_vip_false_without_membership(self):
        self.assertFalse(_make_account().has_active_vip(self.now))


class TestTransitions(unittest.TestCase):

    def test_transitions_do_not_mutate_original(self):
        original = _make_account()

        blocked = original.with_blocked(True)

        self.assertTrue(blocked.is_blocked)
        self.assertFalse(original.is_blocked)

    def test_with_password_keeps_vip_and_block_state(self):
        """A password change never clobbers unrelated fields."""
        now = datetime.now(timezone.utc)
        account = _make_account().with_vip(VipMembership.grant(now)).with_blocked(True)

        updated = account.with_password('new-hash', needs_password_change=True)

        self.assertEqual(updated.password_hash, 'new-hash')
        self.assertTrue(updated.needs_password_change)
        self.assertTrue(updated.has_paid)
        self.assertTrue(updated.is_blocked)
        self.assertEqual(updated.vip, account.vip)


class TestAccountStats(unittest.TestCase):

    def test_conversion_rate_rounded_to_one_decimal(self):
        stats = AccountStats(total_users=3, vip_users=1)

        self.assertEqual(stats.free_users, 2)
        self.assertEqual(stats.conversion_rate, 33.3)

    def test_conversion_rate_zero_without_users(self):
        self.assertEqual(AccountStats(total_users=0, vip_users=0).conversion_rate, 0.0)


if __name__ == '__main__':
    unittest.main()
