# domain/model/account.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone

VIP_DURATION_DAYS = 30
MAX_VIP_DURATION_DAYS = 3650


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class VipMembership:
    """Paid VIP access window.

    Start, expiry and reference only ever exist together, so an account either
    has a complete membership or none at all.
    """
    start: datetime
    expiry: datetime
    reference: str | None = None

    @staticmethod
    def grant(now: datetime, duration_days: int = VIP_DURATION_DAYS) -> 'VipMembership':
        """Create a membership starting now with an admin-grant reference id."""
        return VipMembership(
            start=now,
            expiry=now + timedelta(days=duration_days),
            reference=f"ADMIN_GRANTED_{int(time.time() * 1000)}",
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expiry <= now


# ── Account Domain Model ─────────────────────────────────


@dataclass
class Account:
    """Domain model representing a registered user account."""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    password_hash: str | None = None
    is_admin: bool = False
    vip: VipMembership | None = None
    is_active: bool = True
    is_blocked: bool = False
    needs_password_change: bool = False

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        username: str,
        email: str,
        password_hash: str,
        is_admin: bool = False,
        vip: VipMembership | None = None,
    ) -> 'Account':
        """Create a new active Account with a generated ID."""
        now = datetime.now(timezone.utc)
        return Account(
            id=uuid.uuid4().hex,
            username=username,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
            is_admin=is_admin,
            vip=vip,
        )

    # ── queries ───────────────────────────────────────────

    @property
    def has_paid(self) -> bool:
        return self.vip is not None

    @property
    def vip_start_date(self) -> datetime | None:
        return self.vip.start if self.vip else None

    @property
    def vip_expiry_date(self) -> datetime | None:
        return self.vip.expiry if self.vip else None

    def has_active_vip(self, now: datetime | None = None) -> bool:
        """True when a membership exists and has not passed its expiry date."""
        if self.vip is None:
            return False
        return not self.vip.is_expired(now or datetime.now(timezone.utc))

    def is_same_account(self, other: 'Account | None') -> bool:
        return other is not None and other.id == self.id

    # ── state transitions ─────────────────────────────────
    # Each returns a new Account so a half-applied change is never visible.

    def with_vip(self, vip: VipMembership | None) -> 'Account':
        return replace(self, vip=vip, updated_at=datetime.now(timezone.utc))

    def with_blocked(self, blocked: bool) -> 'Account':
        return replace(self, is_blocked=blocked, updated_at=datetime.now(timezone.utc))

    def with_password(self, password_hash: str, needs_password_change: bool) -> 'Account':
        return replace(
            self,
            password_hash=password_hash,
            needs_password_change=needs_password_change,
            updated_at=datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class AccountStats:
    """Aggregate counts shown on the admin dashboard."""
    total_users: int
    vip_users: int

    @property
    def free_users(self) -> int:
        return self.total_users - self.vip_users

    @property
    def conversion_rate(self) -> float:
        """VIP share of all users as a percentage, rounded to one decimal."""
        if self.total_users == 0:
            return 0.0
        return round(self.vip_users / self.total_users * 100, 1)
