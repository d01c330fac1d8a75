"""Admin service: account management transitions.

Every call re-checks the live actor against the policy, so a stale admin
claim inside a token never grants anything.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.account import (
    Account,
    AccountStats,
    VipMembership,
    MAX_VIP_DURATION_DAYS,
    VIP_DURATION_DAYS,
)
from domain.model.errors import DomainError, NotFoundError, ValidationError
from domain.model.policy import Action, authorize
from port.account_repository import AccountRepository
from services.credentials import generate_temporary_password, hash_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemporaryPassword:
    """Plaintext code returned once to the admin for out-of-band delivery."""
    account: Account
    password: str


def _get_target(repo: AccountRepository, target_id: str) -> Account:
    target = repo.get_by_id(target_id)
    if not target:
        raise NotFoundError("User not found")
    return target


def _applied(updated: Account | None, target_id: str) -> Account:
    # The target existed a moment ago, so None here means the write failed
    if updated is None:
        raise DomainError(f"Failed to update account {target_id}")
    return updated


def list_accounts(repo: AccountRepository, actor: Account) -> list[Account]:
    authorize(Action.LIST_USERS, actor)
    accounts = repo.list_all()
    logger.info("Admin listed accounts", extra={
        "accountId": actor.id,
        "count": len(accounts),
        "vipCount": sum(1 for a in accounts if a.has_paid),
    })
    return accounts


def grant_vip(
    repo: AccountRepository,
    actor: Account,
    target_id: str,
    duration_days: int = VIP_DURATION_DAYS,
) -> Account:
    """Start a VIP membership of ``duration_days`` from now, replacing any current one."""
    authorize(Action.GRANT_VIP, actor)
    if not 1 <= duration_days <= MAX_VIP_DURATION_DAYS:
        raise ValidationError(
            f"durationDays must be between 1 and {MAX_VIP_DURATION_DAYS}", field="durationDays"
        )
    _get_target(repo, target_id)

    vip = VipMembership.grant(datetime.now(timezone.utc), duration_days)
    updated = _applied(repo.set_vip(target_id, vip), target_id)

    logger.info("VIP granted", extra={
        "accountId": target_id,
        "grantedBy": actor.id,
        "expiresAt": vip.expiry.isoformat(),
    })
    return updated


def revoke_vip(repo: AccountRepository, actor: Account, target_id: str) -> Account:
    """Clear the VIP flag, both dates and the reference together."""
    authorize(Action.REVOKE_VIP, actor)
    _get_target(repo, target_id)

    updated = _applied(repo.set_vip(target_id, None), target_id)
    logger.info("VIP revoked", extra={"accountId": target_id, "revokedBy": actor.id})
    return updated


def set_vip(repo: AccountRepository, actor: Account, target_id: str, has_paid: bool) -> Account:
    if has_paid:
        return grant_vip(repo, actor, target_id)
    return revoke_vip(repo, actor, target_id)


def block(repo: AccountRepository, actor: Account, target_id: str) -> Account:
    """Suspend an account. Blocking a blocked account is a no-op success."""
    return _set_blocked(repo, actor, target_id, True)


def unblock(repo: AccountRepository, actor: Account, target_id: str) -> Account:
    return _set_blocked(repo, actor, target_id, False)


def _set_blocked(repo: AccountRepository, actor: Account, target_id: str, blocked: bool) -> Account:
    authorize(Action.BLOCK_USER if blocked else Action.UNBLOCK_USER, actor)
    target = _get_target(repo, target_id)
    if target.is_blocked == blocked:
        return target

    updated = _applied(repo.set_blocked(target_id, blocked), target_id)
    logger.info("Account blocked" if blocked else "Account unblocked",
                extra={"accountId": target_id, "changedBy": actor.id})
    return updated


def issue_temporary_password(repo: AccountRepository, actor: Account, target_id: str) -> TemporaryPassword:
    """Replace the target's password with a random 6-digit code and force a change."""
    authorize(Action.ISSUE_TEMP_PASSWORD, actor)
    _get_target(repo, target_id)

    code = generate_temporary_password()
    updated = _applied(
        repo.update_password(target_id, hash_password(code), needs_password_change=True),
        target_id,
    )

    logger.info("Temporary password issued", extra={"accountId": target_id, "issuedBy": actor.id})
    return TemporaryPassword(account=updated, password=code)


def account_stats(repo: AccountRepository, actor: Account) -> AccountStats:
    authorize(Action.VIEW_USER_STATS, actor)
    stats = AccountStats(total_users=repo.count(), vip_users=repo.count(vip_only=True))
    logger.info("Admin stats requested", extra={
        "totalUsers": stats.total_users,
        "vipUsers": stats.vip_users,
    })
    return stats
