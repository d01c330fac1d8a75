"""Startup reconciliation: make sure a default admin account exists.

Called once from the application lifespan. Running it again is a no-op.

The default password is fixed and publicly known. Operators must change it
after first start; nothing here forces that.
"""

import logging
from datetime import datetime, timezone

from domain.model.account import Account, VipMembership, MAX_VIP_DURATION_DAYS
from domain.model.errors import DomainError, DuplicateError
from port.account_repository import AccountRepository
from services.credentials import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_EMAIL = "admin@betatips.com.ng"
DEFAULT_ADMIN_PASSWORD = "admin123"

# Admins see VIP content regardless; the membership keeps has_paid consistent with its dates
ADMIN_VIP_DAYS = MAX_VIP_DURATION_DAYS


def ensure_default_admin_exists(repo: AccountRepository) -> Account:
    """Return the ``admin`` account, creating it first if it is missing."""
    existing = repo.get_by_username(DEFAULT_ADMIN_USERNAME)
    if existing:
        logger.info("Admin account already exists", extra={
            "accountId": existing.id,
            "isAdmin": existing.is_admin,
            "hasPaid": existing.has_paid,
            "isActive": existing.is_active,
        })
        return existing

    admin = Account.create(
        username=DEFAULT_ADMIN_USERNAME,
        email=DEFAULT_ADMIN_EMAIL,
        password_hash=hash_password(DEFAULT_ADMIN_PASSWORD),
        is_admin=True,
        vip=VipMembership.grant(datetime.now(timezone.utc), ADMIN_VIP_DAYS),
    )
    try:
        created = repo.create(admin)
    except DuplicateError:
        # Another process created it between our check and insert
        concurrent = repo.get_by_username(DEFAULT_ADMIN_USERNAME)
        if concurrent:
            return concurrent
        raise
    if not created:
        raise DomainError("Failed to create default admin account")

    logger.warning(
        "Default admin account created with the built-in password; change it immediately",
        extra={"accountId": created.id, "username": DEFAULT_ADMIN_USERNAME},
    )
    return created
