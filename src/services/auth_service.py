"""Auth service: registration, login and self-service password changes.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.
"""

import logging
from dataclasses import dataclass

from domain.model.account import Account
from domain.model.errors import (
    DenyReason,
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    PermissionDeniedError,
    ValidationError,
)
from domain.model.policy import Action, authorize, validate_new_password
from port.account_repository import AccountRepository
from services.credentials import dummy_password_hash, hash_password, verify_password
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


@dataclass(frozen=True)
class AuthResult:
    account: Account
    token: str


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value


def register(
    repo: AccountRepository,
    tokens: TokenIssuer,
    username: str,
    email: str,
    password: str,
) -> AuthResult:
    """Register a new account and issue its first token.

    Raises:
        ValidationError: a required field is missing
        DuplicateError: username or email already taken
    """
    username = _require(username, "username").strip()
    email = _require(email, "email").strip()
    _require(password, "password")

    if repo.get_by_username(username) or repo.get_by_email(email):
        raise DuplicateError("User already exists")

    # A concurrent registration can still win the race; the unique index
    # turns that into DuplicateError inside repo.create().
    account = repo.create(Account.create(username, email, hash_password(password)))
    if not account:
        raise DomainError("Failed to create account")

    logger.info("Account registered", extra={"accountId": account.id, "username": username})
    return AuthResult(account=account, token=tokens.issue(account.id, account.is_admin))


def login(repo: AccountRepository, tokens: TokenIssuer, username: str, password: str) -> AuthResult:
    """Authenticate by username and password.

    Unknown usernames and wrong passwords raise the same error. The
    deactivated state is only revealed once the password has verified.

    Raises:
        InvalidCredentialsError: unknown user or wrong password
        PermissionDeniedError: account deactivated
    """
    account = repo.get_by_username(username) if username else None
    stored_hash = account.password_hash if account else dummy_password_hash()
    password_ok = verify_password(password, stored_hash)
    if account is None or not password_ok:
        logger.info("Login failed", extra={"username": username})
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    if not account.is_active:
        logger.info("Login refused for deactivated account", extra={"accountId": account.id})
        raise PermissionDeniedError(DenyReason.DEACTIVATED)

    logger.info("Login successful", extra={"accountId": account.id, "isAdmin": account.is_admin})
    return AuthResult(account=account, token=tokens.issue(account.id, account.is_admin))


def get_self(actor: Account | None) -> Account:
    authorize(Action.VIEW_SELF, actor)
    return actor


def change_password(
    repo: AccountRepository,
    actor: Account | None,
    current_password: str,
    new_password: str,
) -> Account:
    """Change the actor's own password and clear any forced-change flag.

    The stored hash is untouched unless every check passes.

    Raises:
        ValidationError: missing fields or new password too short
        InvalidCredentialsError: current password does not verify
    """
    authorize(Action.CHANGE_PASSWORD, actor, actor)

    if not current_password or not new_password:
        raise ValidationError("Current password and new password are required")
    validate_new_password(new_password)

    if not verify_password(current_password, actor.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")

    updated = repo.update_password(actor.id, hash_password(new_password), needs_password_change=False)
    if not updated:
        raise DomainError("Failed to update password")

    logger.info("Password changed", extra={"accountId": actor.id})
    return updated
