"""Bearer-token authentication dependencies."""

import os
import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_account_repo
from domain.model.account import Account
from port.account_repository import AccountRepository
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

security = HTTPBearer(auto_error=False)

_token_issuer = TokenIssuer(JWT_SECRET_KEY, timedelta(hours=JWT_EXPIRATION_HOURS))

INVALID_TOKEN_DETAIL = "Invalid authentication credentials"


def get_token_issuer() -> TokenIssuer:
    return _token_issuer


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_account_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenIssuer = Depends(get_token_issuer),
    repo: AccountRepository = Depends(get_account_repo),
) -> Account:
    """Resolve the bearer token to the live Account.

    The account is always re-read from storage, so admin/VIP/block changes
    take effect immediately instead of at token expiry. Whether the account
    may act at all is decided later by the policy.
    """
    if not credentials:
        raise _unauthorized("Not authenticated")

    claims = tokens.verify(credentials.credentials)
    if not claims:
        raise _unauthorized(INVALID_TOKEN_DETAIL)

    account = repo.get_by_id(claims.account_id)
    if not account:
        logger.info("Token for unknown account", extra={"accountId": claims.account_id})
        raise _unauthorized(INVALID_TOKEN_DETAIL)

    return account
