"""Authentication routes (register, login, me, change-password)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_account_repo
from api.models import (
    AccountResponse,
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from api.security import get_current_account_required, get_token_issuer
from domain.model.account import Account
from port.account_repository import AccountRepository
from services import auth_service
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: AccountRepository = Depends(get_account_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Register a new account.

    Raises:
        409 if username or email is already taken
    """
    result = auth_service.register(repo, tokens, request.username, request.email, request.password)
    return AuthResponse(token=result.token, user=AccountResponse.from_domain(result.account))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    repo: AccountRepository = Depends(get_account_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Login and return a bearer token.

    Raises:
        400 "Invalid credentials" for an unknown user or wrong password
        403 if the account is deactivated
    """
    result = auth_service.login(repo, tokens, request.username, request.password)
    return AuthResponse(token=result.token, user=AccountResponse.from_domain(result.account))


@router.get("/me", response_model=AccountResponse)
async def get_me(current: Account = Depends(get_current_account_required)):
    """Get the authenticated account."""
    return AccountResponse.from_domain(auth_service.get_self(current))


@router.patch("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    """Change the caller's password; also clears a pending forced change."""
    auth_service.change_password(repo, current, request.current_password, request.new_password)
    return MessageResponse(message="Password changed successfully")
