"""Admin routes for account management.

Endpoints:
- GET /admin/users: list all accounts
- PATCH /admin/users/{id}/vip: grant or remove VIP with ``{"hasPaid": bool}``
- POST /admin/users/{id}/vip: grant VIP for ``durationDays``
- DELETE /admin/users/{id}/vip: revoke VIP
- POST|DELETE /admin/users/{id}/block: block / unblock
- POST /admin/users/{id}/temporary-password: issue a one-time numeric password
- GET /admin/stats: account totals and VIP conversion
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_account_repo
from api.models import (
    AccountActionResponse,
    AccountResponse,
    AccountStatsResponse,
    GrantVipRequest,
    SetVipRequest,
    TemporaryPasswordResponse,
)
from api.security import get_current_account_required
from domain.model.account import Account
from port.account_repository import AccountRepository
from services import admin_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AccountResponse])
async def list_users(
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    return [AccountResponse.from_domain(a) for a in admin_service.list_accounts(repo, current)]


@router.patch("/users/{user_id}/vip", response_model=AccountActionResponse)
async def set_vip(
    user_id: str,
    request: SetVipRequest,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    account = admin_service.set_vip(repo, current, user_id, request.has_paid)
    verb = "granted" if request.has_paid else "removed"
    return AccountActionResponse(
        message=f"VIP status {verb} successfully",
        user=AccountResponse.from_domain(account),
    )


@router.post("/users/{user_id}/vip", response_model=AccountActionResponse)
async def grant_vip(
    user_id: str,
    request: Optional[GrantVipRequest] = None,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    request = request or GrantVipRequest()
    account = admin_service.grant_vip(repo, current, user_id, request.duration_days)
    return AccountActionResponse(
        message="VIP status granted successfully",
        user=AccountResponse.from_domain(account),
    )


@router.delete("/users/{user_id}/vip", response_model=AccountActionResponse)
async def revoke_vip(
    user_id: str,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    account = admin_service.revoke_vip(repo, current, user_id)
    return AccountActionResponse(
        message="VIP status removed successfully",
        user=AccountResponse.from_domain(account),
    )


@router.post("/users/{user_id}/block", response_model=AccountActionResponse)
async def block_user(
    user_id: str,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    account = admin_service.block(repo, current, user_id)
    return AccountActionResponse(message="User blocked", user=AccountResponse.from_domain(account))


@router.delete("/users/{user_id}/block", response_model=AccountActionResponse)
async def unblock_user(
    user_id: str,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    account = admin_service.unblock(repo, current, user_id)
    return AccountActionResponse(message="User unblocked", user=AccountResponse.from_domain(account))


@router.post("/users/{user_id}/temporary-password", response_model=TemporaryPasswordResponse)
async def issue_temporary_password(
    user_id: str,
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    """Reset a user's password to a random 6-digit code.

    The code is only ever returned in this response.
    """
    issued = admin_service.issue_temporary_password(repo, current, user_id)
    return TemporaryPasswordResponse(
        message="Temporary password issued. The user must change it after logging in.",
        temporary_password=issued.password,
        user=AccountResponse.from_domain(issued.account),
    )


@router.get("/stats", response_model=AccountStatsResponse)
async def get_stats(
    current: Account = Depends(get_current_account_required),
    repo: AccountRepository = Depends(get_account_repo),
):
    return AccountStatsResponse.from_domain(admin_service.account_stats(repo, current))
