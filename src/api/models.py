"""Pydantic models for API request/response.

JSON keys are camelCase (``hasPaid``, ``vipExpiryDate``) to match the
existing web client; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from domain.model.account import Account, AccountStats, MAX_VIP_DURATION_DAYS
from domain.model.game import Game, GameStats


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── auth ─────────────────────────────────────────────────


class RegisterRequest(CamelModel):
    """Request model for account registration."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    """Request model for login."""
    username: str
    password: str


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AccountResponse(CamelModel):
    """Account as seen by its owner or an admin. Never carries the password hash."""
    id: str
    username: str
    email: str
    is_admin: bool
    has_paid: bool
    vip_start_date: Optional[datetime] = None
    vip_expiry_date: Optional[datetime] = None
    is_active: bool
    is_blocked: bool
    needs_password_change: bool
    created_at: datetime

    @staticmethod
    def from_domain(account: Account) -> 'AccountResponse':
        return AccountResponse(
            id=account.id,
            username=account.username,
            email=account.email,
            is_admin=account.is_admin,
            has_paid=account.has_paid,
            vip_start_date=account.vip_start_date,
            vip_expiry_date=account.vip_expiry_date,
            is_active=account.is_active,
            is_blocked=account.is_blocked,
            needs_password_change=account.needs_password_change,
            created_at=account.created_at,
        )


class AuthResponse(CamelModel):
    """Response model for register/login."""
    token: str
    user: AccountResponse


class MessageResponse(CamelModel):
    message: str


# ── admin ────────────────────────────────────────────────


class SetVipRequest(CamelModel):
    has_paid: bool


class GrantVipRequest(CamelModel):
    duration_days: int = Field(
        30, ge=1, le=MAX_VIP_DURATION_DAYS, description="Length of the VIP membership in days"
    )


class AccountActionResponse(CamelModel):
    message: str
    user: AccountResponse


class TemporaryPasswordResponse(CamelModel):
    message: str
    temporary_password: str = Field(..., description="Shown once; deliver out of band")
    user: AccountResponse


class AccountStatsResponse(CamelModel):
    total_users: int
    vip_users: int
    free_users: int
    conversion_rate: float

    @staticmethod
    def from_domain(stats: AccountStats) -> 'AccountStatsResponse':
        return AccountStatsResponse(
            total_users=stats.total_users,
            vip_users=stats.vip_users,
            free_users=stats.free_users,
            conversion_rate=stats.conversion_rate,
        )


# ── games ────────────────────────────────────────────────


class GameCreateRequest(CamelModel):
    """All fields optional here so missing ones get the service's 400 message."""
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    prediction: Optional[str] = None
    odds: Optional[float] = None
    category: Optional[str] = None
    match_time: Optional[datetime] = None


class GameResultRequest(CamelModel):
    result: Optional[str] = None


class GameResponse(CamelModel):
    id: str
    home_team: str
    away_team: str
    prediction: str
    odds: float
    category: str
    match_time: datetime
    result: Optional[str] = Field(None, description="win, loss, or absent while pending")
    posted_by: str
    created_at: datetime

    @staticmethod
    def from_domain(game: Game) -> 'GameResponse':
        return GameResponse(
            id=game.id,
            home_team=game.home_team,
            away_team=game.away_team,
            prediction=game.prediction,
            odds=game.odds,
            category=game.category.value,
            match_time=game.match_time,
            result=game.result.value if game.result else None,
            posted_by=game.posted_by,
            created_at=game.created_at,
        )


class GameActionResponse(CamelModel):
    message: str
    game: GameResponse


class CategoryStatsResponse(CamelModel):
    category: str
    count: int
    won: int
    lost: int


class GameStatsResponse(CamelModel):
    total_games: int
    completed_games: int
    pending_games: int
    won_games: int
    lost_games: int
    win_rate: float
    categories_stats: list[CategoryStatsResponse]

    @staticmethod
    def from_domain(stats: GameStats) -> 'GameStatsResponse':
        return GameStatsResponse(
            total_games=stats.total_games,
            completed_games=stats.completed_games,
            pending_games=stats.pending_games,
            won_games=stats.won_games,
            lost_games=stats.lost_games,
            win_rate=stats.win_rate,
            categories_stats=[
                CategoryStatsResponse(category=c.category, count=c.count, won=c.won, lost=c.lost)
                for c in stats.categories
            ],
        )
