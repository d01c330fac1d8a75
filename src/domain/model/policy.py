"""Authorization policy: who may do what.

Pure decision functions over the live Account state. No I/O, no HTTP.
Services call ``authorize()`` before applying a transition; the API layer
never decides access on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from domain.model.account import Account
from domain.model.errors import (
    AuthenticationError,
    DenyReason,
    PermissionDeniedError,
    ValidationError,
)
from domain.model.game import Game

MIN_PASSWORD_LENGTH = 6


class Action(str, Enum):
    REGISTER = 'register'
    LOGIN = 'login'
    VIEW_SELF = 'view-self'
    CHANGE_PASSWORD = 'change-password'

    VIEW_GAMES = 'view-games'
    VIEW_ALL_GAMES = 'view-all-games'
    VIEW_VIP_GAMES = 'view-vip-games'
    CREATE_GAME = 'create-game'
    UPDATE_GAME = 'update-game'
    DELETE_GAME = 'delete-game'
    VIEW_GAME_STATS = 'view-game-stats'

    LIST_USERS = 'list-users'
    VIEW_USER_STATS = 'view-user-stats'
    GRANT_VIP = 'grant-vip'
    REVOKE_VIP = 'revoke-vip'
    BLOCK_USER = 'block-user'
    UNBLOCK_USER = 'unblock-user'
    ISSUE_TEMP_PASSWORD = 'issue-temp-password'

    CREATE_POST = 'create-post'
    DELETE_OWN_POST = 'delete-own-post'
    DELETE_ANY_POST = 'delete-any-post'


PUBLIC_ACTIONS = frozenset({Action.REGISTER, Action.LOGIN})

ADMIN_ACTIONS = frozenset({
    Action.CREATE_GAME,
    Action.UPDATE_GAME,
    Action.DELETE_GAME,
    Action.VIEW_GAME_STATS,
    Action.LIST_USERS,
    Action.VIEW_USER_STATS,
    Action.GRANT_VIP,
    Action.REVOKE_VIP,
    Action.BLOCK_USER,
    Action.UNBLOCK_USER,
    Action.ISSUE_TEMP_PASSWORD,
    Action.DELETE_ANY_POST,
})

# Owner of the target, or an admin.
SELF_SERVICE_ACTIONS = frozenset({
    Action.CHANGE_PASSWORD,
    Action.CREATE_POST,
    Action.DELETE_OWN_POST,
})

# Actions a blocked account may still perform.
BLOCKED_ALLOWED_ACTIONS = frozenset({Action.VIEW_SELF})


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check."""
    allowed: bool
    reason: DenyReason | None = None

    @staticmethod
    def allow() -> 'Decision':
        return Decision(allowed=True)

    @staticmethod
    def deny(reason: DenyReason) -> 'Decision':
        return Decision(allowed=False, reason=reason)

    def raise_for_denial(self) -> None:
        """Raise the domain error matching this decision, if denied."""
        if self.allowed:
            return
        if self.reason == DenyReason.UNAUTHENTICATED:
            raise AuthenticationError("Not authenticated")
        raise PermissionDeniedError(self.reason)


def can_perform(action: Action, actor: Account | None, target: Account | None = None) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``target``.

    Deactivation is checked before blocking, so an account that is both
    reports as deactivated.
    """
    if action in PUBLIC_ACTIONS:
        return Decision.allow()

    if actor is None:
        return Decision.deny(DenyReason.UNAUTHENTICATED)

    if not actor.is_active:
        return Decision.deny(DenyReason.DEACTIVATED)

    if actor.is_blocked and action not in BLOCKED_ALLOWED_ACTIONS:
        return Decision.deny(DenyReason.BLOCKED)

    if action in ADMIN_ACTIONS and not actor.is_admin:
        return Decision.deny(DenyReason.FORBIDDEN)

    if action in SELF_SERVICE_ACTIONS:
        owner = target or actor
        if not (actor.is_same_account(owner) or actor.is_admin):
            return Decision.deny(DenyReason.FORBIDDEN)

    return Decision.allow()


def authorize(action: Action, actor: Account | None, target: Account | None = None) -> None:
    """Raise AuthenticationError or PermissionDeniedError unless allowed."""
    can_perform(action, actor, target).raise_for_denial()


# ── VIP visibility ───────────────────────────────────────


def can_view_vip_content(actor: Account, now: datetime | None = None) -> bool:
    """Admins always see VIP content; members only while their VIP is unexpired."""
    return actor.is_admin or actor.has_active_vip(now or datetime.now(timezone.utc))


def visible_games(actor: Account, games: Iterable[Game], now: datetime | None = None) -> list[Game]:
    """Filter out VIP games for actors without VIP access, keeping order."""
    if can_view_vip_content(actor, now):
        return list(games)
    return [g for g in games if not g.is_vip]


# ── credential rules ─────────────────────────────────────


def validate_new_password(password: str | None, field: str = 'newPassword') -> None:
    if not password:
        raise ValidationError("Password is required", field=field)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
            field=field,
        )
