# domain/model/game.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class GameCategory(str, Enum):
    """Tip categories an admin can file a prediction under."""
    ALL_TIPS = 'All Tips'
    SURE_TIPS = 'Sure Tips'
    OVER_UNDER_TIPS = 'Over/Under Tips'
    BONUS = 'Bonus'
    VIP_TIPS = 'VIP Tips'


class GameResult(str, Enum):
    """Outcome of a prediction once the match is played."""
    WIN = 'win'
    LOSS = 'loss'


# ── Game Domain Model ────────────────────────────────────


@dataclass
class Game:
    """Domain model representing an admin-posted prediction.

    ``result`` is None until an admin records the outcome.
    """
    id: str
    home_team: str
    away_team: str
    prediction: str
    odds: float
    category: GameCategory
    match_time: datetime
    posted_by: str
    created_at: datetime
    updated_at: datetime
    result: GameResult | None = None

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        home_team: str,
        away_team: str,
        prediction: str,
        odds: float,
        category: GameCategory,
        match_time: datetime,
        posted_by: str,
    ) -> 'Game':
        """Create a pending Game with a generated ID."""
        now = datetime.now(timezone.utc)
        return Game(
            id=str(uuid.uuid4()),
            home_team=home_team.strip(),
            away_team=away_team.strip(),
            prediction=prediction.strip(),
            odds=odds,
            category=category,
            match_time=match_time,
            posted_by=posted_by,
            created_at=now,
            updated_at=now,
        )

    # ── queries ───────────────────────────────────────────

    @property
    def is_vip(self) -> bool:
        return self.category == GameCategory.VIP_TIPS

    @property
    def is_completed(self) -> bool:
        return self.result is not None

    @property
    def match_label(self) -> str:
        return f"{self.home_team} vs {self.away_team}"


@dataclass(frozen=True)
class CategoryStats:
    category: str
    count: int
    won: int
    lost: int


@dataclass(frozen=True)
class GameStats:
    """Win/loss summary across all posted games."""
    total_games: int
    won_games: int
    lost_games: int
    categories: list[CategoryStats] = field(default_factory=list)

    @property
    def completed_games(self) -> int:
        return self.won_games + self.lost_games

    @property
    def pending_games(self) -> int:
        return self.total_games - self.completed_games

    @property
    def win_rate(self) -> float:
        if self.completed_games == 0:
            return 0.0
        return round(self.won_games / self.completed_games * 100, 1)
