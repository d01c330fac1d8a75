"""Port definition for GameRepository."""

from datetime import datetime
from typing import Protocol

from domain.model.game import Game, GameResult, GameStats


class GameRepository(Protocol):
    """Game storage. None means not found; a failing store raises StorageError."""

    def save(self, game: Game) -> bool: ...

    def get_by_id(self, game_id: str) -> Game | None: ...

    def find_between(self, start: datetime, end: datetime) -> list[Game]:
        """Games with start <= match_time < end, earliest first."""
        ...

    def find_all(self) -> list[Game]:
        """All games, most recent match first."""
        ...

    def update_result(self, game_id: str, result: GameResult) -> Game | None: ...

    def delete(self, game_id: str) -> Game | None:
        """Remove a game and return what was deleted."""
        ...

    def summarize(self) -> GameStats | None: ...
