"""In-memory implementation of GameRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone

from domain.model.game import CategoryStats, Game, GameResult, GameStats


class FakeGameRepository:
    def __init__(self):
        self.store: dict[str, Game] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, game: Game) -> bool:
        self.store[game.id] = game
        return True

    def update_result(self, game_id: str, result: GameResult) -> Game | None:
        game = self.store.get(game_id)
        if not game:
            return None
        self.store[game_id] = replace(game, result=result, updated_at=datetime.now(timezone.utc))
        return self.store[game_id]

    def delete(self, game_id: str) -> Game | None:
        return self.store.pop(game_id, None)

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, game_id: str) -> Game | None:
        return self.store.get(game_id)

    def find_between(self, start: datetime, end: datetime) -> list[Game]:
        games = [g for g in self.store.values() if start <= g.match_time < end]
        return sorted(games, key=lambda g: g.match_time)

    def find_all(self) -> list[Game]:
        return sorted(self.store.values(), key=lambda g: g.match_time, reverse=True)

    def summarize(self) -> GameStats | None:
        by_category: dict[str, list[Game]] = {}
        for game in self.store.values():
            by_category.setdefault(game.category.value, []).append(game)

        categories = [
            CategoryStats(
                category=name,
                count=len(games),
                won=sum(1 for g in games if g.result == GameResult.WIN),
                lost=sum(1 for g in games if g.result == GameResult.LOSS),
            )
            for name, games in sorted(by_category.items())
        ]
        return GameStats(
            total_games=len(self.store),
            won_games=sum(c.won for c in categories),
            lost_games=sum(c.lost for c in categories),
            categories=categories,
        )
