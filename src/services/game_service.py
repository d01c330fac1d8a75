"""Game service: admin-curated predictions and VIP-filtered reads."""

import logging
import math
from datetime import date, datetime, time, timedelta, timezone

from domain.model.account import Account
from domain.model.errors import DomainError, NotFoundError, ValidationError
from domain.model.game import Game, GameCategory, GameResult, GameStats
from domain.model.policy import Action, authorize, visible_games
from port.game_repository import GameRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('homeTeam', 'awayTeam', 'prediction', 'odds', 'category', 'matchTime')
MIN_ODDS = 1.0


def _parse_odds(odds) -> float:
    try:
        value = float(odds)
    except (TypeError, ValueError):
        raise ValidationError("Odds must be a number", field="odds")
    if not math.isfinite(value):
        raise ValidationError("Odds must be a finite number", field="odds")
    if value <= MIN_ODDS:
        raise ValidationError(f"Odds must be greater than {MIN_ODDS}", field="odds")
    return value


def _parse_category(category: str) -> GameCategory:
    try:
        return GameCategory(category)
    except ValueError:
        valid = ", ".join(c.value for c in GameCategory)
        raise ValidationError(f"Invalid category. Valid categories: {valid}", field="category")


def create_game(
    repo: GameRepository,
    actor: Account,
    home_team: str | None,
    away_team: str | None,
    prediction: str | None,
    odds,
    category: str | None,
    match_time: datetime | None,
) -> Game:
    """Create a game (admin only).

    Raises:
        ValidationError: missing field, odds <= 1.0 or unknown category
    """
    authorize(Action.CREATE_GAME, actor)

    values = (home_team, away_team, prediction, odds, category, match_time)
    missing = [
        name for name, value in zip(REQUIRED_FIELDS, values)
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"All fields are required: {', '.join(missing)}", field=missing[0])

    if match_time.tzinfo is None:
        match_time = match_time.replace(tzinfo=timezone.utc)

    game = Game.create(
        home_team=home_team,
        away_team=away_team,
        prediction=prediction,
        odds=_parse_odds(odds),
        category=_parse_category(category),
        match_time=match_time,
        posted_by=actor.id,
    )
    if not repo.save(game):
        raise DomainError("Failed to save game to repository")

    logger.info("Game created", extra={"gameId": game.id, "category": game.category.value, "postedBy": actor.id})
    return game


def list_games_for_date(repo: GameRepository, actor: Account, day: date) -> list[Game]:
    """Games whose match time falls on ``day`` (UTC), earliest first."""
    authorize(Action.VIEW_GAMES, actor)
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    games = visible_games(actor, repo.find_between(start, start + timedelta(days=1)))
    logger.debug("Games listed for date", extra={"date": day.isoformat(), "count": len(games)})
    return games


def list_today(repo: GameRepository, actor: Account, now: datetime | None = None) -> list[Game]:
    now = now or datetime.now(timezone.utc)
    return list_games_for_date(repo, actor, now.astimezone(timezone.utc).date())


def list_all_games(repo: GameRepository, actor: Account) -> list[Game]:
    """Every game, most recent first; VIP games only for VIP members and admins."""
    authorize(Action.VIEW_ALL_GAMES, actor)
    return visible_games(actor, repo.find_all())


def update_result(repo: GameRepository, actor: Account, game_id: str, result: str | None) -> Game:
    authorize(Action.UPDATE_GAME, actor)
    try:
        outcome = GameResult(result)
    except ValueError:
        raise ValidationError('Invalid result. Must be "win" or "loss"', field="result")

    game = repo.update_result(game_id, outcome)
    if not game:
        raise NotFoundError("Game not found")

    logger.info("Game result updated", extra={"gameId": game_id, "result": outcome.value})
    return game


def delete_game(repo: GameRepository, actor: Account, game_id: str) -> Game:
    authorize(Action.DELETE_GAME, actor)
    game = repo.delete(game_id)
    if not game:
        raise NotFoundError("Game not found")

    logger.info("Game deleted", extra={"gameId": game_id, "match": game.match_label})
    return game


def game_stats(repo: GameRepository, actor: Account) -> GameStats:
    authorize(Action.VIEW_GAME_STATS, actor)
    stats = repo.summarize()
    if stats is None:
        raise DomainError("Failed to compute game statistics")
    return stats
