"""Game (prediction) routes.

Reads are open to any active account but VIP games are filtered out for
non-VIP users. Writes and stats are admin-only.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, status

from api.dependencies import get_game_repo
from api.models import (
    GameActionResponse,
    GameCreateRequest,
    GameResponse,
    GameResultRequest,
    GameStatsResponse,
    MessageResponse,
)
from api.security import get_current_account_required
from domain.model.account import Account
from port.game_repository import GameRepository
from services import game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


@router.get("/date/{day}", response_model=list[GameResponse])
async def get_games_by_date(
    day: date,
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    """Games for a given day (YYYY-MM-DD), earliest kick-off first."""
    return [GameResponse.from_domain(g) for g in game_service.list_games_for_date(repo, current, day)]


@router.get("/today", response_model=list[GameResponse])
async def get_today_games(
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    return [GameResponse.from_domain(g) for g in game_service.list_today(repo, current)]


@router.get("/all", response_model=list[GameResponse])
async def get_all_games(
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    return [GameResponse.from_domain(g) for g in game_service.list_all_games(repo, current)]


@router.post("", response_model=GameActionResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: GameCreateRequest,
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    game = game_service.create_game(
        repo,
        current,
        home_team=request.home_team,
        away_team=request.away_team,
        prediction=request.prediction,
        odds=request.odds,
        category=request.category,
        match_time=request.match_time,
    )
    return GameActionResponse(message="Game created successfully", game=GameResponse.from_domain(game))


@router.patch("/{game_id}/result", response_model=GameActionResponse)
async def update_game_result(
    game_id: str,
    request: GameResultRequest,
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    game = game_service.update_result(repo, current, game_id, request.result)
    return GameActionResponse(
        message=f"Game result updated to {game.result.value}",
        game=GameResponse.from_domain(game),
    )


@router.delete("/{game_id}", response_model=MessageResponse)
async def delete_game(
    game_id: str,
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    game = game_service.delete_game(repo, current, game_id)
    return MessageResponse(message=f"Game deleted: {game.match_label}")


@router.get("/stats/summary", response_model=GameStatsResponse)
async def get_game_stats(
    current: Account = Depends(get_current_account_required),
    repo: GameRepository = Depends(get_game_repo),
):
    return GameStatsResponse.from_domain(game_service.game_stats(repo, current))
