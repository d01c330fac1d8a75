from fastapi import HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.account_repository import MongoAccountRepository
from adapter.mongodb.game_repository import MongoGameRepository
from port.account_repository import AccountRepository
from port.game_repository import GameRepository


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_account_repo() -> AccountRepository:
    return MongoAccountRepository(_get_db())


def get_game_repo() -> GameRepository:
    return MongoGameRepository(_get_db())
