from adapter.mongodb.connection import (
    DATABASE_NAME,
    ACCOUNTS_COLLECTION_NAME,
    GAMES_COLLECTION_NAME,
)

__all__ = [
    "DATABASE_NAME",
    "ACCOUNTS_COLLECTION_NAME",
    "GAMES_COLLECTION_NAME",
]
