"""MongoDB implementation of GameRepository."""

from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import GAMES_COLLECTION_NAME
from domain.model.errors import StorageError
from domain.model.game import CategoryStats, Game, GameCategory, GameResult, GameStats

logger = getLogger(__name__)


class MongoGameRepository:
    def __init__(self, db: Database):
        self.collection = db[GAMES_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for games collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('matchTime', -1)], 'idx_games_match_time')
            create_index_safe(self.collection, [('category', 1)], 'idx_games_category')
            return True
        except Exception as e:
            logger.error("Failed to create games indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Game:
        """Convert MongoDB document to Game domain model."""
        result = doc.get('result')
        return Game(
            id=doc['_id'],
            home_team=doc['homeTeam'],
            away_team=doc['awayTeam'],
            prediction=doc['prediction'],
            odds=doc['odds'],
            category=GameCategory(doc['category']),
            match_time=doc['matchTime'],
            posted_by=doc['postedBy'],
            created_at=doc['createdAt'],
            updated_at=doc.get('updatedAt', doc['createdAt']),
            result=GameResult(result) if result else None,
        )

    # ── write operations ─────────────────────────────────────

    def save(self, game: Game) -> bool:
        """Save entire Game (upsert). A pending game has no ``result`` field at all."""
        doc = {
            'homeTeam': game.home_team,
            'awayTeam': game.away_team,
            'prediction': game.prediction,
            'odds': game.odds,
            'category': game.category.value,
            'matchTime': game.match_time,
            'postedBy': game.posted_by,
            'updatedAt': game.updated_at,
        }
        update: dict = {
            '$set': doc,
            '$setOnInsert': {'createdAt': game.created_at},
        }
        if game.result is None:
            update['$unset'] = {'result': ''}
        else:
            doc['result'] = game.result.value

        try:
            self.collection.update_one({'_id': game.id}, update, upsert=True)
            logger.info("Game saved", extra={"gameId": game.id})
            return True
        except PyMongoError as e:
            logger.error("Failed to save game", extra={"gameId": game.id, "error": str(e)})
            raise StorageError("Failed to save game") from e

    def update_result(self, game_id: str, result: GameResult) -> Game | None:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': game_id},
                {'$set': {'result': result.value, 'updatedAt': datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
            if doc is None:
                logger.warning("Game not found for result update", extra={"gameId": game_id})
                return None
            return self._to_domain(doc)
        except PyMongoError as e:
            logger.error("Failed to update game result", extra={"gameId": game_id, "error": str(e)})
            raise StorageError("Failed to update game result") from e

    def delete(self, game_id: str) -> Game | None:
        try:
            doc = self.collection.find_one_and_delete({'_id': game_id})
            if doc is None:
                logger.warning("Game not found for deletion", extra={"gameId": game_id})
                return None
            return self._to_domain(doc)
        except PyMongoError as e:
            logger.error("Failed to delete game", extra={"gameId": game_id, "error": str(e)})
            raise StorageError("Failed to delete game") from e

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, game_id: str) -> Game | None:
        try:
            doc = self.collection.find_one({'_id': game_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get game", extra={"gameId": game_id, "error": str(e)})
            raise StorageError("Failed to read game") from e

    def find_between(self, start: datetime, end: datetime) -> list[Game]:
        try:
            cursor = self.collection.find(
                {'matchTime': {'$gte': start, '$lt': end}}
            ).sort('matchTime', 1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to find games", extra={"start": start.isoformat(), "error": str(e)})
            raise StorageError("Failed to find games") from e

    def find_all(self) -> list[Game]:
        try:
            cursor = self.collection.find().sort('matchTime', -1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list games", extra={"error": str(e)})
            raise StorageError("Failed to list games") from e

    def summarize(self) -> GameStats | None:
        """Count games overall and per category with win/loss breakdown."""
        pipeline = [
            {'$group': {
                '_id': '$category',
                'count': {'$sum': 1},
                'won': {'$sum': {'$cond': [{'$eq': ['$result', 'win']}, 1, 0]}},
                'lost': {'$sum': {'$cond': [{'$eq': ['$result', 'loss']}, 1, 0]}},
            }},
            {'$sort': {'_id': 1}},
        ]
        try:
            categories = [
                CategoryStats(
                    category=doc['_id'],
                    count=doc.get('count', 0),
                    won=doc.get('won', 0),
                    lost=doc.get('lost', 0),
                )
                for doc in self.collection.aggregate(pipeline)
            ]
        except PyMongoError as e:
            logger.error("Failed to summarize games", extra={"error": str(e)})
            raise StorageError("Failed to summarize games") from e

        return GameStats(
            total_games=sum(c.count for c in categories),
            won_games=sum(c.won for c in categories),
            lost_games=sum(c.lost for c in categories),
            categories=categories,
        )
