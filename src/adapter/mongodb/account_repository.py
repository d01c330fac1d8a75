"""MongoDB implementation of AccountRepository.

Documents keep the field names of the existing ``users`` collection
(``hasPaid``, ``vipExpiryDate``...). VIP fields are always written together.
"""

from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import ACCOUNTS_COLLECTION_NAME
from domain.model.account import Account, VipMembership
from domain.model.errors import DuplicateError, StorageError

logger = getLogger(__name__)


class MongoAccountRepository:
    def __init__(self, db: Database):
        self.collection = db[ACCOUNTS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique indexes are what actually guarantees username/email
        uniqueness; the service-level pre-check only gives a nicer error.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('username', 1)], 'idx_users_username', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('createdAt', -1)], 'idx_users_created_at')
            create_index_safe(self.collection, [('hasPaid', 1)], 'idx_users_has_paid')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Account:
        """Convert MongoDB document to Account domain model."""
        vip = None
        if doc.get('hasPaid') and doc.get('vipExpiryDate'):
            vip = VipMembership(
                start=doc.get('vipStartDate') or doc['vipExpiryDate'],
                expiry=doc['vipExpiryDate'],
                reference=doc.get('transactionId'),
            )

        return Account(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            created_at=doc['createdAt'],
            updated_at=doc.get('updatedAt', doc['createdAt']),
            password_hash=doc.get('password'),
            is_admin=doc.get('isAdmin', False),
            vip=vip,
            is_active=doc.get('isActive', True),
            is_blocked=doc.get('isBlocked', False),
            needs_password_change=doc.get('needsPasswordChange', False),
        )

    @staticmethod
    def _vip_fields(vip: VipMembership | None) -> dict:
        if vip is None:
            return {
                'hasPaid': False,
                'vipStartDate': None,
                'vipExpiryDate': None,
                'transactionId': None,
            }
        return {
            'hasPaid': True,
            'vipStartDate': vip.start,
            'vipExpiryDate': vip.expiry,
            'transactionId': vip.reference,
        }

    def _update(self, account_id: str, fields: dict, action: str) -> Account | None:
        """Apply a single atomic $set and return the updated account."""
        try:
            fields = {**fields, 'updatedAt': datetime.now(timezone.utc)}
            doc = self.collection.find_one_and_update(
                {'_id': account_id},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
            if doc is None:
                logger.warning("Account not found for update", extra={"accountId": account_id, "action": action})
                return None

            logger.debug("Account updated", extra={"accountId": account_id, "action": action})
            return self._to_domain(doc)
        except PyMongoError as e:
            logger.error("Failed to update account", extra={"accountId": account_id, "action": action, "error": str(e)})
            raise StorageError("Failed to update account") from e

    # ── write operations ─────────────────────────────────────

    def create(self, account: Account) -> Account | None:
        """Insert a new account document."""
        doc = {
            '_id': account.id,
            'username': account.username,
            'email': account.email,
            'password': account.password_hash,
            'isAdmin': account.is_admin,
            'isActive': account.is_active,
            'isBlocked': account.is_blocked,
            'needsPasswordChange': account.needs_password_change,
            'createdAt': account.created_at,
            'updatedAt': account.updated_at,
            **self._vip_fields(account.vip),
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Account creation failed: username or email already exists",
                           extra={"username": account.username})
            raise DuplicateError("User already exists")
        except PyMongoError as e:
            logger.error("Failed to create account", extra={"username": account.username, "error": str(e)})
            raise StorageError("Failed to create account") from e

        logger.info("Account created", extra={"accountId": account.id, "username": account.username})
        return self._to_domain(doc)

    def set_vip(self, account_id: str, vip: VipMembership | None) -> Account | None:
        return self._update(account_id, self._vip_fields(vip), 'grant_vip' if vip else 'revoke_vip')

    def set_blocked(self, account_id: str, blocked: bool) -> Account | None:
        return self._update(account_id, {'isBlocked': blocked}, 'block' if blocked else 'unblock')

    def update_password(
        self, account_id: str, password_hash: str, needs_password_change: bool
    ) -> Account | None:
        return self._update(
            account_id,
            {'password': password_hash, 'needsPasswordChange': needs_password_change},
            'update_password',
        )

    # ── read operations ──────────────────────────────────────

    def _find_one(self, query: dict) -> Account | None:
        try:
            doc = self.collection.find_one(query)
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get account", extra={"query": list(query), "error": str(e)})
            raise StorageError("Failed to read account") from e

    def get_by_id(self, account_id: str) -> Account | None:
        return self._find_one({'_id': account_id})

    def get_by_username(self, username: str) -> Account | None:
        return self._find_one({'username': username})

    def get_by_email(self, email: str) -> Account | None:
        return self._find_one({'email': email})

    def list_all(self) -> list[Account]:
        try:
            cursor = self.collection.find().sort('createdAt', -1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list accounts", extra={"error": str(e)})
            raise StorageError("Failed to list accounts") from e

    def count(self, vip_only: bool = False) -> int:
        try:
            return self.collection.count_documents({'hasPaid': True} if vip_only else {})
        except PyMongoError as e:
            logger.error("Failed to count accounts", extra={"vipOnly": vip_only, "error": str(e)})
            raise StorageError("Failed to count accounts") from e
