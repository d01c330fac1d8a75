"""In-memory implementation of AccountRepository for testing."""

from domain.model.account import Account, VipMembership
from domain.model.errors import DuplicateError


class FakeAccountRepository:
    def __init__(self):
        self.store: dict[str, Account] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, account: Account) -> Account | None:
        for existing in self.store.values():
            if existing.username == account.username or existing.email == account.email:
                raise DuplicateError("User already exists")
        self.store[account.id] = account
        return account

    def set_vip(self, account_id: str, vip: VipMembership | None) -> Account | None:
        return self._replace(account_id, lambda a: a.with_vip(vip))

    def set_blocked(self, account_id: str, blocked: bool) -> Account | None:
        return self._replace(account_id, lambda a: a.with_blocked(blocked))

    def update_password(
        self, account_id: str, password_hash: str, needs_password_change: bool
    ) -> Account | None:
        return self._replace(
            account_id, lambda a: a.with_password(password_hash, needs_password_change)
        )

    def _replace(self, account_id: str, change) -> Account | None:
        account = self.store.get(account_id)
        if not account:
            return None
        self.store[account_id] = change(account)
        return self.store[account_id]

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, account_id: str) -> Account | None:
        return self.store.get(account_id)

    def get_by_username(self, username: str) -> Account | None:
        for account in self.store.values():
            if account.username == username:
                return account
        return None

    def get_by_email(self, email: str) -> Account | None:
        for account in self.store.values():
            if account.email == email:
                return account
        return None

    def list_all(self) -> list[Account]:
        return sorted(self.store.values(), key=lambda a: a.created_at, reverse=True)

    def count(self, vip_only: bool = False) -> int:
        if vip_only:
            return sum(1 for a in self.store.values() if a.has_paid)
        return len(self.store)
