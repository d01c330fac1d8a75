from typing import Protocol

from domain.model.account import Account, VipMembership


class AccountRepository(Protocol):
    """Protocol defining the interface for account data access.

    Every update is a single atomic write that touches only the fields of
    that transition, and returns the updated Account, or None if the
    account does not exist. A failing store raises StorageError; it is
    never reported as an empty result.
    """
    def create(self, account: Account) -> Account | None:
        """Insert a new account. Raise DuplicateError on a unique-key clash."""
        ...

    def get_by_id(self, account_id: str) -> Account | None:
        ...

    def get_by_username(self, username: str) -> Account | None:
        ...

    def get_by_email(self, email: str) -> Account | None:
        ...

    def list_all(self) -> list[Account]:
        """All accounts, newest first."""
        ...

    def count(self, vip_only: bool = False) -> int:
        ...

    def set_vip(self, account_id: str, vip: VipMembership | None) -> Account | None:
        ...

    def set_blocked(self, account_id: str, blocked: bool) -> Account | None:
        ...

    def update_password(
        self, account_id: str, password_hash: str, needs_password_change: bool
    ) -> Account | None:
        ...
