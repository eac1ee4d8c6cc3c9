"""
AudioCraft Backend: Account Storage
===================================

What:  The storage interface for accounts, its in-memory implementation, and
       the FastAPI dependency that hands the store to route handlers.
How:   Routes declare `store: AccountStore = Depends(get_account_store)` and
       pass the store into services. Tests swap it with
       `app.dependency_overrides[get_account_store]`.
When:  One process-wide store is created at import; it lives as long as the
       process and is lost on restart.

Storage contract:
    get_by_email(email)       → Account | None
    get_by_id(account_id)     → Account | None
    add(account)              → raises ConflictError on duplicate email
    consume_credit(id)        → remaining credits, or None if the balance is 0

    consume_credit is the only way the credit counter changes. It performs the
    "is there a credit left?" check and the decrement under one lock, so two
    concurrent requests can never both spend the last credit.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from audiocraft.exceptions import ConflictError
from audiocraft.models.account import Account

logger = logging.getLogger(__name__)


class AccountStore(ABC):
    """
    Abstract account storage.

    A durable backend (SQL, document store) implements these four methods
    and nothing above this layer changes.
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        ...

    @abstractmethod
    def get_by_id(self, account_id: str) -> Optional[Account]:
        ...

    @abstractmethod
    def add(self, account: Account) -> Account:
        """
        Insert a new account.

        Raises:
            ConflictError: an account with the same email already exists.
        """
        ...

    @abstractmethod
    def consume_credit(self, account_id: str) -> Optional[int]:
        """
        Atomically decrement the free credit counter if it is above zero.

        Returns:
            The remaining balance after the decrement, or None when the
            account had no credits (nothing is changed in that case).
        """
        ...


class InMemoryAccountStore(AccountStore):
    """
    Process-local store indexed by email and by id.

    All reads and writes take the same lock. Handlers are async and never
    await between a read and a write here, but the lock also covers sync
    code that FastAPI runs on its thread pool.
    """

    def __init__(self) -> None:
        self._by_email: Dict[str, Account] = {}
        self._by_id: Dict[str, Account] = {}
        self._lock = threading.Lock()

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            return self._by_email.get(email)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with self._lock:
            return self._by_id.get(account_id)

    def add(self, account: Account) -> Account:
        with self._lock:
            if account.email in self._by_email:
                raise ConflictError(context={"email": account.email})
            if account.id in self._by_id:
                # uuid4 collision; refuse rather than overwrite another account
                raise ConflictError(
                    message="Could not allocate an account identifier",
                    context={"account_id": account.id},
                )
            self._by_email[account.email] = account
            self._by_id[account.id] = account
        logger.debug("Stored account %s", account.id)
        return account

    def consume_credit(self, account_id: str) -> Optional[int]:
        with self._lock:
            account = self._by_id.get(account_id)
            if account is None or account.free_tracks_left <= 0:
                return None
            account.free_tracks_left -= 1
            return account.free_tracks_left

    def clear(self) -> None:
        """Drop every account. Used to reset state between tests."""
        with self._lock:
            self._by_email.clear()
            self._by_id.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)


# ── Process-wide store ────────────────────────────────────────────────────
account_store: AccountStore = InMemoryAccountStore()


def get_account_store() -> AccountStore:
    """
    FastAPI dependency that provides the account store.

    Example usage in a route:
        @router.get("/profile")
        async def profile(store: AccountStore = Depends(get_account_store)):
            ...
    """
    return account_store
