"""Ledger service: applies engine mutations for one owner and persists them."""

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from fintrack.database.base import Storage
from fintrack.domain.category import create_category, default_categories, delete_category, update_category
from fintrack.domain.entities import Ledger, Transaction, TransactionDraft
from fintrack.domain.errors import NotFoundError, ValidationError, transaction_not_found
from fintrack.domain.hierarchy import find_transaction
from fintrack.domain.outcome import MutationOutcome, apply_mutation
from fintrack.domain.transaction import (
    create_transaction,
    delete_transaction,
    new_transaction_id,
    update_transaction,
)

logger = logging.getLogger(__name__)


def default_ledger() -> Ledger:
    """Return the ledger a new owner starts with."""
    return Ledger(transactions=(), categories=default_categories(), currency="BRL")


class LedgerService:
    """Service owning the current ledger snapshot for one owner."""

    def __init__(self, storage: Storage, owner_key: str):
        """Initialize ledger service.

        Args:
            storage: Storage instance
            owner_key: Key identifying whose ledger to load and save
        """
        self.storage = storage
        self.owner_key = owner_key
        self._ledger: Optional[Ledger] = None
        self.last_save_ok = True

    @property
    def ledger(self) -> Ledger:
        """Current snapshot, loaded from storage on first access."""
        if self._ledger is None:
            loaded = self.storage.load(self.owner_key)
            if loaded is None:
                logger.info("No saved ledger for %s, starting from defaults", self.owner_key)
                loaded = default_ledger()
            self._ledger = loaded
        return self._ledger

    def _commit(self, ledger: Ledger, action: str) -> None:
        self._ledger = ledger
        logger.info("%s for %s", action, self.owner_key)
        self.last_save_ok = self.storage.save(self.owner_key, ledger)
        if not self.last_save_ok:
            logger.error("Ledger for %s was updated but could not be saved", self.owner_key)

    def _mutate(
        self, field: str, action: str, operation: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> MutationOutcome[Ledger]:
        ledger = self.ledger
        outcome = apply_mutation(operation, getattr(ledger, field), *args, **kwargs)
        if not outcome.ok:
            logger.warning("%s refused for %s: %s", action, self.owner_key, outcome.error)
            return MutationOutcome(snapshot=ledger, error=outcome.error)
        updated = replace(ledger, **{field: outcome.snapshot})
        self._commit(updated, action)
        return MutationOutcome(snapshot=updated)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get a transaction by id, top-level or sub-item."""
        located = find_transaction(self.ledger.transactions, transaction_id)
        return located[0] if located else None

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get a transaction by id or raise NotFoundError."""
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def add_transaction(
        self,
        draft: TransactionDraft,
        parent_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> tuple[MutationOutcome[Ledger], str]:
        """Create a transaction.

        Returns:
            Tuple of (outcome, id of the new transaction)
        """
        transaction_id = transaction_id or new_transaction_id()
        outcome = self._mutate(
            "transactions",
            f"Created transaction {transaction_id}",
            create_transaction,
            draft,
            parent_id=parent_id,
            transaction_id=transaction_id,
        )
        return outcome, transaction_id

    def update_transaction(self, transaction_id: str, **changes: Any) -> MutationOutcome[Ledger]:
        """Replace fields of a transaction."""
        return self._mutate(
            "transactions",
            f"Updated transaction {transaction_id}",
            update_transaction,
            transaction_id,
            **changes,
        )

    def delete_transaction(self, transaction_id: str) -> MutationOutcome[Ledger]:
        """Delete a transaction (and its sub-items, if it is a parent)."""
        return self._mutate(
            "transactions",
            f"Deleted transaction {transaction_id}",
            delete_transaction,
            transaction_id,
        )

    def create_category(self, name: str, icon: str) -> MutationOutcome[Ledger]:
        """Create a category."""
        return self._mutate("categories", f"Created category '{name}'", create_category, name, icon)

    def update_category(
        self, category_id: str, name: Optional[str] = None, icon: Optional[str] = None
    ) -> MutationOutcome[Ledger]:
        """Update category name and/or icon."""
        return self._mutate(
            "categories",
            f"Updated category {category_id}",
            update_category,
            category_id,
            name=name,
            icon=icon,
        )

    def delete_category(self, category_id: str) -> MutationOutcome[Ledger]:
        """Delete a category unless a transaction uses it."""
        return self._mutate(
            "categories",
            f"Deleted category {category_id}",
            delete_category,
            category_id,
            self.ledger.transactions,
        )

    def set_currency(self, currency: str) -> MutationOutcome[Ledger]:
        """Change the ledger currency code."""
        currency = currency.strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            error = ValidationError(f"Invalid currency code '{currency}'")
            logger.warning("Currency change refused for %s: %s", self.owner_key, error)
            return MutationOutcome(snapshot=self.ledger, error=error)
        updated = replace(self.ledger, currency=currency)
        self._commit(updated, f"Set currency to {currency}")
        return MutationOutcome(snapshot=updated)
