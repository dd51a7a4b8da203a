"""Hierarchy invariant enforcement for transaction snapshots.

A snapshot is a tuple of top-level transactions. Each top-level transaction
may carry one level of sub-items; sub-items never carry sub-items of their
own. Whenever a parent has sub-items its amount is derived from them.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Sequence

from fintrack.domain.entities import Transaction
from fintrack.domain.errors import ValidationError, duplicate_transaction_id, negative_amount

logger = logging.getLogger(__name__)


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    """Sum transaction amounts exactly."""
    return sum((txn.amount for txn in transactions), Decimal("0"))


def enforce_hierarchy(transactions: Sequence[Transaction]) -> tuple[Transaction, ...]:
    """Return a snapshot where every parent's amount equals its sub-item sum.

    Transactions without sub-items keep their stored amount. Applying this
    to an already consistent snapshot returns an equal snapshot.
    """
    result = []
    for txn in transactions:
        if txn.sub_items:
            derived = sum_amounts(txn.sub_items)
            if derived != txn.amount:
                logger.debug(
                    "Re-deriving amount of %s: %s -> %s", txn.id, txn.amount, derived
                )
                txn = replace(txn, amount=derived)
        result.append(txn)
    return tuple(result)


def iter_flat(transactions: Iterable[Transaction]) -> Iterator[Transaction]:
    """Yield every transaction, each parent followed by its sub-items."""
    for txn in transactions:
        yield txn
        yield from txn.sub_items


def find_transaction(
    transactions: Iterable[Transaction], transaction_id: str
) -> Optional[tuple[Transaction, Optional[Transaction]]]:
    """Locate a transaction at top level or inside a parent.

    Returns:
        ``(transaction, parent)`` where ``parent`` is None for top-level
        transactions, or None if the id is not present anywhere.
    """
    for txn in transactions:
        if txn.id == transaction_id:
            return txn, None
        for sub_item in txn.sub_items:
            if sub_item.id == transaction_id:
                return sub_item, txn
    return None


def validate_hierarchy(transactions: Sequence[Transaction]) -> None:
    """Check the structural invariants of a snapshot.

    Raises:
        ValidationError: If ids repeat, an amount is negative, a top-level
            transaction points at a parent, or a sub-item is nested deeper
            than one level or points at a different parent.
    """
    seen: set[str] = set()
    for txn in iter_flat(transactions):
        if txn.id in seen:
            raise ValidationError(duplicate_transaction_id(txn.id))
        seen.add(txn.id)
        if txn.amount < 0:
            raise ValidationError(negative_amount(txn.amount))

    for txn in transactions:
        if txn.parent_id is not None:
            raise ValidationError(
                f"Top-level transaction '{txn.id}' must not reference a parent"
            )
        for sub_item in txn.sub_items:
            if sub_item.sub_items:
                raise ValidationError(
                    f"Sub-item '{sub_item.id}' cannot have sub-items of its own"
                )
            if sub_item.parent_id != txn.id:
                raise ValidationError(
                    f"Sub-item '{sub_item.id}' must reference parent '{txn.id}'"
                )
