"""Transaction mutations over immutable snapshots.

Every function takes the current snapshot (a sequence of top-level
transactions) and returns a new one. Inputs are never modified, so a
rejected mutation leaves the caller holding the prior snapshot unchanged.
"""

import logging
import uuid
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from fintrack.domain.entities import (
    Transaction,
    TransactionDraft,
    TransactionPriority,
    TransactionType,
)
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    duplicate_transaction_id,
    nested_sub_item,
    parent_not_found,
    transaction_not_found,
)
from fintrack.domain.hierarchy import (
    enforce_hierarchy,
    find_transaction,
    sum_amounts,
    validate_hierarchy,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"description", "amount", "date", "type", "category", "notes", "priority"}
)
STRUCTURAL_FIELDS = frozenset({"id", "parent_id", "sub_items"})


def new_transaction_id() -> str:
    """Generate a fresh transaction id."""
    return f"tx_{uuid.uuid4().hex}"


def sort_newest_first(transactions: Sequence[Transaction]) -> tuple[Transaction, ...]:
    """Order top-level transactions by date, most recent first (stable)."""
    return tuple(sorted(transactions, key=lambda txn: txn.date, reverse=True))


def _coerce_amount(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Invalid amount {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount {value!r}")
    return amount


def _coerce_date(value: Any) -> datetime:
    if not isinstance(value, datetime) or value.utcoffset() is None:
        raise ValidationError(f"Date must be a timezone-aware datetime (got {value!r})")
    return value.astimezone(UTC)


def _coerce_enum(enum_type, value: Any):
    try:
        return enum_type(value)
    except (ValueError, TypeError):
        choices = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"Invalid {enum_type.__name__} {value!r}. Must be one of: {choices}")


def _coerce_text(name: str, value: Any, optional: bool = False) -> Optional[str]:
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Field '{name}' must be a string (got {value!r})")
    return value


def coerce_fields(changes: dict[str, Any]) -> dict[str, Any]:
    """Normalize editable field values to their domain types.

    Raises:
        ValidationError: If a value cannot be converted
    """
    coerced = {}
    for name, value in changes.items():
        if name == "amount":
            coerced[name] = _coerce_amount(value)
        elif name == "date":
            coerced[name] = _coerce_date(value)
        elif name == "type":
            coerced[name] = _coerce_enum(TransactionType, value)
        elif name == "priority":
            coerced[name] = None if value is None else _coerce_enum(TransactionPriority, value)
        else:
            coerced[name] = _coerce_text(name, value, optional=name == "notes")
    return coerced


def _finalize(transactions: Sequence[Transaction]) -> tuple[Transaction, ...]:
    snapshot = enforce_hierarchy(transactions)
    validate_hierarchy(snapshot)
    return snapshot


def create_transaction(
    transactions: Sequence[Transaction],
    draft: TransactionDraft,
    parent_id: Optional[str] = None,
    transaction_id: Optional[str] = None,
) -> tuple[Transaction, ...]:
    """Add a transaction, either top-level or as a sub-item of a parent.

    Adding the first sub-item to a leaf transaction turns it into a parent
    and its entered amount is replaced by the sub-item sum.

    Args:
        transactions: Current snapshot
        draft: Fields of the new transaction
        parent_id: Optional id of the top-level transaction to attach to
        transaction_id: Optional id to use instead of a generated one

    Returns:
        New snapshot

    Raises:
        NotFoundError: If the parent doesn't exist
        ValidationError: If the parent is itself a sub-item, the id is
            already in use, a field has the wrong type,
            or the amount is negative
    """
    if transaction_id is None:
        transaction_id = new_transaction_id()
    elif find_transaction(transactions, transaction_id) is not None:
        raise ValidationError(duplicate_transaction_id(transaction_id))

    fields = coerce_fields({name: getattr(draft, name) for name in EDITABLE_FIELDS})
    new_txn = Transaction(id=transaction_id, parent_id=parent_id, **fields)

    if parent_id is None:
        logger.debug("Creating top-level transaction %s", transaction_id)
        return _finalize(sort_newest_first([*transactions, new_txn]))

    located = find_transaction(transactions, parent_id)
    if located is None:
        raise NotFoundError(parent_not_found(parent_id))
    if located[1] is not None:
        raise ValidationError(nested_sub_item(parent_id))

    logger.debug("Adding sub-item %s to %s", transaction_id, parent_id)
    result = [
        replace(txn, sub_items=(*txn.sub_items, new_txn)) if txn.id == parent_id else txn
        for txn in transactions
    ]
    return _finalize(result)


def update_transaction(
    transactions: Sequence[Transaction], transaction_id: str, **changes: Any
) -> tuple[Transaction, ...]:
    """Replace fields of a transaction in place, wherever it lives.

    Only the fields in ``EDITABLE_FIELDS`` may change. Editing the amount of a
    parent with sub-items has no lasting effect: the amount stays derived.

    Args:
        transactions: Current snapshot
        transaction_id: Transaction to edit (top-level or sub-item)
        **changes: Field values to replace

    Returns:
        New snapshot

    Raises:
        NotFoundError: If the transaction doesn't exist
        ValidationError: If a structural or unknown field is given, a value
            has the wrong type, or the
            result would break an invariant
    """
    structural = STRUCTURAL_FIELDS.intersection(changes)
    if structural:
        raise ValidationError(
            f"Cannot change {', '.join(sorted(structural))} of transaction '{transaction_id}'"
        )
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown transaction field(s): {', '.join(sorted(unknown))}")

    located = find_transaction(transactions, transaction_id)
    if located is None:
        raise NotFoundError(transaction_not_found(transaction_id))
    target, parent = located
    edited = replace(target, **coerce_fields(changes))

    if parent is None:
        result = [edited if txn.id == transaction_id else txn for txn in transactions]
    else:
        result = [
            replace(
                txn,
                sub_items=tuple(
                    edited if sub_item.id == transaction_id else sub_item
                    for sub_item in txn.sub_items
                ),
            )
            if txn.id == parent.id
            else txn
            for txn in transactions
        ]

    logger.debug("Updated transaction %s: %s", transaction_id, sorted(changes))
    return _finalize(sort_newest_first(result))


def delete_transaction(
    transactions: Sequence[Transaction], transaction_id: str
) -> tuple[Transaction, ...]:
    """Remove a transaction from wherever it is found.

    Deleting a parent discards its sub-items with it. Deleting a sub-item
    re-derives the parent's amount; removing the last sub-item leaves the
    parent at zero.

    Raises:
        NotFoundError: If the transaction doesn't exist
    """
    located = find_transaction(transactions, transaction_id)
    if located is None:
        raise NotFoundError(transaction_not_found(transaction_id))
    _, parent = located

    if parent is None:
        logger.debug("Deleting top-level transaction %s", transaction_id)
        return _finalize([txn for txn in transactions if txn.id != transaction_id])

    logger.debug("Deleting sub-item %s of %s", transaction_id, parent.id)
    result = []
    for txn in transactions:
        if txn.id == parent.id:
            remaining = tuple(s for s in txn.sub_items if s.id != transaction_id)
            txn = replace(txn, sub_items=remaining, amount=sum_amounts(remaining))
        result.append(txn)
    return _finalize(result)
