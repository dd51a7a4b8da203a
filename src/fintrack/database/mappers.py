"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including rebuilding the one-level
transaction hierarchy from flat rows.
"""

from datetime import UTC, datetime
from typing import Iterable

from fintrack.domain import entities as domain
from fintrack.database.models import (
    CategoryRecord,
    LedgerRecord,
    TransactionRecord,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def category_to_domain(record: CategoryRecord) -> domain.Category:
    """Convert SQLAlchemy CategoryRecord to domain Category entity."""
    return domain.Category(id=record.category_id, name=record.name, icon=record.icon)


def category_to_record(
    owner_key: str, category: domain.Category, position: int
) -> CategoryRecord:
    """Convert domain Category entity to a SQLAlchemy row."""
    return CategoryRecord(
        owner_key=owner_key,
        category_id=category.id,
        name=category.name,
        icon=category.icon,
        position=position,
    )


def transaction_to_domain(
    record: TransactionRecord, sub_items: tuple[domain.Transaction, ...] = ()
) -> domain.Transaction:
    """Convert SQLAlchemy TransactionRecord to domain Transaction entity."""
    return domain.Transaction(
        id=record.transaction_id,
        description=record.description,
        amount=record.amount,
        date=_as_utc(record.date),
        type=domain.TransactionType(record.type),
        category=record.category,
        parent_id=record.parent_id,
        sub_items=sub_items,
        notes=record.notes,
        priority=domain.TransactionPriority(record.priority) if record.priority else None,
    )


def transaction_to_record(
    owner_key: str, txn: domain.Transaction, position: int
) -> TransactionRecord:
    """Convert a domain Transaction (without its sub-items) to a SQLAlchemy row."""
    return TransactionRecord(
        owner_key=owner_key,
        transaction_id=txn.id,
        parent_id=txn.parent_id,
        position=position,
        description=txn.description,
        amount=txn.amount,
        date=_as_utc(txn.date),
        type=txn.type.value,
        category=txn.category,
        notes=txn.notes,
        priority=txn.priority.value if txn.priority else None,
    )


def transactions_to_records(
    owner_key: str, transactions: Iterable[domain.Transaction]
) -> list[TransactionRecord]:
    """Flatten a snapshot into rows, each parent followed by its sub-items."""
    records = []
    for txn in transactions:
        records.append(transaction_to_record(owner_key, txn, len(records)))
        for sub_item in txn.sub_items:
            records.append(transaction_to_record(owner_key, sub_item, len(records)))
    return records


def transactions_to_domain(
    records: Iterable[TransactionRecord],
) -> tuple[domain.Transaction, ...]:
    """Rebuild a snapshot from rows ordered by position."""
    records = list(records)
    children: dict[str, list[domain.Transaction]] = {}
    for record in records:
        if record.parent_id is not None:
            children.setdefault(record.parent_id, []).append(transaction_to_domain(record))

    return tuple(
        transaction_to_domain(record, tuple(children.get(record.transaction_id, ())))
        for record in records
        if record.parent_id is None
    )


def ledger_to_domain(
    ledger: LedgerRecord,
    categories: Iterable[CategoryRecord],
    transactions: Iterable[TransactionRecord],
) -> domain.Ledger:
    """Assemble a domain Ledger from its rows."""
    return domain.Ledger(
        transactions=transactions_to_domain(transactions),
        categories=tuple(category_to_domain(c) for c in categories),
        currency=ledger.currency,
    )
