"""Shared pytest fixtures for fintrack tests."""

import logging
import os
import tempfile
from datetime import UTC, datetime
from decimal import Decimal
import pytest

from fintrack.database.factories import create_sqlite_storage
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.ledger import LedgerService


def make_txn(
    txn_id,
    amount,
    day="2024-01-05",
    txn_type=TransactionType.EXPENSE,
    category="Supermercado",
    description=None,
    parent_id=None,
    sub_items=(),
    priority=None,
    notes=None,
):
    """Build a Transaction with sensible defaults."""
    year, month, dom = (int(part) for part in day.split("-"))
    return Transaction(
        id=txn_id,
        description=description or txn_id,
        amount=Decimal(str(amount)),
        date=datetime(year, month, dom, tzinfo=UTC),
        type=txn_type,
        category=category,
        parent_id=parent_id,
        sub_items=tuple(sub_items),
        notes=notes,
        priority=priority,
    )


@pytest.fixture
def temp_storage():
    """Create a temporary SQLite storage for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()

    yield storage

    # Cleanup
    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger_service(temp_storage):
    """Create a LedgerService for a test owner."""
    return LedgerService(temp_storage, "alice")


@pytest.fixture
def supermarket_trip():
    """A parent expense with two itemized sub-items (20.00 + 35.50)."""
    return make_txn(
        "trip",
        "999.00",
        day="2024-02-10",
        description="Supermarket",
        sub_items=(
            make_txn("rice", "20.00", day="2024-02-10", parent_id="trip"),
            make_txn("coffee", "35.50", day="2024-02-10", parent_id="trip"),
        ),
    )


@pytest.fixture
def january_transactions():
    """Income of 1000.00 and an expense of 300.00 in January 2024."""
    return (
        make_txn("salary", "1000.00", day="2024-01-05", txn_type=TransactionType.INCOME, category="Salário"),
        make_txn("groceries", "300.00", day="2024-01-10", category="Supermercado"),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attached to the fintrack logger."""
    yield
    logging.getLogger("fintrack").handlers.clear()
