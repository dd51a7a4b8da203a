"""Tests for SQLAlchemy storage and mappers."""

from datetime import UTC, datetime
from decimal import Decimal

from conftest import make_txn
from fintrack.database.mappers import transactions_to_domain, transactions_to_records
from fintrack.domain.category import default_categories
from fintrack.domain.entities import Ledger, TransactionPriority
from fintrack.domain.hierarchy import enforce_hierarchy


def test_load_unknown_owner_returns_none(temp_storage):
    assert temp_storage.load("nobody") is None


def test_round_trip_keeps_hierarchy_and_order(temp_storage, supermarket_trip):
    transactions = enforce_hierarchy(
        (
            supermarket_trip,
            make_txn("rent", "1500.00", day="2024-02-01", priority=TransactionPriority.HIGH, notes="fev"),
        )
    )
    ledger = Ledger(transactions=transactions, categories=default_categories(), currency="USD")

    assert temp_storage.save("alice", ledger)
    loaded = temp_storage.load("alice")

    assert loaded.currency == "USD"
    assert loaded.categories == default_categories()
    assert [txn.id for txn in loaded.transactions] == ["trip", "rent"]
    trip = loaded.transactions[0]
    assert trip.amount == Decimal("55.50")
    assert [s.id for s in trip.sub_items] == ["rice", "coffee"]
    assert all(s.parent_id == "trip" for s in trip.sub_items)
    rent = loaded.transactions[1]
    assert rent.priority == TransactionPriority.HIGH
    assert rent.notes == "fev"


def test_dates_come_back_as_utc(temp_storage):
    ledger = Ledger(transactions=(make_txn("t1", "1", day="2024-03-31"),))

    temp_storage.save("alice", ledger)
    loaded = temp_storage.load("alice")

    assert loaded.transactions[0].date == datetime(2024, 3, 31, tzinfo=UTC)
    assert loaded.transactions[0].date.tzinfo is not None
    assert loaded.transactions[0].month_key == "2024-03"


def test_save_replaces_previous_ledger(temp_storage):
    temp_storage.save("alice", Ledger(transactions=(make_txn("old", "1"),)))
    temp_storage.save("alice", Ledger(transactions=(make_txn("new", "2"),)))

    loaded = temp_storage.load("alice")

    assert [txn.id for txn in loaded.transactions] == ["new"]


def test_owners_are_isolated(temp_storage):
    temp_storage.save("alice", Ledger(transactions=(make_txn("a", "1"),)))
    temp_storage.save("bob", Ledger(transactions=(make_txn("b", "1"),), currency="EUR"))

    assert [txn.id for txn in temp_storage.load("alice").transactions] == ["a"]
    assert temp_storage.load("bob").currency == "EUR"


def test_records_flatten_parent_then_sub_items(supermarket_trip):
    records = transactions_to_records("alice", (supermarket_trip, make_txn("rent", "1")))

    assert [r.transaction_id for r in records] == ["trip", "rice", "coffee", "rent"]
    assert [r.position for r in records] == [0, 1, 2, 3]
    assert [r.parent_id for r in records] == [None, "trip", "trip", None]


def test_records_rebuild_snapshot(supermarket_trip):
    snapshot = (supermarket_trip, make_txn("rent", "1"))

    assert transactions_to_domain(transactions_to_records("alice", snapshot)) == snapshot
