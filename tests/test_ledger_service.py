"""Tests for the ledger service."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from fintrack.database.base import Storage
from fintrack.domain.entities import TransactionDraft, TransactionType
from fintrack.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from fintrack.domain.ledger import LedgerService


class FailingStorage(Storage):
    """Storage whose writes always fail."""

    def connect(self):
        pass

    def disconnect(self):
        pass

    def load(self, owner_key):
        return None

    def save(self, owner_key, ledger):
        return False


def _draft(amount, category="Supermercado", txn_type=TransactionType.EXPENSE):
    return TransactionDraft(
        description="item",
        amount=Decimal(amount),
        date=datetime(2024, 2, 10, tzinfo=UTC),
        type=txn_type,
        category=category,
    )


def test_new_owner_starts_with_defaults(ledger_service):
    ledger = ledger_service.ledger

    assert ledger.transactions == ()
    assert ledger.currency == "BRL"
    assert len(ledger.categories) == 5


def test_mutations_are_persisted(ledger_service, temp_storage):
    outcome, trip_id = ledger_service.add_transaction(_draft("0"))
    ledger_service.add_transaction(_draft("20.00"), parent_id=trip_id)
    ledger_service.add_transaction(_draft("35.50"), parent_id=trip_id)

    assert outcome.ok
    assert ledger_service.last_save_ok
    reloaded = LedgerService(temp_storage, "alice")
    assert reloaded.require_transaction(trip_id).amount == Decimal("55.50")


def test_add_with_explicit_id(ledger_service):
    outcome, txn_id = ledger_service.add_transaction(_draft("5"), transaction_id="t1")

    assert outcome.ok
    assert txn_id == "t1"
    assert ledger_service.get_transaction("t1").amount == Decimal("5")


def test_refused_mutation_keeps_snapshot(ledger_service):
    ledger_service.add_transaction(_draft("5"), transaction_id="t1")
    before = ledger_service.ledger

    outcome = ledger_service.delete_transaction("missing")

    assert not outcome.ok
    assert isinstance(outcome.error, NotFoundError)
    assert outcome.snapshot is before
    assert ledger_service.ledger is before


def test_update_and_delete(ledger_service):
    ledger_service.add_transaction(_draft("5"), transaction_id="t1")

    assert ledger_service.update_transaction("t1", description="Cinema").ok
    assert ledger_service.get_transaction("t1").description == "Cinema"
    assert ledger_service.delete_transaction("t1").ok
    assert ledger_service.get_transaction("t1") is None


def test_require_transaction_raises(ledger_service):
    with pytest.raises(NotFoundError):
        ledger_service.require_transaction("missing")


def test_category_lifecycle(ledger_service):
    assert ledger_service.create_category("Transporte", "truck").ok
    duplicate = ledger_service.create_category("Transporte", "truck")
    assert isinstance(duplicate.error, ConflictError)

    ledger_service.add_transaction(_draft("1500", category="Aluguel"))
    blocked = ledger_service.delete_category("cat3")
    assert isinstance(blocked.error, DependencyError)
    assert any(cat.id == "cat3" for cat in ledger_service.ledger.categories)

    assert ledger_service.update_category("cat5", name="Diversão").ok
    assert ledger_service.delete_category("cat5").ok
    assert [cat.name for cat in ledger_service.ledger.categories][-1] == "Transporte"


def test_set_currency(ledger_service, temp_storage):
    outcome = ledger_service.set_currency("usd")

    assert outcome.ok
    assert ledger_service.ledger.currency == "USD"
    assert temp_storage.load("alice").currency == "USD"


@pytest.mark.parametrize("code", ["US", "DOLLAR", "12A", ""])
def test_set_currency_rejects_invalid_code(ledger_service, code):
    outcome = ledger_service.set_currency(code)

    assert isinstance(outcome.error, ValidationError)
    assert ledger_service.ledger.currency == "BRL"


def test_failed_save_keeps_change_in_memory():
    service = LedgerService(FailingStorage(), "alice")

    outcome, txn_id = service.add_transaction(_draft("5"))

    assert outcome.ok
    assert not service.last_save_ok
    assert service.get_transaction(txn_id) is not None


def test_update_with_plain_type_is_saved(ledger_service, temp_storage):
    ledger_service.add_transaction(_draft("5"), transaction_id="t1")

    outcome = ledger_service.update_transaction("t1", type="INCOME")

    assert outcome.ok
    assert ledger_service.last_save_ok
    assert temp_storage.load("alice").transactions[0].type is TransactionType.INCOME


def test_update_with_invalid_type_keeps_snapshot(ledger_service):
    ledger_service.add_transaction(_draft("5"), transaction_id="t1")
    before = ledger_service.ledger

    outcome = ledger_service.update_transaction("t1", type="BOGUS")

    assert isinstance(outcome.error, ValidationError)
    assert ledger_service.ledger is before
