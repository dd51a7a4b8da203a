"""Tests for the category registry."""

from dataclasses import replace

import pytest

from conftest import make_txn
from fintrack.domain.category import (
    category_in_use,
    create_category,
    default_categories,
    delete_category,
    get_category_by_name,
    update_category,
)
from fintrack.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from fintrack.domain.outcome import apply_mutation


def test_default_categories():
    names = [cat.name for cat in default_categories()]

    assert names == ["Supermercado", "Contas de Casa", "Aluguel", "Salário", "Lazer"]
    assert get_category_by_name(default_categories(), "Aluguel").icon == "key"


def test_create_category():
    categories = create_category(default_categories(), "Transporte", "truck")

    created = get_category_by_name(categories, "Transporte")
    assert created is not None
    assert created.icon == "truck"
    assert created.id.startswith("cat_")
    assert len(categories) == 6


def test_create_duplicate_name():
    with pytest.raises(ConflictError) as excinfo:
        create_category(default_categories(), "Lazer", "star")

    assert "already exists" in str(excinfo.value)


def test_create_empty_name():
    with pytest.raises(ValidationError):
        create_category(default_categories(), "  ", "star")


def test_update_category():
    categories = update_category(default_categories(), "cat5", name="Diversão", icon="star")

    updated = get_category_by_name(categories, "Diversão")
    assert updated.id == "cat5"
    assert updated.icon == "star"
    assert get_category_by_name(categories, "Lazer") is None


def test_update_to_existing_name():
    with pytest.raises(ConflictError):
        update_category(default_categories(), "cat5", name="Aluguel")


def test_update_keeping_own_name():
    categories = update_category(default_categories(), "cat5", name="Lazer", icon="star")

    assert get_category_by_name(categories, "Lazer").icon == "star"


def test_update_unknown_category():
    with pytest.raises(NotFoundError):
        update_category(default_categories(), "nope", name="X")


def test_delete_unused_category():
    categories = delete_category(default_categories(), "cat5", ())

    assert get_category_by_name(categories, "Lazer") is None
    assert len(categories) == 4


def test_delete_category_in_use_is_refused():
    """Deleting 'Aluguel' while a transaction uses it leaves the registry unchanged."""
    categories = default_categories()
    transactions = (make_txn("rent", "1500.00", category="Aluguel"),)

    outcome = apply_mutation(delete_category, categories, "cat3", transactions)

    assert not outcome.ok
    assert isinstance(outcome.error, DependencyError)
    assert outcome.snapshot == categories
    assert "Aluguel" in str(outcome.error)


def test_delete_category_used_by_sub_item_is_refused(supermarket_trip):
    categories = create_category(default_categories(), "Café", "cup", category_id="cafe")
    trip = supermarket_trip
    coffee = trip.sub_items[1]

    trip = replace(trip, sub_items=(trip.sub_items[0], replace(coffee, category="Café")))

    assert category_in_use((trip,), "Café")
    with pytest.raises(DependencyError):
        delete_category(categories, "cafe", (trip,))


def test_delete_unknown_category():
    with pytest.raises(NotFoundError):
        delete_category(default_categories(), "nope", ())
