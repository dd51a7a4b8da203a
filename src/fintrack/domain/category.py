"""Category registry operations."""

import logging
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from fintrack.domain.entities import Category, Transaction
from fintrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
    duplicate_category_name,
)
from fintrack.domain.hierarchy import iter_flat

logger = logging.getLogger(__name__)

INITIAL_CATEGORIES = [
    ("cat1", "Supermercado", "shopping_cart"),
    ("cat2", "Contas de Casa", "home"),
    ("cat3", "Aluguel", "key"),
    ("cat4", "Salário", "currency_dollar"),
    ("cat5", "Lazer", "puzzle_piece"),
]


def default_categories() -> tuple[Category, ...]:
    """Return the categories every new ledger starts with."""
    return tuple(
        Category(id=category_id, name=name, icon=icon)
        for category_id, name, icon in INITIAL_CATEGORIES
    )


def get_category(categories: Sequence[Category], category_id: str) -> Optional[Category]:
    """Get category by ID."""
    for cat in categories:
        if cat.id == category_id:
            return cat
    return None


def get_category_by_name(categories: Sequence[Category], name: str) -> Optional[Category]:
    """Get category by its (unique) name."""
    for cat in categories:
        if cat.name == name:
            return cat
    return None


def count_category_references(transactions: Sequence[Transaction], name: str) -> int:
    """Count transactions, sub-items included, that use a category name."""
    return sum(1 for txn in iter_flat(transactions) if txn.category == name)


def category_in_use(transactions: Sequence[Transaction], name: str) -> bool:
    return count_category_references(transactions, name) > 0


def _check_name(categories: Sequence[Category], name: str, exclude_id: Optional[str] = None) -> None:
    if not name or not name.strip():
        raise ValidationError("Category name must not be empty")
    existing = get_category_by_name(categories, name)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(duplicate_category_name(name))


def create_category(
    categories: Sequence[Category],
    name: str,
    icon: str,
    category_id: Optional[str] = None,
) -> tuple[Category, ...]:
    """Create a category.

    Args:
        categories: Current categories
        name: Category name
        icon: Symbolic icon name
        category_id: Optional id to use instead of a generated one

    Returns:
        New category tuple

    Raises:
        ValidationError: If the name is empty
        ConflictError: If the name or id is already taken
    """
    _check_name(categories, name)
    if category_id is None:
        category_id = f"cat_{uuid.uuid4().hex}"
    elif get_category(categories, category_id) is not None:
        raise ConflictError(f"Category id '{category_id}' is already in use")

    logger.debug("Creating category %s (%s)", name, category_id)
    return (*categories, Category(id=category_id, name=name, icon=icon))


def update_category(
    categories: Sequence[Category],
    category_id: str,
    name: Optional[str] = None,
    icon: Optional[str] = None,
) -> tuple[Category, ...]:
    """Update category name and/or icon.

    Transactions keep the category name they were saved with; renaming does
    not rewrite them.

    Raises:
        NotFoundError: If the category doesn't exist
        ConflictError: If the new name belongs to another category
    """
    cat = get_category(categories, category_id)
    if cat is None:
        raise NotFoundError(category_not_found(category_id))
    if name is not None:
        _check_name(categories, name, exclude_id=category_id)

    edited = replace(
        cat,
        name=name if name is not None else cat.name,
        icon=icon if icon is not None else cat.icon,
    )
    return tuple(edited if c.id == category_id else c for c in categories)


def delete_category(
    categories: Sequence[Category],
    category_id: str,
    transactions: Sequence[Transaction],
) -> tuple[Category, ...]:
    """Delete a category that no transaction references.

    Raises:
        NotFoundError: If the category doesn't exist
        DependencyError: If any transaction or sub-item uses its name
    """
    cat = get_category(categories, category_id)
    if cat is None:
        raise NotFoundError(category_not_found(category_id))

    references = count_category_references(transactions, cat.name)
    if references > 0:
        raise DependencyError(category_delete_blocked(cat.name, references))

    logger.debug("Deleting category %s (%s)", cat.name, category_id)
    return tuple(c for c in categories if c.id != category_id)
