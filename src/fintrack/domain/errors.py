"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or a mutation that would break a ledger invariant."""


class NotFoundError(DomainError):
    """Requested transaction or category does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def parent_not_found(parent_id: str) -> str:
    """Return message for a missing parent transaction."""
    return f"Parent transaction '{parent_id}' not found"


def nested_sub_item(parent_id: str) -> str:
    """Return message when a sub-item would be attached to another sub-item."""
    return (
        f"Transaction '{parent_id}' is a sub-item and cannot have sub-items of its own"
    )


def duplicate_transaction_id(transaction_id: str) -> str:
    """Return message for an id that is already in use."""
    return f"Transaction id '{transaction_id}' is already in use"


def negative_amount(amount) -> str:
    """Return message for a negative amount."""
    return f"Amount must not be negative (got {amount})"


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category '{category_id}' not found"


def duplicate_category_name(name: str) -> str:
    """Return message for a category name that already exists."""
    return f"Category with name '{name}' already exists"


def category_delete_blocked(name: str, transaction_count: int) -> str:
    """Return message when a category is referenced by transactions."""
    return (
        f"Cannot delete category '{name}': it is used by {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please recategorize or delete them first."
    )
