"""Month filtering and top-level ordering of transaction snapshots."""

import re
from dataclasses import replace
from enum import Enum
from typing import Sequence

from fintrack.domain.entities import Transaction
from fintrack.domain.errors import ValidationError

ALL_MONTHS = "all"

_MONTH_KEY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class SortKey(str, Enum):
    """Supported orderings for top-level transactions."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"
    PRIORITY_DESC = "priority-desc"


def validate_month_key(month_key: str) -> str:
    """Return the month key if it is ``all`` or ``YYYY-MM``."""
    if month_key != ALL_MONTHS and not _MONTH_KEY_RE.match(month_key):
        raise ValidationError(
            f"Invalid month '{month_key}'. Use YYYY-MM or '{ALL_MONTHS}'"
        )
    return month_key


def _in_month(txn: Transaction, month_key: str) -> bool:
    return txn.date.isoformat().startswith(month_key)


def filter_by_month(
    transactions: Sequence[Transaction], month_key: str
) -> Sequence[Transaction]:
    """Restrict a snapshot to one calendar month.

    Every record is matched by its own date: top-level transactions outside
    the month are dropped, and so are sub-items outside the month even when
    their parent is kept. A kept parent's amount is not re-derived.

    Args:
        transactions: Snapshot to filter
        month_key: ``YYYY-MM`` or ``"all"``

    Returns:
        The input itself for ``"all"``, otherwise a filtered tuple
    """
    validate_month_key(month_key)
    if month_key == ALL_MONTHS:
        return transactions

    result = []
    for txn in transactions:
        if not _in_month(txn, month_key):
            continue
        if txn.sub_items:
            visible = tuple(s for s in txn.sub_items if _in_month(s, month_key))
            if len(visible) != len(txn.sub_items):
                txn = replace(txn, sub_items=visible)
        result.append(txn)
    return tuple(result)


def top_level(transactions: Sequence[Transaction]) -> tuple[Transaction, ...]:
    """Return transactions that have no parent."""
    return tuple(txn for txn in transactions if txn.parent_id is None)


def sort_top_level(
    transactions: Sequence[Transaction], key: SortKey | str = SortKey.DATE_DESC
) -> tuple[Transaction, ...]:
    """Order top-level transactions by the chosen key.

    Records with a parent are not part of the result; sub-items keep their
    order inside each parent. Ties keep input order.

    Raises:
        ValidationError: If the sort key is not supported
    """
    try:
        key = SortKey(key)
    except ValueError:
        raise ValidationError(
            f"Unknown sort key '{key}'. Must be one of: "
            f"{', '.join(k.value for k in SortKey)}"
        )

    candidates = top_level(transactions)
    if key == SortKey.DATE_DESC:
        return tuple(sorted(candidates, key=lambda t: t.date, reverse=True))
    if key == SortKey.DATE_ASC:
        return tuple(sorted(candidates, key=lambda t: t.date))
    if key == SortKey.AMOUNT_DESC:
        return tuple(sorted(candidates, key=lambda t: t.amount, reverse=True))
    if key == SortKey.AMOUNT_ASC:
        return tuple(sorted(candidates, key=lambda t: t.amount))
    return tuple(sorted(candidates, key=lambda t: t.priority_weight, reverse=True))


def available_months(transactions: Sequence[Transaction]) -> list[str]:
    """Distinct month buckets of top-level transactions, newest first."""
    return sorted({txn.month_key for txn in top_level(transactions)}, reverse=True)
