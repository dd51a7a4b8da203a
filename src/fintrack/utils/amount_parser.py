"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def _normalize_separators(amount_str: str) -> str:
    """Reduce thousands/decimal separators to a plain decimal point."""
    if "," in amount_str and "." in amount_str:
        # Whichever separator comes last is the decimal separator
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if "," in amount_str:
        whole, _, fraction = amount_str.rpartition(",")
        if amount_str.count(",") == 1 and len(fraction) <= 2:
            return f"{whole}.{fraction}"
        return amount_str.replace(",", "")

    return amount_str


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a non-negative Decimal.

    Handles various formats:
    - "123.45"
    - "123,45"
    - "R$ 1.234,56"
    - "$1,234.56"

    Direction (income or expense) is carried by the transaction type, so
    negative amounts are rejected, as are amounts finer than cents.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is out of range
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols and whitespace
    cleaned = re.sub(r"(R\$|US\$|[$€£¥])", "", amount_str.strip())
    cleaned = re.sub(r"\s", "", cleaned)
    cleaned = _normalize_separators(cleaned)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative (got '{amount_str}')")
    if amount.as_tuple().exponent < -2:
        raise ValueError(f"Amount '{amount_str}' has more than two decimal places")
    return amount
