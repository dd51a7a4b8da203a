"""Display formatting for amounts and month buckets (pt-BR conventions)."""

from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES = [
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
]

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "JP¥",
}


def month_key_to_label(month_key: str) -> str:
    """Turn a ``YYYY-MM`` bucket into a label like ``janeiro de 2024``.

    Raises:
        ValueError: If the key is not a valid month bucket
    """
    try:
        year, month = month_key.split("-")
        name = MONTH_NAMES[int(month) - 1]
    except (ValueError, IndexError):
        raise ValueError(f"Invalid month key '{month_key}'")
    if not year.isdigit() or int(month) < 1:
        raise ValueError(f"Invalid month key '{month_key}'")
    return f"{name} de {year}"


def format_currency(amount: Decimal | int | float, currency_code: str) -> str:
    """Format an amount with the currency symbol and pt-BR separators.

    Rounds half-up to cents; this is the only place amounts are rounded.

    Examples:
        format_currency(Decimal("1234.5"), "BRL") -> "R$ 1.234,50"
        format_currency(Decimal("-3"), "USD") -> "-US$ 3,00"
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    # Format with US separators, then swap them
    digits = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code.upper())
    return f"{sign}{symbol} {digits}"
