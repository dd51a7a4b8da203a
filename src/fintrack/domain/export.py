"""CSV export of transaction snapshots."""

import csv
import io
from typing import Callable, Optional, Sequence

from fintrack.domain.entities import Transaction, TransactionType
from fintrack.utils.formatting import format_currency

EXPORT_COLUMNS = [
    "Descrição",
    "Valor",
    "Data",
    "Tipo",
    "Categoria",
    "Prioridade",
    "Notas",
    "Item Pai",
]

TYPE_LABELS = {
    TransactionType.INCOME: "Receita",
    TransactionType.EXPENSE: "Despesa",
}


def _row(
    txn: Transaction,
    currency: str,
    format_amount: Callable[[object, str], str],
    parent: Optional[Transaction],
) -> list[str]:
    return [
        txn.description,
        format_amount(txn.amount, currency),
        txn.date.strftime("%d/%m/%Y"),
        TYPE_LABELS[txn.type],
        txn.category,
        txn.priority.value if txn.priority else "",
        txn.notes or "",
        parent.description if parent else "",
    ]


def export_csv(
    transactions: Sequence[Transaction],
    currency: str,
    format_amount: Callable[[object, str], str] = format_currency,
    delimiter: str = ",",
) -> str:
    """Serialize a snapshot to CSV text, one row per transaction.

    Parents and their sub-items each get their own row; a sub-item row names
    its parent in the last column. Fields containing the delimiter, quotes or
    line breaks are quoted.

    Args:
        transactions: Snapshot to export (already filtered if desired)
        currency: Currency code passed to the amount formatter
        format_amount: Formatter for the amount column
        delimiter: Field delimiter

    Returns:
        CSV document including a header row
    """
    buffer = io.StringIO()
    writer = csv.writer(
        buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n"
    )
    writer.writerow(EXPORT_COLUMNS)
    for txn in transactions:
        writer.writerow(_row(txn, currency, format_amount, None))
        for sub_item in txn.sub_items:
            writer.writerow(_row(sub_item, currency, format_amount, txn))
    return buffer.getvalue()
