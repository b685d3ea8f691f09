import datetime as dt

from hisab.domain.aggregation import resolve_category
from hisab.models import Category, Transaction

CSV_HEADERS = ("Date", "Description", "Type", "Category", "Amount")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def export_csv(transactions: list[Transaction], categories: list[Category]) -> str:
    """Render transactions as CSV, keeping their stored order."""
    lines = [",".join(CSV_HEADERS)]
    for tx in transactions:
        category_name, _ = resolve_category(categories, tx.category_id)
        lines.append(",".join((
            tx.date.isoformat(),
            _quote(tx.description),
            tx.type.value,
            _quote(category_name),
            f"{tx.amount:.2f}",
        )))
    return "\n".join(lines)


def export_filename(today: dt.date | None = None) -> str:
    day = today or dt.date.today()
    return f"hisab_export_{day.isoformat()}.csv"
