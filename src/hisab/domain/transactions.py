import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Literal

from hisab.domain.aggregation import resolve_category
from hisab.domain.timefmt import parse_iso_date
from hisab.errors import ValidationError
from hisab.models import Category, Transaction, TransactionForm, TransactionType

TypeFilter = Literal["ALL", "EXPENSE", "INCOME"]

MISSING_FIELDS_MESSAGE = "Please enter both an amount and a description."

# Keeps any realistic total well inside float range.
MAX_AMOUNT = 1_000_000_000_000.0


@dataclass(frozen=True)
class TransactionDraft:
    date: dt.date
    description: str
    amount: float
    category_id: str
    type: TransactionType


def _parse_amount(raw_amount: str | float | None) -> float | None:
    if raw_amount is None:
        return None
    if isinstance(raw_amount, str):
        raw_amount = raw_amount.strip()
        if not raw_amount:
            return None
    try:
        amount = float(raw_amount)
    except (TypeError, ValueError):
        raise ValidationError("Amount must be a number.") from None
    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError("Amount must be a number.")
    if amount < 0:
        raise ValidationError("Amount cannot be negative.")
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large.")
    return amount


def build_draft(form: TransactionForm, default_category_id: str) -> TransactionDraft:
    description = form.description or ""
    amount = _parse_amount(form.amount)
    if not description.strip() or amount is None:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    try:
        date_value = parse_iso_date(form.date)
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format.") from None

    return TransactionDraft(
        date=date_value,
        description=description,
        amount=amount,
        category_id=form.category_id or default_category_id,
        type=form.type,
    )


def filter_transactions(transactions: list[Transaction], type_filter: TypeFilter = "ALL") -> list[Transaction]:
    if type_filter == "ALL":
        return list(transactions)
    wanted = TransactionType(type_filter)
    return [tx for tx in transactions if tx.type is wanted]


def sort_by_date_desc(transactions: list[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda tx: tx.date, reverse=True)


def build_transaction_payload(transaction: Transaction, categories: list[Category]) -> dict[str, Any]:
    category_name, category_color = resolve_category(categories, transaction.category_id)
    payload = transaction.model_dump(mode="json", by_alias=True)
    payload["categoryName"] = category_name
    payload["categoryColor"] = category_color
    return payload


def build_transactions_display(
    transactions: list[Transaction],
    categories: list[Category],
    type_filter: TypeFilter = "ALL",
) -> list[dict[str, Any]]:
    visible = sort_by_date_desc(filter_transactions(transactions, type_filter))
    return [build_transaction_payload(tx, categories) for tx in visible]
