"""
Read-only aggregates behind the insights and organize screens.

Every function takes the full transaction list and recomputes its result
from scratch; nothing here mutates its inputs or keeps state between calls.
"""
import datetime as dt

from hisab.domain.defaults import UNKNOWN_CATEGORY_COLOR, UNKNOWN_CATEGORY_NAME
from hisab.domain.tags import matches_tag
from hisab.domain.timefmt import days_in_month
from hisab.models import (
    Category,
    CategoryBreakdownEntry,
    DayMarker,
    MonthlySummary,
    Tag,
    Transaction,
    TransactionType,
    TrendPoint,
)


def _in_month(transaction: Transaction, year: int, month: int) -> bool:
    return transaction.date.year == year and transaction.date.month == month


def resolve_category(categories: list[Category], category_id: str) -> tuple[str, str]:
    for category in categories:
        if category.id == category_id:
            return category.name, category.color
    return UNKNOWN_CATEGORY_NAME, UNKNOWN_CATEGORY_COLOR


def monthly_summary(transactions: list[Transaction], year: int, month: int) -> MonthlySummary:
    income = 0.0
    expense = 0.0
    for tx in transactions:
        if not _in_month(tx, year, month):
            continue
        if tx.type is TransactionType.INCOME:
            income += tx.amount
        elif tx.type is TransactionType.EXPENSE:
            expense += tx.amount
    return MonthlySummary(income=income, expense=expense, balance=income - expense)


def daily_category_breakdown(
    transactions: list[Transaction],
    categories: list[Category],
    day: dt.date,
) -> list[CategoryBreakdownEntry]:
    """
    Expense totals per category for a single calendar day, largest first.

    Groups keep the order in which their category was first seen so that
    equal totals stay in encounter order after the (stable) sort.
    """
    totals: dict[str, float] = {}
    for tx in transactions:
        if tx.type is TransactionType.EXPENSE and tx.date == day:
            totals[tx.category_id] = totals.get(tx.category_id, 0.0) + tx.amount

    entries: list[CategoryBreakdownEntry] = []
    for category_id, amount in totals.items():
        if amount == 0:
            continue
        name, color = resolve_category(categories, category_id)
        entries.append(CategoryBreakdownEntry(category_name=name, amount=amount, color=color))
    entries.sort(key=lambda entry: entry.amount, reverse=True)
    return entries


def monthly_trend(transactions: list[Transaction], year: int, month: int) -> list[TrendPoint]:
    amounts = [0.0] * days_in_month(year, month)
    for tx in transactions:
        if tx.type is TransactionType.EXPENSE and _in_month(tx, year, month):
            amounts[tx.date.day - 1] += tx.amount
    return [TrendPoint(day=index + 1, amount=amount) for index, amount in enumerate(amounts)]


def calendar_day_markers(
    transactions: list[Transaction], year: int, month: int
) -> dict[int, DayMarker]:
    markers: dict[int, DayMarker] = {}
    for tx in transactions:
        if not _in_month(tx, year, month):
            continue
        marker = markers.setdefault(tx.date.day, DayMarker())
        if tx.type is TransactionType.EXPENSE:
            marker.has_expense = True
            marker.total_expense += tx.amount
        elif tx.type is TransactionType.INCOME:
            marker.has_income = True
    return markers


def transactions_for_category(
    transactions: list[Transaction], category_id: str
) -> list[Transaction]:
    return [tx for tx in transactions if tx.category_id == category_id]


def category_transaction_count(transactions: list[Transaction], category_id: str) -> int:
    return len(transactions_for_category(transactions, category_id))


def transactions_for_tag(transactions: list[Transaction], tag_name: str) -> list[Transaction]:
    return [tx for tx in transactions if matches_tag(tx, tag_name)]


def tag_transaction_count(transactions: list[Transaction], tag_name: str) -> int:
    return len(transactions_for_tag(transactions, tag_name))


def tags_by_usage(tags: list[Tag], transactions: list[Transaction]) -> list[tuple[Tag, int]]:
    counted = [(tag, tag_transaction_count(transactions, tag.name)) for tag in tags]
    counted.sort(key=lambda item: item[1], reverse=True)
    return counted
