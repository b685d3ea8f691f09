import datetime as dt

from hisab.models import Category, Transaction, TransactionType

COLORS: tuple[str, ...] = (
    "#ef4444", "#f97316", "#f59e0b", "#84cc16", "#10b981",
    "#06b6d4", "#3b82f6", "#6366f1", "#8b5cf6", "#d946ef",
    "#f43f5e", "#64748b",
)

UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_COLOR = "#94a3b8"

DEFAULT_CURRENCY = "INR"


def default_categories() -> list[Category]:
    return [
        Category(id="cat_1", name="Food & Dining", color="#ef4444"),
        Category(id="cat_2", name="Transportation", color="#f59e0b"),
        Category(id="cat_3", name="Shopping", color="#3b82f6"),
        Category(id="cat_4", name="Entertainment", color="#8b5cf6"),
        Category(id="cat_5", name="Bills & Utilities", color="#64748b"),
        Category(id="cat_6", name="Health", color="#10b981"),
        Category(id="cat_7", name="Income", color="#059669"),
    ]


def sample_transactions() -> list[Transaction]:
    """Seed data shown on the very first run."""
    return [
        Transaction(
            id="tx_1",
            date=dt.date(2023, 10, 25),
            description="Grocery Run",
            amount=120.50,
            category_id="cat_1",
            type=TransactionType.EXPENSE,
        ),
        Transaction(
            id="tx_2",
            date=dt.date(2023, 10, 26),
            description="Uber to Work",
            amount=25.00,
            category_id="cat_2",
            type=TransactionType.EXPENSE,
        ),
        Transaction(
            id="tx_3",
            date=dt.date(2023, 10, 27),
            description="Salary",
            amount=3000.00,
            category_id="cat_7",
            type=TransactionType.INCOME,
        ),
    ]
