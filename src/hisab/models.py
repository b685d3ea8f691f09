import datetime as dt
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


class TransactionType(str, Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"


class Transaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: new_id("tx"))
    date: dt.date
    description: str
    amount: float = Field(ge=0)
    category_id: str = Field(alias="categoryId")
    type: TransactionType = TransactionType.EXPENSE


class Category(BaseModel):
    id: str = Field(default_factory=lambda: new_id("cat"))
    name: str
    color: str


class Tag(BaseModel):
    id: str = Field(default_factory=lambda: new_id("tag"))
    name: str


class AppSettings(BaseModel):
    # Unknown keys written by other clients are kept on save.
    model_config = ConfigDict(extra="allow")

    currency: str = "INR"


class MonthlySummary(BaseModel):
    income: float
    expense: float
    balance: float


class CategoryBreakdownEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_name: str = Field(alias="categoryName")
    amount: float
    color: str


class TrendPoint(BaseModel):
    day: int
    amount: float


class DayMarker(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_expense: bool = Field(default=False, alias="hasExpense")
    has_income: bool = Field(default=False, alias="hasIncome")
    total_expense: float = Field(default=0.0, alias="totalExpense")


class TransactionForm(BaseModel):
    """Raw add/edit form input, validated by the ledger before saving."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = None
    amount: str | float | None = None
    date: str | None = None
    type: TransactionType = TransactionType.EXPENSE
    category_id: str | None = Field(default=None, alias="categoryId")
