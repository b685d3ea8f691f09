from datetime import date

import pytest

from hisab.errors import DuplicateTagError, NotFoundError, ValidationError
from hisab.ledger import (
    CATEGORIES_KEY,
    INITIALIZED_KEY,
    SETTINGS_KEY,
    TAGS_KEY,
    TRANSACTIONS_KEY,
    Ledger,
)
from hisab.models import TransactionForm, TransactionType
from hisab.storage.memory import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    # Marked as initialized so tests start from an empty ledger.
    store = MemoryStore()
    store.set(INITIALIZED_KEY, True)
    return store


@pytest.fixture
def ledger(store: MemoryStore) -> Ledger:
    ledger = Ledger(store)
    ledger.load()
    return ledger


def test_first_run_seeds_sample_data() -> None:
    store = MemoryStore()
    ledger = Ledger(store)
    ledger.load()

    assert [tx.id for tx in ledger.transactions] == ["tx_1", "tx_2", "tx_3"]
    assert store.get(INITIALIZED_KEY) is True
    assert len(store.get(TRANSACTIONS_KEY)) == 3
    assert store.get(TRANSACTIONS_KEY)[0]["categoryId"] == "cat_1"


def test_defaults_when_keys_absent(ledger: Ledger) -> None:
    assert ledger.transactions == []
    assert len(ledger.categories) == 7
    assert ledger.tags == []
    assert ledger.settings.currency == "INR"


def test_invalid_stored_data_falls_back_to_default(store: MemoryStore) -> None:
    store.data[CATEGORIES_KEY] = "{not json"
    store.set(TAGS_KEY, [{"unexpected": 1}])
    store.set(SETTINGS_KEY, ["wrong", "shape"])

    ledger = Ledger(store)
    ledger.load()

    assert len(ledger.categories) == 7
    assert ledger.tags == []
    assert ledger.settings.currency == "INR"


def test_add_transaction_prepends_and_persists(ledger: Ledger, store: MemoryStore) -> None:
    first = ledger.add_transaction(TransactionForm(description="Coffee", amount="3.5", date="2024-01-02"))
    second = ledger.add_transaction(TransactionForm(description="Salary", amount=1000, date="2024-01-03",
                                                    type=TransactionType.INCOME, category_id="cat_7"))

    assert [tx.id for tx in ledger.transactions] == [second.id, first.id]
    assert first.amount == 3.5
    assert first.date == date(2024, 1, 2)
    assert first.category_id == "cat_1"
    assert first.type is TransactionType.EXPENSE
    assert first.id != second.id

    reloaded = Ledger(store)
    reloaded.load()
    assert [tx.id for tx in reloaded.transactions] == [second.id, first.id]


def test_add_transaction_defaults_date_to_today(ledger: Ledger) -> None:
    tx = ledger.add_transaction(TransactionForm(description="Snack", amount="2"))

    assert tx.date == date.today()


@pytest.mark.parametrize(
    "form",
    [
        TransactionForm(description="", amount="5"),
        TransactionForm(description="   ", amount="5"),
        TransactionForm(description="Lunch", amount=""),
        TransactionForm(description="Lunch", amount=None),
    ],
)
def test_add_transaction_requires_description_and_amount(ledger: Ledger, store: MemoryStore,
                                                          form: TransactionForm) -> None:
    with pytest.raises(ValidationError, match="Please enter both an amount and a description."):
        ledger.add_transaction(form)

    assert ledger.transactions == []
    assert store.get(TRANSACTIONS_KEY) is None


@pytest.mark.parametrize("amount", ["abc", "-4", "nan", "inf"])
def test_add_transaction_rejects_bad_amounts(ledger: Ledger, amount: str) -> None:
    with pytest.raises(ValidationError):
        ledger.add_transaction(TransactionForm(description="Lunch", amount=amount))


def test_add_transaction_rejects_huge_amount(ledger: Ledger) -> None:
    with pytest.raises(ValidationError, match="too large"):
        ledger.add_transaction(TransactionForm(description="Lunch", amount="1e308"))

    assert ledger.transactions == []


def test_add_transaction_rejects_bad_date(ledger: Ledger) -> None:
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        ledger.add_transaction(TransactionForm(description="Lunch", amount="5", date="05/01/2024"))


def test_add_transaction_registers_hashtags(ledger: Ledger, store: MemoryStore) -> None:
    ledger.add_transaction(TransactionForm(description="Lunch #food #work", amount="12"))
    ledger.add_transaction(TransactionForm(description="Dinner #Food #late", amount="20"))

    assert [t.name for t in ledger.tags] == ["#food", "#work", "#late"]
    assert [t["name"] for t in store.get(TAGS_KEY)] == ["#food", "#work", "#late"]


def test_update_transaction_replaces_fields_and_keeps_id(ledger: Ledger) -> None:
    tx = ledger.add_transaction(TransactionForm(description="Taxi", amount="9", category_id="cat_2"))

    updated = ledger.update_transaction(tx.id, TransactionForm(
        description="Taxi home #night", amount="11.25", date="2024-02-10",
        type=TransactionType.EXPENSE, category_id="cat_3",
    ))

    assert updated.id == tx.id
    assert ledger.get_transaction(tx.id).amount == 11.25
    assert ledger.get_transaction(tx.id).category_id == "cat_3"
    assert [t.name for t in ledger.tags] == ["#night"]


def test_removing_hashtag_from_description_keeps_tag(ledger: Ledger) -> None:
    tx = ledger.add_transaction(TransactionForm(description="Gym #health", amount="30"))
    ledger.update_transaction(tx.id, TransactionForm(description="Gym", amount="30"))

    assert [t.name for t in ledger.tags] == ["#health"]


def test_update_and_delete_unknown_transaction(ledger: Ledger) -> None:
    with pytest.raises(NotFoundError):
        ledger.update_transaction("tx_missing", TransactionForm(description="x", amount="1"))
    with pytest.raises(NotFoundError):
        ledger.delete_transaction("tx_missing")


def test_delete_transaction(ledger: Ledger) -> None:
    tx = ledger.add_transaction(TransactionForm(description="Book", amount="15"))

    ledger.delete_transaction(tx.id)

    assert ledger.transactions == []


def test_add_category_validates_name_and_color(ledger: Ledger) -> None:
    category = ledger.add_category("Pets")
    assert category.color == "#ef4444"
    assert ledger.categories[-1] == category

    with pytest.raises(ValidationError):
        ledger.add_category("   ")
    with pytest.raises(ValidationError):
        ledger.add_category("Plants", "#000000")


def test_delete_category_leaves_transactions_untouched(ledger: Ledger) -> None:
    tx = ledger.add_transaction(TransactionForm(description="Vet", amount="40", category_id="cat_6"))

    ledger.delete_category("cat_6")

    assert all(c.id != "cat_6" for c in ledger.categories)
    assert ledger.get_transaction(tx.id).category_id == "cat_6"


def test_add_tag_normalizes_and_rejects_duplicates(ledger: Ledger) -> None:
    tag = ledger.add_tag("travel")
    assert tag.name == "#travel"

    with pytest.raises(DuplicateTagError):
        ledger.add_tag("#TRAVEL")
    with pytest.raises(ValidationError):
        ledger.add_tag("  ")


def test_delete_tag(ledger: Ledger) -> None:
    tag = ledger.add_tag("#temp")

    ledger.delete_tag(tag.id)

    assert ledger.tags == []
    with pytest.raises(NotFoundError):
        ledger.delete_tag(tag.id)


def test_set_currency_merges_settings(ledger: Ledger, store: MemoryStore) -> None:
    store.set(SETTINGS_KEY, {"currency": "INR", "theme": "dark"})
    ledger.load()

    ledger.set_currency("usd")

    assert store.get(SETTINGS_KEY) == {"currency": "USD", "theme": "dark"}
    with pytest.raises(ValidationError):
        ledger.set_currency("XYZ")


def test_clear_all_data_keeps_currency_and_marker(ledger: Ledger, store: MemoryStore) -> None:
    ledger.set_currency("EUR")
    ledger.add_category("Pets")
    ledger.add_transaction(TransactionForm(description="Toy #pets", amount="4"))

    ledger.clear_all_data()

    assert ledger.transactions == []
    assert ledger.tags == []
    assert [c.id for c in ledger.categories] == [f"cat_{i}" for i in range(1, 8)]
    assert store.get(INITIALIZED_KEY) is True

    reloaded = Ledger(store)
    reloaded.load()
    assert reloaded.transactions == []
    assert reloaded.settings.currency == "EUR"
