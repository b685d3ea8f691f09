from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as ModelValidationError

from hisab.domain.currency import is_known_currency
from hisab.domain.defaults import COLORS, DEFAULT_CURRENCY, default_categories, sample_transactions
from hisab.domain.tags import find_new_tags, has_tag_named, normalize_tag_name
from hisab.domain.transactions import TransactionDraft, build_draft
from hisab.errors import DuplicateTagError, NotFoundError, ValidationError
from hisab.logger import get_logger
from hisab.models import AppSettings, Category, Tag, Transaction, TransactionForm
from hisab.storage.base import KeyValueStore

logger = get_logger(__name__)

TRANSACTIONS_KEY = "transactions"
CATEGORIES_KEY = "categories"
TAGS_KEY = "tags"
SETTINGS_KEY = "settings"
INITIALIZED_KEY = "initialized"

T = TypeVar("T")

_TRANSACTIONS = TypeAdapter(list[Transaction])
_CATEGORIES = TypeAdapter(list[Category])
_TAGS = TypeAdapter(list[Tag])


class Ledger:
    """
    Owns the in-memory collections and every mutation on them.

    Collections are read once by ``load()``; each mutation then rewrites the
    whole collection it touched. Writes to different keys are independent,
    so a crash between two of them can leave the store inconsistent.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.transactions: list[Transaction] = []
        self.categories: list[Category] = []
        self.tags: list[Tag] = []
        self.settings = AppSettings()

    def _read(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        raw = self.store.get(key)
        if raw is None:
            return default
        try:
            return adapter.validate_python(raw)
        except ModelValidationError as e:
            logger.warning("[STORAGE] Invalid data under '%s' (%d errors), using default.", key, e.error_count())
            return default

    def load(self) -> None:
        self.transactions = self._read(TRANSACTIONS_KEY, _TRANSACTIONS, [])
        self.categories = self._read(CATEGORIES_KEY, _CATEGORIES, default_categories())
        self.tags = self._read(TAGS_KEY, _TAGS, [])

        raw_settings = self.store.get(SETTINGS_KEY)
        if not isinstance(raw_settings, dict):
            raw_settings = {}
        currency = raw_settings.get("currency")
        self.settings = AppSettings(**{
            **raw_settings,
            "currency": currency if isinstance(currency, str) and currency else DEFAULT_CURRENCY,
        })

        if not self.transactions and not self.is_initialized():
            logger.info("[LEDGER] First run, seeding sample transactions.")
            self.transactions = sample_transactions()
            self.save_transactions()
            self.store.set(INITIALIZED_KEY, True)

        logger.info(
            "[LEDGER] Loaded %d transactions, %d categories, %d tags (currency=%s).",
            len(self.transactions),
            len(self.categories),
            len(self.tags),
            self.settings.currency,
        )

    def is_initialized(self) -> bool:
        return bool(self.store.get(INITIALIZED_KEY, False))

    def save_transactions(self) -> None:
        self.store.set(TRANSACTIONS_KEY, _TRANSACTIONS.dump_python(self.transactions, mode="json", by_alias=True))

    def save_categories(self) -> None:
        self.store.set(CATEGORIES_KEY, _CATEGORIES.dump_python(self.categories, mode="json"))

    def save_tags(self) -> None:
        self.store.set(TAGS_KEY, _TAGS.dump_python(self.tags, mode="json"))

    def save_settings(self) -> None:
        self.store.set(SETTINGS_KEY, self.settings.model_dump(mode="json"))

    # Transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        for tx in self.transactions:
            if tx.id == transaction_id:
                return tx
        raise NotFoundError(f"Transaction '{transaction_id}' not found")

    def _draft(self, form: TransactionForm) -> TransactionDraft:
        default_category_id = self.categories[0].id if self.categories else ""
        draft = build_draft(form, default_category_id)
        if not draft.category_id:
            raise ValidationError("Please choose a category.")
        return draft

    def _register_tags(self, description: str) -> list[Tag]:
        new_tags = find_new_tags(description, self.tags)
        if new_tags:
            self.tags.extend(new_tags)
            self.save_tags()
            logger.info("[LEDGER] Registered tags: %s", ", ".join(tag.name for tag in new_tags))
        return new_tags

    def add_transaction(self, form: TransactionForm) -> Transaction:
        draft = self._draft(form)
        self._register_tags(draft.description)
        tx = Transaction(
            date=draft.date,
            description=draft.description,
            amount=draft.amount,
            category_id=draft.category_id,
            type=draft.type,
        )
        self.transactions.insert(0, tx)
        self.save_transactions()
        logger.debug("[LEDGER] Added %s (%s %.2f)", tx.id, tx.type.value, tx.amount)
        return tx

    def update_transaction(self, transaction_id: str, form: TransactionForm) -> Transaction:
        current = self.get_transaction(transaction_id)
        draft = self._draft(form)
        self._register_tags(draft.description)
        updated = Transaction(
            id=current.id,
            date=draft.date,
            description=draft.description,
            amount=draft.amount,
            category_id=draft.category_id,
            type=draft.type,
        )
        self.transactions = [updated if tx.id == transaction_id else tx for tx in self.transactions]
        self.save_transactions()
        logger.debug("[LEDGER] Updated %s", transaction_id)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        self.get_transaction(transaction_id)
        self.transactions = [tx for tx in self.transactions if tx.id != transaction_id]
        self.save_transactions()
        logger.debug("[LEDGER] Deleted %s", transaction_id)

    # Categories

    def get_category(self, category_id: str) -> Category:
        for category in self.categories:
            if category.id == category_id:
                return category
        raise NotFoundError(f"Category '{category_id}' not found")

    def add_category(self, name: str, color: str | None = None) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required.")
        color = color or COLORS[0]
        if color not in COLORS:
            raise ValidationError(f"Color must be one of: {', '.join(COLORS)}.")
        category = Category(name=name, color=color)
        self.categories.append(category)
        self.save_categories()
        logger.info("[LEDGER] Added category '%s' (%s)", category.name, category.id)
        return category

    def delete_category(self, category_id: str) -> None:
        # Transactions keep their categoryId and resolve to "Unknown" afterwards.
        self.get_category(category_id)
        self.categories = [c for c in self.categories if c.id != category_id]
        self.save_categories()
        logger.info("[LEDGER] Deleted category %s", category_id)

    # Tags

    def get_tag(self, tag_id: str) -> Tag:
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        raise NotFoundError(f"Tag '{tag_id}' not found")

    def add_tag(self, name: str) -> Tag:
        normalized = normalize_tag_name(name)
        if not normalized:
            raise ValidationError("Tag name is required.")
        if has_tag_named(self.tags, normalized):
            raise DuplicateTagError(f"Tag '{normalized}' already exists")
        tag = Tag(name=normalized)
        self.tags.append(tag)
        self.save_tags()
        logger.info("[LEDGER] Added tag '%s'", tag.name)
        return tag

    def delete_tag(self, tag_id: str) -> None:
        self.get_tag(tag_id)
        self.tags = [t for t in self.tags if t.id != tag_id]
        self.save_tags()
        logger.info("[LEDGER] Deleted tag %s", tag_id)

    # Settings

    def set_currency(self, code: str) -> AppSettings:
        code = (code or "").strip().upper()
        if not is_known_currency(code):
            raise ValidationError(f"Unsupported currency '{code}'.")
        self.settings.currency = code
        self.save_settings()
        logger.info("[LEDGER] Currency set to %s", code)
        return self.settings

    def clear_all_data(self) -> None:
        """Wipe transactions and tags and restore default categories.

        The currency setting and the first-run marker are kept.
        """
        self.store.remove(TRANSACTIONS_KEY)
        self.store.remove(CATEGORIES_KEY)
        self.store.remove(TAGS_KEY)
        self.transactions = []
        self.categories = default_categories()
        self.tags = []
        logger.info("[LEDGER] All data cleared.")

    def snapshot(self) -> dict[str, Any]:
        return {
            "transactions": len(self.transactions),
            "categories": len(self.categories),
            "tags": len(self.tags),
            "currency": self.settings.currency,
        }
