from typing import Annotated, Any

from fastapi import APIRouter, Depends

from hisab.api.dependencies import get_ledger, to_http_error
from hisab.domain.transactions import TypeFilter, build_transaction_payload, build_transactions_display
from hisab.errors import LedgerError
from hisab.ledger import Ledger
from hisab.logger import get_logger
from hisab.models import TransactionForm

logger = get_logger(__name__)

router = APIRouter()


def _added_tag_names(ledger: Ledger, known_tag_ids: set[str]) -> list[str]:
    return [tag.name for tag in ledger.tags if tag.id not in known_tag_ids]


@router.get("/api/transactions")
async def list_transactions(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    type: TypeFilter = "ALL",
) -> dict[str, Any]:
    return {
        "transactions": build_transactions_display(ledger.transactions, ledger.categories, type),
        "currency": ledger.settings.currency,
    }


@router.get("/api/transactions/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        tx = ledger.get_transaction(transaction_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    return build_transaction_payload(tx, ledger.categories)


@router.post("/api/transactions", status_code=201)
async def create_transaction(
    form: TransactionForm,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    known_tag_ids = {tag.id for tag in ledger.tags}
    try:
        tx = ledger.add_transaction(form)
    except LedgerError as e:
        logger.info("[API] Rejected new transaction: %s", e)
        raise to_http_error(e) from e
    return {
        "transaction": build_transaction_payload(tx, ledger.categories),
        "newTags": _added_tag_names(ledger, known_tag_ids),
    }


@router.put("/api/transactions/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    form: TransactionForm,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    known_tag_ids = {tag.id for tag in ledger.tags}
    try:
        tx = ledger.update_transaction(transaction_id, form)
    except LedgerError as e:
        raise to_http_error(e) from e
    return {
        "transaction": build_transaction_payload(tx, ledger.categories),
        "newTags": _added_tag_names(ledger, known_tag_ids),
    }


@router.delete("/api/transactions/{transaction_id}")
async def delete_transaction(
    transaction_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, str]:
    try:
        ledger.delete_transaction(transaction_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    return {"status": "deleted", "id": transaction_id}
