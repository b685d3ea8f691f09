from typing import Annotated, Any

from fastapi import APIRouter, Depends

from hisab.api.dependencies import get_ledger, to_http_error
from hisab.api.schemas import CategoryCreateRequest, TagCreateRequest
from hisab.domain.aggregation import (
    category_transaction_count,
    tags_by_usage,
    transactions_for_category,
    transactions_for_tag,
)
from hisab.domain.defaults import COLORS
from hisab.domain.transactions import build_transactions_display
from hisab.errors import LedgerError
from hisab.ledger import Ledger

router = APIRouter()


@router.get("/api/colors")
async def get_colors() -> list[str]:
    return list(COLORS)


@router.get("/api/categories")
async def list_categories(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> list[dict[str, Any]]:
    return [
        {
            **category.model_dump(),
            "count": category_transaction_count(ledger.transactions, category.id),
        }
        for category in ledger.categories
    ]


@router.post("/api/categories", status_code=201)
async def create_category(
    req: CategoryCreateRequest,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        category = ledger.add_category(req.name, req.color)
    except LedgerError as e:
        raise to_http_error(e) from e
    return category.model_dump()


@router.delete("/api/categories/{category_id}")
async def delete_category(
    category_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, str]:
    try:
        ledger.delete_category(category_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    return {"status": "deleted", "id": category_id}


@router.get("/api/categories/{category_id}/transactions")
async def category_transactions(
    category_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        category = ledger.get_category(category_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    matched = transactions_for_category(ledger.transactions, category.id)
    return {
        "category": category.model_dump(),
        "transactions": build_transactions_display(matched, ledger.categories),
    }


@router.get("/api/tags")
async def list_tags(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> list[dict[str, Any]]:
    return [
        {**tag.model_dump(), "count": count}
        for tag, count in tags_by_usage(ledger.tags, ledger.transactions)
    ]


@router.post("/api/tags", status_code=201)
async def create_tag(
    req: TagCreateRequest,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        tag = ledger.add_tag(req.name)
    except LedgerError as e:
        raise to_http_error(e) from e
    return tag.model_dump()


@router.delete("/api/tags/{tag_id}")
async def delete_tag(
    tag_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, str]:
    try:
        ledger.delete_tag(tag_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    return {"status": "deleted", "id": tag_id}


@router.get("/api/tags/{tag_id}/transactions")
async def tag_transactions(
    tag_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        tag = ledger.get_tag(tag_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    matched = transactions_for_tag(ledger.transactions, tag.name)
    return {
        "tag": tag.model_dump(),
        "transactions": build_transactions_display(matched, ledger.categories),
    }
