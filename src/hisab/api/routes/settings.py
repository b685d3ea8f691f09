from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from hisab.api.dependencies import get_ledger, to_http_error
from hisab.api.schemas import SettingsUpdateRequest
from hisab.domain.currency import CURRENCIES, currency_symbol
from hisab.domain.export import export_csv, export_filename
from hisab.errors import LedgerError
from hisab.ledger import Ledger
from hisab.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _settings_payload(ledger: Ledger) -> dict[str, Any]:
    currency = ledger.settings.currency
    return {"currency": currency, "symbol": currency_symbol(currency)}


@router.get("/api/settings")
async def get_settings(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    return _settings_payload(ledger)


@router.put("/api/settings")
async def update_settings(
    req: SettingsUpdateRequest,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    try:
        ledger.set_currency(req.currency)
    except LedgerError as e:
        raise to_http_error(e) from e
    return _settings_payload(ledger)


@router.get("/api/currencies")
async def list_currencies() -> list[dict[str, str]]:
    return [
        {"code": c.code, "symbol": c.symbol, "name": c.name}
        for c in CURRENCIES
    ]


@router.get("/api/export.csv")
async def export_transactions(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> Response:
    content = export_csv(ledger.transactions, ledger.categories)
    logger.info("[EXPORT] Exported %d transactions.", len(ledger.transactions))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post("/api/reset")
async def reset_data(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    ledger.clear_all_data()
    return {"status": "cleared", **ledger.snapshot()}


@router.get("/api/status")
async def get_status(
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> dict[str, Any]:
    return {"status": "ok", **ledger.snapshot()}
