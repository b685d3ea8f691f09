from fastapi import HTTPException, Request

from hisab.errors import DuplicateTagError, LedgerError, NotFoundError
from hisab.insights.llm import InsightGenerator
from hisab.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    ledger = getattr(request.app.state, "ledger", None)
    if not ledger:
        raise HTTPException(status_code=500, detail="Ledger not initialized")
    return ledger


def get_insights(request: Request) -> InsightGenerator:
    generator = getattr(request.app.state, "insights", None)
    if not generator:
        raise HTTPException(status_code=500, detail="Insight generator not initialized")
    return generator


def to_http_error(error: LedgerError) -> HTTPException:
    if isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, DuplicateTagError):
        status_code = 409
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=str(error))
