import asyncio
import datetime as dt
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from hisab.api.dependencies import get_insights, get_ledger
from hisab.domain.aggregation import (
    calendar_day_markers,
    daily_category_breakdown,
    monthly_summary,
    monthly_trend,
)
from hisab.domain.timefmt import days_in_month, format_day_label, parse_iso_date, shift_month
from hisab.insights.llm import InsightGenerator
from hisab.ledger import Ledger
from hisab.logger import get_logger
from hisab.models import CategoryBreakdownEntry, DayMarker, MonthlySummary, TrendPoint

logger = get_logger(__name__)

router = APIRouter(prefix="/api/insights")

Year = Annotated[int | None, Query(ge=1, le=9999)]
Month = Annotated[int | None, Query(ge=1, le=12)]


def _resolve_month(year: int | None, month: int | None) -> tuple[int, int]:
    today = dt.date.today()
    return year or today.year, month or today.month


def _month_meta(year: int, month: int) -> dict[str, Any]:
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    return {
        "year": year,
        "month": month,
        "daysInMonth": days_in_month(year, month),
        "previous": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month},
    }


@router.get("/summary")
async def get_monthly_summary(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    year: Year = None,
    month: Month = None,
) -> MonthlySummary:
    year, month = _resolve_month(year, month)
    return monthly_summary(ledger.transactions, year, month)


@router.get("/daily")
async def get_daily_breakdown(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    day: str | None = None,
) -> dict[str, Any]:
    try:
        target = parse_iso_date(day)
    except ValueError:
        raise HTTPException(status_code=400, detail="day must be in YYYY-MM-DD format") from None
    entries: list[CategoryBreakdownEntry] = daily_category_breakdown(
        ledger.transactions, ledger.categories, target
    )
    return {
        "day": target.isoformat(),
        "label": format_day_label(target),
        "total": sum(entry.amount for entry in entries),
        "categories": [entry.model_dump(by_alias=True) for entry in entries],
    }


@router.get("/trend")
async def get_monthly_trend(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    year: Year = None,
    month: Month = None,
) -> dict[str, Any]:
    year, month = _resolve_month(year, month)
    points: list[TrendPoint] = monthly_trend(ledger.transactions, year, month)
    return {
        **_month_meta(year, month),
        "points": [point.model_dump() for point in points],
    }


@router.get("/calendar")
async def get_calendar(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    year: Year = None,
    month: Month = None,
) -> dict[str, Any]:
    year, month = _resolve_month(year, month)
    markers: dict[int, DayMarker] = calendar_day_markers(ledger.transactions, year, month)
    first_weekday = dt.date(year, month, 1).isoweekday() % 7
    return {
        **_month_meta(year, month),
        # Sunday-first column of the 1st, for month grid layout.
        "firstWeekday": first_weekday,
        "days": {str(day): marker.model_dump(by_alias=True) for day, marker in sorted(markers.items())},
    }


@router.post("/ai")
async def generate_ai_insight(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    generator: Annotated[InsightGenerator, Depends(get_insights)],
) -> dict[str, str]:
    logger.info("[INSIGHTS] Generating insight for %d transactions.", len(ledger.transactions))
    text = await asyncio.to_thread(
        generator.generate,
        list(ledger.transactions),
        list(ledger.categories),
        ledger.settings.currency,
    )
    return {"insight": text}
