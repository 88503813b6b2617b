from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from ripbonus.application import get_bonus_service
from ripbonus.core.schema import MonthlyReport
from ripbonus.exporters.bonus_payout_csv import payout_frame

router = APIRouter(prefix="/rip-bonus", tags=["rip-bonus"])


def _parse_period(month: int | None, year: int | None) -> tuple[int, int]:
    if not month or not year:
        raise HTTPException(status_code=400, detail="month and year are required")
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="month must be between 1 and 12")
    return year, month


def _monthly(month: int | None, year: int | None) -> MonthlyReport:
    year, month = _parse_period(month, year)
    service = get_bonus_service()
    return service.monthly_report(year, month)


@router.get("/daily")
async def get_daily_report(work_date: str | None = Query(default=None, alias="date")) -> dict:
    if not work_date:
        raise HTTPException(status_code=400, detail="date is required")
    try:
        day = date.fromisoformat(work_date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD") from exc

    service = get_bonus_service()
    return service.daily_report(day).model_dump(mode="json")


@router.get("/report")
async def get_monthly_report(
    month: int | None = Query(default=None),
    year: int | None = Query(default=None),
) -> dict:
    return _monthly(month, year).model_dump(mode="json")


@router.get("/report/export")
async def export_monthly_report(
    month: int | None = Query(default=None),
    year: int | None = Query(default=None),
) -> Response:
    report = _monthly(month, year)
    content = payout_frame(report).to_csv(index=False)
    filename = f"rip-bonus-{report.year:04d}-{report.month:02d}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
