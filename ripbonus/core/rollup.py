"""Assemble daily summaries into the monthly rip bonus report."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Mapping, Sequence

from ripbonus.core.aggregation import DayProduction
from ripbonus.core.schema import DailySummary, MonthlyReport, OperatorTotal


def _operator_totals(summaries: Sequence[DailySummary]) -> list[OperatorTotal]:
    totals: dict[str, OperatorTotal] = {}
    for summary in summaries:
        for breakdown in summary.operator_breakdowns:
            entry = totals.get(breakdown.person_id)
            if entry is None:
                entry = OperatorTotal(person_id=breakdown.person_id, person_name=breakdown.person_name)
                totals[breakdown.person_id] = entry
            entry.total_bf += breakdown.bf_contributed
            entry.total_bonus += breakdown.bonus_amount
            entry.days_worked += 1
            if breakdown.qualifies:
                entry.days_qualified += 1
    return sorted(totals.values(), key=lambda item: (-item.total_bf, item.person_id))


def assemble_monthly_report(
    year: int,
    month: int,
    days: Mapping[date, DayProduction],
    summaries: Sequence[DailySummary],
) -> MonthlyReport:
    """Sum the month's figures; no pricing or distribution happens here.

    Production and hour totals come from the raw per-day records so they are
    not built from already rounded daily figures. Pool and bonus totals are
    the sums of what each day paid out.
    """

    ordered = sorted(summaries, key=lambda item: item.work_date)
    issues = [issue for summary in ordered for issue in summary.issues]

    return MonthlyReport(
        month=month,
        year=year,
        total_hours=sum((day.total_hours for day in days.values()), Decimal("0")),
        total_standard_bf=sum((day.standard_bf for day in days.values()), Decimal("0")),
        total_misc_bf=sum((day.misc_bf for day in days.values()), Decimal("0")),
        total_bf=sum((day.total_bf for day in days.values()), Decimal("0")),
        total_pool=sum((summary.bonus_pool for summary in ordered), Decimal("0")),
        total_bonus=sum((summary.bonus_distributed for summary in ordered), Decimal("0")),
        daily_summaries=ordered,
        operator_totals=_operator_totals(ordered),
        issues=issues,
    )
