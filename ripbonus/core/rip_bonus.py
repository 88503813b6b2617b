from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Sequence

from ripbonus.core.aggregation import DayProduction, aggregate_days
from ripbonus.core.contribution import compute_contributions
from ripbonus.core.distribution import allocate_cents, distribute_pool
from ripbonus.core.rollup import assemble_monthly_report
from ripbonus.core.schema import (
    BonusTier,
    DailySummary,
    MonthlyReport,
    OperatorBreakdown,
    ProductionPack,
    WorkSession,
)
from ripbonus.core.tiers import find_tier
from ripbonus.core.validation import validate_tiers

logger = logging.getLogger(__name__)


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the half-open ``[start, end)`` date window for a calendar month."""

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def _person_name(person_id: str, day: DayProduction, names: Mapping[str, str] | None) -> str:
    if names and person_id in names:
        return names[person_id]
    return day.names.get(person_id, person_id)


def build_daily_summary(
    day: DayProduction,
    tiers: Sequence[BonusTier],
    names: Mapping[str, str] | None = None,
) -> DailySummary:
    """Price and distribute one day's production.

    ``tiers`` must already have passed :func:`validate_tiers`.
    """

    total_bf = day.total_bf
    total_hours = day.total_hours
    tier = find_tier(total_bf, tiers)
    pool = tier.bonus_amount if tier is not None else Decimal("0")

    contributions = compute_contributions(day.packs, total_bf)
    amounts = allocate_cents(distribute_pool(pool, contributions), pool)

    breakdowns: list[OperatorBreakdown] = []
    for person_id, entry in contributions.items():
        breakdowns.append(
            OperatorBreakdown(
                person_id=person_id,
                person_name=_person_name(person_id, day, names),
                bf_contributed=_quantize(entry.bf_contributed),
                percentage=_quantize(entry.percentage),
                breadth_percentage=_quantize(entry.breadth_percentage),
                packs_touched=entry.packs_touched,
                qualifies=entry.qualifies,
                bonus_amount=amounts[person_id],
                roles=sorted(day.roles.get(person_id, set())),
            )
        )
    breakdowns.sort(key=lambda item: (-item.bf_contributed, item.person_id))

    qualified_count = sum(1 for item in breakdowns if item.qualifies)
    distributed = sum((item.bonus_amount for item in breakdowns), Decimal("0"))
    if pool > 0 and qualified_count == 0:
        logger.info("%s: nobody reached the participation threshold; pool of %s not paid out", day.work_date, pool)

    return DailySummary(
        work_date=day.work_date,
        total_hours=total_hours,
        total_standard_bf=day.standard_bf,
        total_misc_bf=day.misc_bf,
        total_bf=total_bf,
        pack_count=len(day.packs),
        bf_per_hour=_quantize(total_bf / total_hours) if total_hours > 0 else Decimal("0"),
        bonus_tier_id=tier.tier_id if tier is not None else None,
        bonus_pool=pool,
        bonus_distributed=distributed,
        qualified_count=qualified_count,
        operator_breakdowns=breakdowns,
        issues=list(day.issues),
    )


def daily_report(
    work_date: date,
    packs: Iterable[ProductionPack],
    sessions: Iterable[WorkSession],
    tiers: Iterable[BonusTier],
    names: Mapping[str, str] | None = None,
) -> DailySummary:
    active_tiers = validate_tiers(tiers)
    days = aggregate_days(packs, sessions, work_date, work_date + timedelta(days=1))
    day = days.get(work_date) or DayProduction(work_date=work_date)
    return build_daily_summary(day, active_tiers, names)


def monthly_report(
    year: int,
    month: int,
    packs: Iterable[ProductionPack],
    sessions: Iterable[WorkSession],
    tiers: Iterable[BonusTier],
    names: Mapping[str, str] | None = None,
) -> MonthlyReport:
    start, end = month_bounds(year, month)
    active_tiers = validate_tiers(tiers)
    days = aggregate_days(packs, sessions, start, end)
    summaries = [build_daily_summary(day, active_tiers, names) for day in days.values()]
    report = assemble_monthly_report(year, month, days, summaries)
    logger.info(
        "rip bonus report %04d-%02d: %d days, pool %s, paid %s, %d data issues",
        year,
        month,
        len(summaries),
        report.total_pool,
        report.total_bonus,
        len(report.issues),
    )
    return report
