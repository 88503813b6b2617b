"""Group finished packs and work sessions into per-day production records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from ripbonus.core.schema import DataQualityIssue, ProductionPack, WorkSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackAttribution:
    pack_id: str
    kind: str
    board_feet: Decimal
    touchers: tuple[str, ...]


@dataclass
class DayProduction:
    work_date: date
    packs: list[PackAttribution] = field(default_factory=list)
    standard_bf: Decimal = Decimal("0")
    misc_bf: Decimal = Decimal("0")
    hours_by_person: dict[str, Decimal] = field(default_factory=dict)
    names: dict[str, str] = field(default_factory=dict)
    roles: dict[str, set[str]] = field(default_factory=dict)
    issues: list[DataQualityIssue] = field(default_factory=list)

    @property
    def total_bf(self) -> Decimal:
        return self.standard_bf + self.misc_bf

    @property
    def total_hours(self) -> Decimal:
        return sum(self.hours_by_person.values(), Decimal("0"))


def _safe_decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        result = Decimal(str(value))
    except ArithmeticError:
        return None
    if not result.is_finite():
        return None
    return result


def _clean_id(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def attributed_persons(pack: ProductionPack) -> tuple[str, ...]:
    """Distinct non-null people on a pack, producer first."""

    seen: list[str] = []
    for candidate in [pack.producer_id, *pack.co_worker_ids]:
        person_id = _clean_id(candidate)
        if person_id and person_id not in seen:
            seen.append(person_id)
    return tuple(seen)


def _pack_board_feet(pack: ProductionPack, issues: list[DataQualityIssue]) -> Decimal:
    value = _safe_decimal(pack.board_feet)
    if value is None:
        logger.warning("pack %s has no board feet recorded; counting it as zero", pack.pack_id)
        issues.append(
            DataQualityIssue(kind="missing_board_feet", record_id=pack.pack_id, work_date=pack.finished_date)
        )
        return Decimal("0")
    if value < 0:
        logger.warning("pack %s has negative board feet %s; counting it as zero", pack.pack_id, value)
        issues.append(
            DataQualityIssue(
                kind="negative_board_feet",
                record_id=pack.pack_id,
                work_date=pack.finished_date,
                detail=str(value),
            )
        )
        return Decimal("0")
    return value


def _session_hours(session: WorkSession, issues: list[DataQualityIssue]) -> Decimal:
    value = _safe_decimal(session.total_hours)
    record_id = f"{session.person_id}@{session.work_date.isoformat()}"
    if value is None:
        logger.warning("session %s has no hours recorded; counting it as zero", record_id)
        issues.append(DataQualityIssue(kind="missing_hours", record_id=record_id, work_date=session.work_date))
        return Decimal("0")
    if value < 0:
        logger.warning("session %s has negative hours %s; counting it as zero", record_id, value)
        issues.append(
            DataQualityIssue(
                kind="negative_hours",
                record_id=record_id,
                work_date=session.work_date,
                detail=str(value),
            )
        )
        return Decimal("0")
    return value


def _record_names(day: DayProduction, pack: ProductionPack) -> None:
    producer_id = _clean_id(pack.producer_id)
    if producer_id:
        day.roles.setdefault(producer_id, set()).add("producer")
        if pack.producer_name:
            day.names.setdefault(producer_id, pack.producer_name)
    for index, raw_id in enumerate(pack.co_worker_ids):
        person_id = _clean_id(raw_id)
        if not person_id:
            continue
        day.roles.setdefault(person_id, set()).add("co_worker")
        name = pack.co_worker_names[index] if index < len(pack.co_worker_names) else None
        if name:
            day.names.setdefault(person_id, name)


def aggregate_days(
    packs: Iterable[ProductionPack],
    sessions: Iterable[WorkSession],
    start: date,
    end: date,
) -> dict[date, DayProduction]:
    """Build per-day production for the half-open window ``[start, end)``.

    Only dates with at least one pack or session appear in the result, in
    ascending order.
    """

    days: dict[date, DayProduction] = {}

    for pack in packs:
        work_date = pack.finished_date
        if not start <= work_date < end:
            logger.debug("pack %s finished on %s is outside the window", pack.pack_id, work_date)
            continue
        day = days.setdefault(work_date, DayProduction(work_date=work_date))
        board_feet = _pack_board_feet(pack, day.issues)
        if pack.kind == "misc":
            day.misc_bf += board_feet
        else:
            day.standard_bf += board_feet
        day.packs.append(
            PackAttribution(
                pack_id=pack.pack_id,
                kind=pack.kind,
                board_feet=board_feet,
                touchers=attributed_persons(pack),
            )
        )
        _record_names(day, pack)

    for session in sessions:
        if not start <= session.work_date < end:
            continue
        day = days.setdefault(session.work_date, DayProduction(work_date=session.work_date))
        hours = _session_hours(session, day.issues)
        person_id = str(session.person_id)
        day.hours_by_person[person_id] = day.hours_by_person.get(person_id, Decimal("0")) + hours

    return {work_date: days[work_date] for work_date in sorted(days)}
