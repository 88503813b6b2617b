"""Application service layer for rip bonus reporting."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

from ripbonus.core.rip_bonus import daily_report, month_bounds, monthly_report
from ripbonus.core.schema import BonusTier, DailySummary, MonthlyReport, ProductionPack, WorkSession
from ripbonus.core.validation import validate_tier, validate_tiers
from ripbonus.infrastructure import InMemoryProductionRepository, ProductionRepository, load_tier_rows

logger = logging.getLogger(__name__)


class BonusReportService:
    """Fetches fresh snapshots from the repository and runs the bonus engine."""

    def __init__(self, repository: ProductionRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # operational records
    # ------------------------------------------------------------------
    def add_pack(self, row: dict) -> ProductionPack:
        pack = ProductionPack(**row)
        self._repository.add_pack(pack.model_dump())
        return pack

    def add_session(self, row: dict) -> WorkSession:
        session = WorkSession(**row)
        self._repository.add_session(session.model_dump())
        return session

    def set_names(self, names: dict[str, str]) -> None:
        self._repository.set_names({str(key): str(value) for key, value in names.items()})

    # ------------------------------------------------------------------
    # tier administration
    # ------------------------------------------------------------------
    EDITABLE_TIER_FIELDS = {"bf_min", "bf_max", "bonus_amount", "is_active"}

    def list_tiers(self) -> list[BonusTier]:
        return sorted((BonusTier(**row) for row in self._repository.list_tiers()), key=lambda tier: tier.bf_min)

    def _store_tiers(self, tiers: list[BonusTier]) -> list[BonusTier]:
        validate_tiers(tiers)
        self._repository.replace_tiers([tier.model_dump() for tier in tiers])
        return self.list_tiers()

    def _find_tier(self, tiers: list[BonusTier], tier_id: str) -> int:
        for index, tier in enumerate(tiers):
            if tier.tier_id == tier_id:
                return index
        raise KeyError(tier_id)

    def replace_tiers(self, rows: Iterable[object]) -> list[BonusTier]:
        # model_validate rejects rows that are not mappings as well as bad fields
        tiers = [BonusTier.model_validate(row) for row in rows]
        stored = self._store_tiers(tiers)
        logger.info("bonus tier table replaced with %d tiers", len(tiers))
        return stored

    def update_tier(self, tier_id: str, changes: dict) -> BonusTier:
        """Edit one tier; the whole resulting table must still validate."""
        unknown = set(changes) - self.EDITABLE_TIER_FIELDS
        if unknown:
            raise ValueError(f"cannot edit tier fields: {', '.join(sorted(unknown))}")

        tiers = self.list_tiers()
        index = self._find_tier(tiers, tier_id)
        updated = BonusTier.model_validate({**tiers[index].model_dump(), **changes})
        validate_tier(updated)
        tiers[index] = updated
        self._store_tiers(tiers)
        logger.info("bonus tier %s updated: %s", tier_id, sorted(changes))
        return updated

    def retire_tier(self, tier_id: str) -> BonusTier:
        """Soft-delete a tier by marking it inactive."""
        tiers = self.list_tiers()
        index = self._find_tier(tiers, tier_id)
        retired = tiers[index].model_copy(update={"is_active": False})
        tiers[index] = retired
        self._store_tiers(tiers)
        logger.info("bonus tier %s retired", tier_id)
        return retired

    # ------------------------------------------------------------------
    # reports
    # ------------------------------------------------------------------
    def _packs(self, start: date, end: date) -> list[ProductionPack]:
        return [ProductionPack(**row) for row in self._repository.list_packs(start, end)]

    def _sessions(self, start: date, end: date) -> list[WorkSession]:
        return [WorkSession(**row) for row in self._repository.list_sessions(start, end)]

    def daily_report(self, work_date: date) -> DailySummary:
        end = work_date + timedelta(days=1)
        return daily_report(
            work_date,
            self._packs(work_date, end),
            self._sessions(work_date, end),
            self.list_tiers(),
            names=self._repository.get_names(),
        )

    def monthly_report(self, year: int, month: int) -> MonthlyReport:
        start, end = month_bounds(year, month)
        return monthly_report(
            year,
            month,
            self._packs(start, end),
            self._sessions(start, end),
            self.list_tiers(),
            names=self._repository.get_names(),
        )

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


_repository = InMemoryProductionRepository(tiers=load_tier_rows())
_service = BonusReportService(_repository)


def get_bonus_service() -> BonusReportService:
    """Return the singleton bonus service for the process."""

    return _service


def reset_bonus_state() -> None:
    """Reset the in-memory store (used in tests)."""

    _service.reset()
