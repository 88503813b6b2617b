from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class ProductionPack(BaseModel):
    pack_id: str
    kind: Literal["standard", "misc"] = "standard"
    board_feet: Decimal | None = None
    finished_at: datetime
    producer_id: str | None = None
    producer_name: str | None = None
    co_worker_ids: list[str | None] = Field(default_factory=list, max_length=4)
    co_worker_names: list[str | None] = Field(default_factory=list, max_length=4)

    @property
    def finished_date(self) -> date:
        return self.finished_at.date()


class WorkSession(BaseModel):
    person_id: str
    work_date: date
    total_hours: Decimal | None = None
    start_time: time | None = None
    end_time: time | None = None
    notes: str | None = None


class BonusTier(BaseModel):
    tier_id: str | None = None
    bf_min: Decimal
    bf_max: Decimal
    bonus_amount: Decimal
    is_active: bool = True


class DataQualityIssue(BaseModel):
    kind: Literal["missing_board_feet", "negative_board_feet", "missing_hours", "negative_hours"]
    record_id: str
    work_date: date
    detail: str | None = None


class OperatorBreakdown(BaseModel):
    person_id: str
    person_name: str
    bf_contributed: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    breadth_percentage: Decimal = Decimal("0")
    packs_touched: int = 0
    qualifies: bool = False
    bonus_amount: Decimal = Decimal("0")
    roles: list[Literal["producer", "co_worker"]] = Field(default_factory=list)


class DailySummary(BaseModel):
    work_date: date
    total_hours: Decimal = Decimal("0")
    total_standard_bf: Decimal = Decimal("0")
    total_misc_bf: Decimal = Decimal("0")
    total_bf: Decimal = Decimal("0")
    pack_count: int = 0
    bf_per_hour: Decimal = Decimal("0")
    bonus_tier_id: str | None = None
    bonus_pool: Decimal = Decimal("0")
    bonus_distributed: Decimal = Decimal("0")
    qualified_count: int = 0
    operator_breakdowns: list[OperatorBreakdown] = Field(default_factory=list)
    issues: list[DataQualityIssue] = Field(default_factory=list)


class OperatorTotal(BaseModel):
    person_id: str
    person_name: str
    total_bf: Decimal = Decimal("0")
    total_bonus: Decimal = Decimal("0")
    days_worked: int = 0
    days_qualified: int = 0


class MonthlyReport(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int
    total_hours: Decimal = Decimal("0")
    total_standard_bf: Decimal = Decimal("0")
    total_misc_bf: Decimal = Decimal("0")
    total_bf: Decimal = Decimal("0")
    total_pool: Decimal = Decimal("0")
    total_bonus: Decimal = Decimal("0")
    daily_summaries: list[DailySummary] = Field(default_factory=list)
    operator_totals: list[OperatorTotal] = Field(default_factory=list)
    issues: list[DataQualityIssue] = Field(default_factory=list)
    rule_version: str = "rip_bonus_v1"
