"""Infrastructure layer for rip production records."""
from __future__ import annotations

import copy
from datetime import date, datetime
from typing import Protocol

from ripbonus.domain import ProductionState


class ProductionRepository(Protocol):
    """Read contract the bonus engine needs from the operational store."""

    def add_pack(self, record: dict) -> None: ...

    def list_packs(self, start: date, end: date) -> list[dict]: ...

    def add_session(self, record: dict) -> None: ...

    def list_sessions(self, start: date, end: date) -> list[dict]: ...

    def list_tiers(self) -> list[dict]: ...

    def replace_tiers(self, rows: list[dict]) -> None: ...

    def set_names(self, names: dict[str, str]) -> None: ...

    def get_names(self) -> dict[str, str]: ...

    def reset(self) -> None: ...


def _as_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    text = str(value)
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


class InMemoryProductionRepository:
    """Simple in-memory repository for fast iteration and tests.

    Reads hand out deep copies so callers always work on a snapshot.
    """

    def __init__(self, tiers: list[dict] | None = None) -> None:
        self._initial_tiers = list(tiers or [])
        self._state = ProductionState(tiers=copy.deepcopy(self._initial_tiers))

    @staticmethod
    def _in_window(value: object, start: date, end: date) -> bool:
        day = _as_date(value)
        return day is not None and start <= day < end

    def add_pack(self, record: dict) -> None:
        self._state.packs.append(dict(record))

    def list_packs(self, start: date, end: date) -> list[dict]:
        return [
            copy.deepcopy(row) for row in self._state.packs if self._in_window(row.get("finished_at"), start, end)
        ]

    def add_session(self, record: dict) -> None:
        self._state.sessions.append(dict(record))

    def list_sessions(self, start: date, end: date) -> list[dict]:
        return [
            copy.deepcopy(row) for row in self._state.sessions if self._in_window(row.get("work_date"), start, end)
        ]

    def list_tiers(self) -> list[dict]:
        return copy.deepcopy(self._state.tiers)

    def replace_tiers(self, rows: list[dict]) -> None:
        self._state.tiers = copy.deepcopy(rows)

    def set_names(self, names: dict[str, str]) -> None:
        self._state.names.update(names)

    def get_names(self) -> dict[str, str]:
        return dict(self._state.names)

    def reset(self) -> None:
        self._state = ProductionState(tiers=copy.deepcopy(self._initial_tiers))
