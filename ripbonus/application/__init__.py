"""Application services."""

from .bonus import BonusReportService, get_bonus_service, reset_bonus_state

__all__ = [
    "BonusReportService",
    "get_bonus_service",
    "reset_bonus_state",
]
