from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ripbonus.core.schema import BonusTier


class ValidationError(Exception):
    """Raised when domain validation fails."""


class TierConfigurationError(ValidationError):
    """Raised when the bonus tier table cannot price a day unambiguously."""


def validate_tier(tier: BonusTier) -> None:
    if tier.bf_min < 0:
        raise TierConfigurationError(f"tier {tier.tier_id or tier.bf_min}: bf_min cannot be negative")
    if tier.bf_min >= tier.bf_max:
        raise TierConfigurationError(f"tier {tier.tier_id or tier.bf_min}: bf_min must be less than bf_max")
    if tier.bonus_amount < Decimal("0"):
        raise TierConfigurationError(f"tier {tier.tier_id or tier.bf_min}: bonus_amount cannot be negative")


def validate_tiers(tiers: Iterable[BonusTier]) -> list[BonusTier]:
    """Return the active tiers sorted by ``bf_min`` after checking the table.

    Ranges are half-open ``[bf_min, bf_max)`` so consecutive tiers must meet
    exactly: the next ``bf_min`` equals the previous ``bf_max``.
    """

    active = sorted((tier for tier in tiers if tier.is_active), key=lambda tier: tier.bf_min)
    if not active:
        raise TierConfigurationError("bonus tier table has no active tiers")

    for tier in active:
        validate_tier(tier)

    for previous, current in zip(active, active[1:]):
        if current.bf_min < previous.bf_max:
            raise TierConfigurationError(
                f"tiers overlap: [{previous.bf_min}, {previous.bf_max}) and [{current.bf_min}, {current.bf_max})"
            )
        if current.bf_min > previous.bf_max:
            raise TierConfigurationError(
                f"gap between tiers: no tier covers [{previous.bf_max}, {current.bf_min})"
            )
    return active
