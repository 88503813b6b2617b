"""Resolve a day's bonus pool from the tier table."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ripbonus.core.schema import BonusTier


def find_tier(total_bf: Decimal, tiers: Sequence[BonusTier]) -> BonusTier | None:
    """Return the first active tier whose ``[bf_min, bf_max)`` holds ``total_bf``."""

    if total_bf <= 0:
        return None
    for tier in sorted(tiers, key=lambda item: item.bf_min):
        if not tier.is_active:
            continue
        if tier.bf_min <= total_bf < tier.bf_max:
            return tier
    return None


def resolve_pool(total_bf: Decimal, tiers: Sequence[BonusTier]) -> Decimal:
    tier = find_tier(total_bf, tiers)
    if tier is None:
        return Decimal("0")
    return tier.bonus_amount
