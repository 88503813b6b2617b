"""Per-person board-feet contribution and participation breadth for one day."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from ripbonus.core.aggregation import PackAttribution

HUNDRED = Decimal("100")

# Minimum share of the day's packs (by count) a person must touch to join the pool.
QUALIFICATION_THRESHOLD = Decimal("30")


@dataclass
class Contribution:
    person_id: str
    bf_contributed: Decimal = Decimal("0")
    packs_touched: int = 0
    percentage: Decimal = Decimal("0")
    breadth_percentage: Decimal = Decimal("0")
    qualifies: bool = False


def split_board_feet(pack: PackAttribution) -> dict[str, Decimal]:
    """Share a pack's board feet equally among everyone attributed to it."""

    if not pack.touchers:
        return {}
    share = pack.board_feet / len(pack.touchers)
    return {person_id: share for person_id in pack.touchers}


def compute_contributions(
    packs: Sequence[PackAttribution],
    total_bf: Decimal,
    threshold: Decimal = QUALIFICATION_THRESHOLD,
) -> dict[str, Contribution]:
    contributions: dict[str, Contribution] = {}
    for pack in packs:
        for person_id, share in split_board_feet(pack).items():
            entry = contributions.setdefault(person_id, Contribution(person_id=person_id))
            entry.bf_contributed += share
            entry.packs_touched += 1

    pack_count = len(packs)
    for entry in contributions.values():
        entry.percentage = entry.bf_contributed / total_bf * HUNDRED if total_bf > 0 else Decimal("0")
        entry.breadth_percentage = Decimal(entry.packs_touched) / Decimal(pack_count) * HUNDRED
        entry.qualifies = entry.breadth_percentage >= threshold
    return contributions
