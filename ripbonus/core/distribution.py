from __future__ import annotations

import logging
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Mapping

from ripbonus.core.contribution import Contribution

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def distribute_pool(pool: Decimal, contributions: Mapping[str, Contribution]) -> dict[str, Decimal]:
    """Split ``pool`` across qualifying people by their share of qualified board feet.

    Amounts are left unrounded; :func:`allocate_cents` turns them into payouts.
    Non-qualifying people are present with a zero amount.
    """

    amounts = {person_id: Decimal("0") for person_id in contributions}
    if pool <= 0:
        return amounts

    qualified = [entry for entry in contributions.values() if entry.qualifies]
    if not qualified:
        return amounts

    qualified_bf = sum((entry.bf_contributed for entry in qualified), Decimal("0"))
    if qualified_bf <= 0:
        logger.warning("qualifying people contributed no board feet; pool of %s left undistributed", pool)
        return amounts

    for entry in qualified:
        amounts[entry.person_id] = pool * entry.bf_contributed / qualified_bf
    return amounts


def allocate_cents(amounts: Mapping[str, Decimal], pool: Decimal) -> dict[str, Decimal]:
    """Round unrounded shares to cents so that they add up to the pool in cents.

    Every paid share is rounded down, then the cents still owed go one at a
    time to the largest remainders; equal remainders go by ``person_id``.
    """

    payouts = {person_id: Decimal("0.00") for person_id in amounts}
    paying = {person_id: amount for person_id, amount in amounts.items() if amount > 0}
    if not paying:
        return payouts

    target = pool.quantize(CENT, rounding=ROUND_HALF_UP)
    floors = {person_id: amount.quantize(CENT, rounding=ROUND_DOWN) for person_id, amount in paying.items()}
    owed = int((target - sum(floors.values(), Decimal("0"))) / CENT)

    order = sorted(paying, key=lambda person_id: (-(paying[person_id] - floors[person_id]), person_id))
    for index in range(max(owed, 0)):
        floors[order[index % len(order)]] += CENT

    payouts.update(floors)
    return payouts
