import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ripbonus.core.schema import BonusTier
from ripbonus.core.tiers import find_tier, resolve_pool
from ripbonus.core.validation import TierConfigurationError, ValidationError, validate_tiers
from ripbonus.infrastructure import load_tier_rows


def _tier(bf_min, bf_max, amount, tier_id=None, is_active=True):
    return BonusTier(
        tier_id=tier_id,
        bf_min=Decimal(str(bf_min)),
        bf_max=Decimal(str(bf_max)),
        bonus_amount=Decimal(str(amount)),
        is_active=is_active,
    )


TIERS = [_tier(1000, 2000, 20, "T2"), _tier(0, 1000, 10, "T1")]


def test_upper_bound_belongs_to_next_tier():
    tiers = validate_tiers(TIERS)

    assert [tier.tier_id for tier in tiers] == ["T1", "T2"]
    assert resolve_pool(Decimal("999.99"), tiers) == Decimal("10")
    assert resolve_pool(Decimal("1000"), tiers) == Decimal("20")
    assert resolve_pool(Decimal("1999.99"), tiers) == Decimal("20")
    assert resolve_pool(Decimal("2000"), tiers) == Decimal("0")


def test_zero_production_has_no_pool_even_when_covered():
    assert find_tier(Decimal("0"), TIERS) is None
    assert resolve_pool(Decimal("0"), TIERS) == Decimal("0")


def test_inactive_tiers_are_ignored():
    tiers = TIERS + [_tier(500, 1500, 999, "old", is_active=False)]

    active = validate_tiers(tiers)

    assert [tier.tier_id for tier in active] == ["T1", "T2"]
    assert resolve_pool(Decimal("1200"), tiers) == Decimal("20")


@pytest.mark.parametrize(
    "tiers, message",
    [
        ([], "no active tiers"),
        ([_tier(0, 1000, 10, is_active=False)], "no active tiers"),
        ([_tier(0, 1000, 10), _tier(900, 2000, 20)], "overlap"),
        ([_tier(0, 1000, 10), _tier(1100, 2000, 20)], "gap"),
        ([_tier(1000, 1000, 10)], "less than"),
        ([_tier(0, 1000, -5)], "negative"),
        ([_tier(-10, 1000, 5)], "negative"),
    ],
)
def test_bad_tier_tables_are_configuration_errors(tiers, message):
    with pytest.raises(TierConfigurationError, match=message):
        validate_tiers(tiers)


def test_configuration_error_is_a_validation_error():
    assert issubclass(TierConfigurationError, ValidationError)


def test_bundled_tier_table_is_valid():
    rows = load_tier_rows()

    tiers = validate_tiers(BonusTier(**row) for row in rows)

    assert tiers[0].bf_min == Decimal("0")
    assert resolve_pool(Decimal("12000"), tiers) == Decimal("150")


def test_tier_table_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "tiers.yaml"
    path.write_text(
        "- {tier_id: only, bf_min: 0, bf_max: 500, bonus_amount: 25}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RIP_BONUS_TIERS_PATH", str(path))

    rows = load_tier_rows()

    assert rows == [{"tier_id": "only", "bf_min": 0, "bf_max": 500, "bonus_amount": 25}]


def test_missing_tier_file_yields_empty_table(tmp_path):
    assert load_tier_rows(tmp_path / "missing.yaml") == []
