"""Load the seed bonus tier table from YAML."""
from __future__ import annotations

import os
from pathlib import Path

import yaml

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def default_tiers_path() -> Path:
    env_path = os.getenv("RIP_BONUS_TIERS_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return CONFIG_DIR / "bonus_tiers.yaml"


def load_tier_rows(path: Path | None = None) -> list[dict]:
    """Return raw tier rows; a missing file yields an empty table."""

    path = path or default_tiers_path()
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if isinstance(data, list):
        return [dict(row) for row in data]
    return [dict(row) for row in data.get("tiers", [])]
