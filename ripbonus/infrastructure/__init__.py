"""Infrastructure layer exports."""

from .production import InMemoryProductionRepository, ProductionRepository
from .tier_config import default_tiers_path, load_tier_rows

__all__ = [
    "InMemoryProductionRepository",
    "ProductionRepository",
    "default_tiers_path",
    "load_tier_rows",
]
