"""Seeder module for generating demo data.

Provides:
- Store, product and sales generators driven by a seeded RNG
- Pre-built scenarios for common demo and testing needs
- Safe delete and append operations with confirmation guards
"""

from app.shared.seeder.config import (
    DimensionConfig,
    SalesConfig,
    ScenarioPreset,
    SeederConfig,
)
from app.shared.seeder.core import DataSeeder, SeederResult

__all__ = [
    "DataSeeder",
    "DimensionConfig",
    "SalesConfig",
    "ScenarioPreset",
    "SeederConfig",
    "SeederResult",
]
