"""Store generator."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.seeder.config import DimensionConfig


# Store name components for realistic generation
STORE_PREFIXES = [
    "Downtown",
    "West Side",
    "Uptown",
    "Riverside",
    "Lakeside",
    "Harbor",
    "Metro",
    "Gateway",
    "Summit",
    "Central",
]

STORE_SUFFIXES = [
    "Electronics",
    "Tech Hub",
    "Computer Center",
    "Mobile Store",
    "Audio & Video",
    "Gadgets",
    "Digital",
    "Devices",
]

# (city, state, zip prefix)
LOCATIONS = [
    ("New York", "NY", "100"),
    ("Los Angeles", "CA", "900"),
    ("Chicago", "IL", "606"),
    ("Miami", "FL", "331"),
    ("Seattle", "WA", "981"),
    ("Austin", "TX", "733"),
    ("Boston", "MA", "021"),
    ("Denver", "CO", "802"),
    ("Atlanta", "GA", "303"),
    ("Portland", "OR", "972"),
]

STREETS = [
    "Main Street",
    "Broadway Ave",
    "Michigan Avenue",
    "Ocean Drive",
    "Pine Street",
    "Congress Avenue",
    "Newbury Street",
    "Market Street",
]


class StoreGenerator:
    """Generator for store records."""

    MAX_NAME_ATTEMPTS = 100

    def __init__(self, rng: random.Random, config: DimensionConfig) -> None:
        """Initialize the store generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Dimension configuration.
        """
        self.rng = rng
        self.config = config
        self._used_names: set[str] = set()

    def _generate_name(self, city: str) -> str:
        """Generate a unique store name, falling back to a numbered city name."""
        for _ in range(self.MAX_NAME_ATTEMPTS):
            name = f"{self.rng.choice(STORE_PREFIXES)} {self.rng.choice(STORE_SUFFIXES)}"
            if name not in self._used_names:
                self._used_names.add(name)
                return name

        name = f"{city} Store {len(self._used_names) + 1}"
        self._used_names.add(name)
        return name

    def _slug(self, name: str) -> str:
        return "".join(ch for ch in name.lower().replace(" ", "-") if ch.isalnum() or ch == "-")

    def generate(self) -> list[dict[str, str | None]]:
        """Generate store records.

        Returns:
            List of store dictionaries ready for database insertion.
        """
        stores: list[dict[str, str | None]] = []

        for _ in range(self.config.stores):
            city, state, zip_prefix = self.rng.choice(LOCATIONS)
            name = self._generate_name(city)
            store: dict[str, str | None] = {
                "name": name,
                "address": f"{self.rng.randint(1, 999)} {self.rng.choice(STREETS)}",
                "city": city,
                "state": state,
                "zip_code": f"{zip_prefix}{self.rng.randint(0, 99):02d}",
                "phone_number": f"555-{self.rng.randint(0, 9999):04d}",
                "email": f"contact@{self._slug(name)}.example.com",
            }
            stores.append(store)

        return stores
