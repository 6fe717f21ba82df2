# dinosure/pricing/config.py
"""
Product configuration.

Fixed constants for the Dinosure product:
- species multipliers applied on top of the core premium
- health-check surcharge (cents)
- cover bounds, start-date window and maximum insurable age
- quote-facing and policy-facing package names
- anniversary cover increase (cents)

All monetary values are integers in ZAR cents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class Species(str, Enum):
    TYRANNOSAURUS_REX = "Tyrannosaurus Rex"
    STEGOSAURUS = "Stegosaurus"
    VELOCIRAPTOR = "Velociraptor"
    BRACHIOSAURUS = "Brachiosaurus"
    IGUANODON = "Iguanodon"


class DinosaurColour(str, Enum):
    LILAC = "Lilac"
    SEA_GREEN = "Sea green"
    GRANITE_GREY = "Granite grey"
    MIDNIGHT_BLUE = "Midnight blue"
    SUNSET_ORANGE = "Sunset orange"


def _default_multipliers() -> Dict[Species, float]:
    return {
        Species.TYRANNOSAURUS_REX: 0.81,
        Species.STEGOSAURUS: 1.19,
        Species.VELOCIRAPTOR: 0.76,
        Species.BRACHIOSAURUS: 1.32,
        Species.IGUANODON: 1.07,
    }


@dataclass(frozen=True)
class ProductConfig:
    currency: str = "ZAR"
    billing_frequency: str = "monthly"

    quote_package_name: str = "Dinosure Protection"
    policy_package_name: str = "DinoSure"

    # core premium = cover_amount / cover_divisor * age
    cover_divisor: int = 10_000
    species_multipliers: Dict[Species, float] = field(default_factory=_default_multipliers)

    # R250 p/m when health checks are not up to date
    health_check_surcharge: int = 25_000

    # R10k - R100k
    min_cover_amount: int = 1_000_000
    max_cover_amount: int = 10_000_000

    max_start_days: int = 60
    max_age_years: int = 50

    # R10k flat increase once a policy is older than a year
    anniversary_increase: int = 1_000_000

    min_ndrn: int = 100_000
    max_ndrn: int = 999_999
    max_name_length: int = 100
