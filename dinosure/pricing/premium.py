# dinosure/pricing/premium.py
"""
Premium calculation.

One formula, reused by quoting, alterations and anything else that prices
cover:

    core     = cover_amount / 10000 * age
    adjusted = core * species_multiplier (+ R250 if health checks are stale)
    premium  = round(adjusted)

Rounding happens once, at the end, half up (premiums are never negative).
The breakdown fields are reporting only and are rounded independently, so
core_premium + species_adjustment need not equal total_premium.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

import numpy as np

from dinosure.errors import UnknownSpeciesError
from dinosure.pricing.config import ProductConfig, Species

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PremiumBreakdown:
    core_premium: int
    species_adjustment: int
    total_premium: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def species_multiplier(species: Union[Species, str], cfg: Optional[ProductConfig] = None) -> float:
    cfg = cfg or ProductConfig()
    try:
        key = Species(species)
    except ValueError as e:
        raise UnknownSpeciesError(species) from e

    multiplier = cfg.species_multipliers.get(key)
    if multiplier is None:
        raise UnknownSpeciesError(species)
    return float(multiplier)


def compute_premium(
    cover_amount: int,
    age: int,
    species: Union[Species, str],
    health_checks_updated: bool,
    cfg: Optional[ProductConfig] = None,
) -> PremiumBreakdown:
    """
    Monthly premium in cents for the given risk attributes.
    """
    cfg = cfg or ProductConfig()
    multiplier = species_multiplier(species, cfg)

    core = (cover_amount / cfg.cover_divisor) * age
    species_adjusted = core * multiplier

    adjusted = species_adjusted
    if not health_checks_updated:
        adjusted += cfg.health_check_surcharge

    total = round_half_up(adjusted)
    core_rounded = round_half_up(core)

    breakdown = PremiumBreakdown(
        core_premium=core_rounded,
        species_adjustment=round_half_up(species_adjusted) - core_rounded,
        total_premium=total,
    )
    logger.debug(
        "Priced cover=%s age=%s species=%s health_checks_updated=%s -> %s",
        cover_amount,
        age,
        getattr(species, "value", species),
        health_checks_updated,
        total,
    )
    return breakdown
