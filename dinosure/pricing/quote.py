# dinosure/pricing/quote.py
"""
Quote generation.

Provides:
- age derivation (calendar-year difference, see dinosure.utils.dates)
- premium calculation via dinosure.pricing.premium
- the quote package handed back to the platform

Notes:
- Input is the `value` of a successful validate_quote_request.
- One package per request today; the list return leaves room for tiers.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from dinosure.lifecycle.modules import quote_module
from dinosure.lifecycle.schemas import QuotePackage
from dinosure.pricing.config import ProductConfig
from dinosure.pricing.premium import compute_premium
from dinosure.utils import dates

logger = logging.getLogger(__name__)


def generate_quote(
    data: Dict[str, Any],
    *,
    today: Optional[date] = None,
    cfg: Optional[ProductConfig] = None,
) -> List[QuotePackage]:
    """
    Generate quote package(s) from validated quote request data.
    """
    cfg = cfg or ProductConfig()
    age = dates.calendar_age(data["birth_date"], today or dates.today())

    breakdown = compute_premium(
        cover_amount=data["cover_amount"],
        age=age,
        species=data["species"],
        health_checks_updated=data["health_checks_updated"],
        cfg=cfg,
    )
    premium = breakdown.total_premium

    package = QuotePackage(
        package_name=cfg.quote_package_name,
        sum_assured=data["cover_amount"],
        base_premium=premium,
        suggested_premium=premium,
        billing_frequency=cfg.billing_frequency,
        module=quote_module(data, age, breakdown),
        input_data=dict(data),
    )
    logger.info(
        "Quoted %s: cover=%s premium=%s",
        package.package_name,
        package.sum_assured,
        premium,
    )
    return [package]
