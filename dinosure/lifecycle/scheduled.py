"""
Scheduled functions.

anniversary_cover_increase is triggered by the platform scheduler (yearly,
1 January) for every active policy. It only looks at the injected
effective_date; the calendar gate is the scheduler's job.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from dinosure.errors import DinosureError
from dinosure.lifecycle.modules import annotate
from dinosure.lifecycle.schemas import Policy, ProductModuleAction
from dinosure.pricing.config import ProductConfig
from dinosure.utils import dates
from dinosure.utils.dates import DateLike

logger = logging.getLogger(__name__)


def anniversary_cover_increase(
    policy: Any,
    policyholder: Optional[Mapping[str, Any]],
    effective_date: DateLike,
    *,
    cfg: Optional[ProductConfig] = None,
) -> List[ProductModuleAction]:
    """
    Flat cover increase for policies in force for at least a year.
    """
    cfg = cfg or ProductConfig()
    pol = Policy.from_dict(policy)
    if pol.start_date is None:
        raise DinosureError("Policy has no start_date; cannot compute its age")

    years = dates.years_between(pol.start_date, effective_date)
    if years < 1:
        return []

    new_cover = pol.sum_assured + cfg.anniversary_increase
    logger.info(
        "Anniversary increase after %.2f years: cover %s -> %s",
        years,
        pol.sum_assured,
        new_cover,
    )
    module = annotate(
        pol.module,
        cover_amount=new_cover,
        anniversary_increase_applied=dates.to_iso(effective_date),
        previous_cover_amount=pol.sum_assured,
        previous_premium=pol.monthly_premium,
    )
    return [ProductModuleAction.update_policy(module)]
