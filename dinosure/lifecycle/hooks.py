"""
Lifecycle hooks.

Reactivation guard and claim-block reactions. Both return update_policy
actions for the platform to apply; neither touches the policy directly.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from dinosure.errors import ReactivationNotAllowedError
from dinosure.lifecycle.modules import annotate
from dinosure.lifecycle.schemas import ProductModuleAction, read_field
from dinosure.utils import dates

logger = logging.getLogger(__name__)

REACTIVATABLE_STATUSES = frozenset({"cancelled", "lapsed"})

# (claim block key, module flag), checked in this order; the first new hit wins.
CLAIM_BLOCK_FLAGS: Tuple[Tuple[str, str], ...] = (
    ("extraction_fulfillment_request", "extraction_has_been_claimed"),
    ("fence_repair_fulfillment_request", "fence_repair_has_been_claimed"),
)


def before_policy_reactivated(
    policy: Any,
    policyholder: Optional[Mapping[str, Any]] = None,
    *,
    now: Optional[datetime] = None,
) -> List[ProductModuleAction]:
    status = read_field(policy, "status")
    if status not in REACTIVATABLE_STATUSES:
        logger.warning("Reactivation blocked for policy in status %r", status)
        raise ReactivationNotAllowedError(status)

    module = read_field(policy, "module") or {}
    stamped = annotate(module, reactivation_date=dates.to_iso(now or dates.utcnow()))
    return [ProductModuleAction.update_policy(stamped)]


def after_claim_block_updated(
    claim: Any,
    policy: Any,
    policyholder: Optional[Mapping[str, Any]] = None,
) -> Optional[List[ProductModuleAction]]:
    """
    Flag the policy the first time a fulfillment request goes out for a
    claim block. At most one flag is set per call.
    """
    block_states = read_field(claim, "block_states") or {}
    module = read_field(policy, "module") or {}

    for block_key, flag in CLAIM_BLOCK_FLAGS:
        block = block_states.get(block_key) or {}
        if block.get("fulfillment_request_id") and not module.get(flag):
            logger.info("Claim block %s requested fulfillment; setting %s", block_key, flag)
            return [ProductModuleAction.update_policy(annotate(module, **{flag: True}))]

    return None
