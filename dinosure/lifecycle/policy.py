from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from dinosure.lifecycle.modules import policy_module
from dinosure.lifecycle.schemas import Application, Policy
from dinosure.pricing.config import ProductConfig

logger = logging.getLogger(__name__)


def get_policy(
    application: Union[Application, Mapping[str, Any]],
    policyholder: Optional[Mapping[str, Any]],
    billing_day: Optional[int] = None,
    *,
    cfg: Optional[ProductConfig] = None,
) -> Policy:
    """
    Issue a policy from an accepted application.

    The start date is frozen from the module, the policy stays open-ended
    (end_date None) until cancelled, and the package is relabelled to its
    policy-facing name. billing_day belongs to the billing collaborator and
    does not affect pricing.
    """
    cfg = cfg or ProductConfig()
    app = Application.from_dict(application)

    policy = Policy(
        package_name=cfg.policy_package_name,
        sum_assured=app.sum_assured,
        base_premium=app.base_premium,
        monthly_premium=app.monthly_premium,
        start_date=app.module.get("start_date"),
        end_date=None,
        module=policy_module(app.module),
    )
    logger.info(
        "Issued %s for policyholder %s: cover=%s premium=%s start=%s",
        policy.package_name,
        (policyholder or {}).get("id"),
        policy.sum_assured,
        policy.monthly_premium,
        policy.start_date,
    )
    return policy
