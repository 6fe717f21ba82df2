"""
Alteration hooks.

A mid-term change runs as three separately invocable phases:

1. validate_alteration_package_request - collect-all validation of the body
2. get_alteration                      - price the change into a package
3. apply_alteration                    - merge the package into the policy

Each phase dispatches on context.alteration_hook_key. An unknown key raises
UnknownAlterationHookError before anything else is looked at, so the failure
is the same whatever the payload.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from dinosure.errors import DinosureError, UnknownAlterationHookError
from dinosure.lifecycle.modules import altered_policy_module, read_policy_module
from dinosure.lifecycle.schemas import AlterationContext, AlterationPackage, AlteredPolicy, Policy
from dinosure.lifecycle.validation import ValidationResult, validate_alteration_params
from dinosure.pricing.config import ProductConfig
from dinosure.pricing.premium import compute_premium

logger = logging.getLogger(__name__)

ContextLike = Union[AlterationContext, Mapping[str, Any]]

# Module fields the premium is recomputed from; every other field is carried as is.
PRICING_ATTRIBUTES = ("age", "species", "health_checks_updated")


def _rands(cents: int) -> str:
    if cents % 100 == 0:
        return f"R{cents // 100}"
    return f"R{cents / 100}"


def _build_update_cover(
    ctx: AlterationContext, params: Mapping[str, Any], cfg: ProductConfig
) -> AlterationPackage:
    policy = Policy.from_dict(ctx.policy)
    module = read_policy_module({k: policy.module.get(k) for k in PRICING_ATTRIBUTES})

    missing = [k for k in PRICING_ATTRIBUTES if getattr(module, k) is None]
    if missing:
        raise DinosureError(f"Policy module is missing pricing attribute(s): {', '.join(missing)}")

    new_cover = params["cover_amount"]
    # Age and risk attributes are fixed at issue; only the cover moves.
    breakdown = compute_premium(
        cover_amount=new_cover,
        age=module.age,
        species=module.species,
        health_checks_updated=module.health_checks_updated,
        cfg=cfg,
    )

    return AlterationPackage(
        sum_assured=new_cover,
        monthly_premium=breakdown.total_premium,
        change_description=(
            f"Cover amount updated from {_rands(policy.sum_assured)} to {_rands(new_cover)}"
        ),
        billing_frequency=cfg.billing_frequency,
        module=altered_policy_module(
            policy.module,
            cover_amount=new_cover,
            old_cover_amount=policy.sum_assured,
            old_premium=policy.monthly_premium,
        ),
        input_data=dict(params),
    )


def _apply_full_replace(ctx: AlterationContext, cfg: ProductConfig) -> AlteredPolicy:
    policy = Policy.from_dict(ctx.policy)
    if ctx.alteration_package is None:
        raise DinosureError("apply_alteration requires an alteration_package in the context")
    package = AlterationPackage.from_dict(ctx.alteration_package)

    return AlteredPolicy(
        package_name=policy.package_name,
        sum_assured=package.sum_assured,
        base_premium=package.monthly_premium,
        monthly_premium=package.monthly_premium,
        start_date=policy.start_date,
        end_date=policy.end_date,
        charges=policy.charges,
        # Full overwrite; the package module already carries the old_* fields.
        module=dict(package.module),
    )


ALTERATION_BUILDERS: Dict[
    str, Callable[[AlterationContext, Mapping[str, Any], ProductConfig], AlterationPackage]
] = {
    "update_cover": _build_update_cover,
}

ALTERATION_APPLIERS: Dict[str, Callable[[AlterationContext, ProductConfig], AlteredPolicy]] = {
    "update_cover": _apply_full_replace,
}


def _lookup(registry: Dict[str, Any], key: str) -> Any:
    handler = registry.get(key)
    if handler is None:
        logger.warning("Unknown alteration hook key: %r", key)
        raise UnknownAlterationHookError(key)
    return handler


def validate_alteration_package_request(
    context: ContextLike,
    params: Any,
    *,
    cfg: Optional[ProductConfig] = None,
) -> ValidationResult:
    ctx = AlterationContext.from_dict(context)
    return validate_alteration_params(ctx.alteration_hook_key, params, cfg=cfg)


def get_alteration(
    context: ContextLike,
    params: Mapping[str, Any],
    *,
    cfg: Optional[ProductConfig] = None,
) -> AlterationPackage:
    ctx = AlterationContext.from_dict(context)
    build = _lookup(ALTERATION_BUILDERS, ctx.alteration_hook_key)
    package = build(ctx, params, cfg or ProductConfig())
    logger.info(
        "Alteration %s priced: %s, premium=%s",
        ctx.alteration_hook_key,
        package.change_description,
        package.monthly_premium,
    )
    return package


def apply_alteration(context: ContextLike, *, cfg: Optional[ProductConfig] = None) -> AlteredPolicy:
    ctx = AlterationContext.from_dict(context)
    apply = _lookup(ALTERATION_APPLIERS, ctx.alteration_hook_key)
    altered = apply(ctx, cfg or ProductConfig())
    logger.info(
        "Alteration %s applied: cover=%s premium=%s",
        ctx.alteration_hook_key,
        altered.sum_assured,
        altered.monthly_premium,
    )
    return altered
