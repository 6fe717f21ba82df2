"""
Stage-typed module state.

The module is an open mapping that accumulates across the lifecycle. Each
stage has a pydantic model naming the fields guaranteed at that stage; extra
keys are allowed so later annotations (reactivation_date, claim flags,
anniversary markers) pass through untouched.

    QuoteModule -> ApplicationModule -> PolicyModule -> AlteredPolicyModule

The conversion functions validate the stage guarantee and return plain dicts,
which is what records and actions carry. Host-supplied module values are
returned verbatim; validation never rewrites them. Lifecycle annotations only
check the keys they write, so legacy values already on a live policy pass
through as they are. A stage that fails its check raises DinosureError.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dinosure.errors import DinosureError
from dinosure.pricing.config import DinosaurColour, Species
from dinosure.pricing.premium import PremiumBreakdown

DateValue = Union[datetime, date, str]


class QuoteModule(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, use_enum_values=True)

    start_date: date
    cover_amount: int
    birth_date: date
    species: Species
    health_checks_updated: bool
    age: int
    premium_breakdown: PremiumBreakdown

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class ApplicationModule(QuoteModule):
    dinosaur_name: str
    dinosaur_colour: DinosaurColour
    ndrn: int


class PolicyModule(BaseModel):
    """Read model of a live policy's module as the platform hands it over."""

    model_config = ConfigDict(extra="allow", frozen=True)

    start_date: Optional[DateValue] = None
    cover_amount: Optional[int] = None
    birth_date: Optional[DateValue] = None
    species: Optional[str] = None
    health_checks_updated: Optional[bool] = None
    age: Optional[int] = None
    premium_breakdown: Optional[Dict[str, Any]] = None

    dinosaur_name: Optional[str] = None
    dinosaur_colour: Optional[str] = None
    ndrn: Optional[int] = None

    reactivation_date: Optional[str] = None
    extraction_has_been_claimed: Optional[bool] = None
    fence_repair_has_been_claimed: Optional[bool] = None
    anniversary_increase_applied: Optional[str] = None
    previous_cover_amount: Optional[int] = None
    previous_premium: Optional[int] = None


class AlteredPolicyModule(PolicyModule):
    cover_amount: int
    old_cover_amount: int
    old_premium: Optional[int] = Field(...)


def _check(model: Type[BaseModel], data: Mapping[str, Any]) -> BaseModel:
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise DinosureError(f"{model.__name__} has invalid field(s): {fields}") from e


def quote_module(
    risk_profile: Mapping[str, Any],
    age: int,
    breakdown: PremiumBreakdown,
) -> Dict[str, Any]:
    return QuoteModule(
        start_date=risk_profile["start_date"],
        cover_amount=risk_profile["cover_amount"],
        birth_date=risk_profile["birth_date"],
        species=risk_profile["species"],
        health_checks_updated=risk_profile["health_checks_updated"],
        age=age,
        premium_breakdown=breakdown,
    ).to_dict()


def application_module(quote: Mapping[str, Any], application_fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Quote module merged with the underwriting fields; the latter win."""
    merged = {**quote, **application_fields}
    _check(ApplicationModule, merged)
    return merged


def policy_module(application: Mapping[str, Any]) -> Dict[str, Any]:
    _check(PolicyModule, application)
    return dict(application)


def altered_policy_module(
    policy: Mapping[str, Any],
    *,
    cover_amount: int,
    old_cover_amount: int,
    old_premium: Optional[int],
) -> Dict[str, Any]:
    changes = {
        "cover_amount": cover_amount,
        "old_cover_amount": old_cover_amount,
        "old_premium": old_premium,
    }
    _check(AlteredPolicyModule, changes)
    return {**policy, **changes}


def annotate(policy: Mapping[str, Any], **annotations: Any) -> Dict[str, Any]:
    """Full policy module plus lifecycle annotations, ready for update_policy."""
    _check(PolicyModule, annotations)
    return {**policy, **annotations}


def read_policy_module(module: Mapping[str, Any]) -> PolicyModule:
    return _check(PolicyModule, module)
