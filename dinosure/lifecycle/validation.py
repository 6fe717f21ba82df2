"""
Request validation for external input.

Every schema runs in collect-all mode: pydantic reports each violated field in
one pass, and each violation becomes one entry in ValidationResult.error.
Validation failures are returned, never raised. The one exception is an
unknown alteration hook key, which is a configuration error and raises
UnknownAlterationHookError.

Bounds depend on "today" and on the ProductConfig, both passed in through the
validation context so the same payload always validates the same way for a
given day and product configuration.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from dinosure.errors import UnknownAlterationHookError
from dinosure.pricing.config import DinosaurColour, ProductConfig, Species
from dinosure.utils import dates

logger = logging.getLogger(__name__)

# Dates arrive as plain dates or as timestamps; the window checks use the date.
DateInput = Union[datetime, date]


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[List[Dict[str, Any]]]
    value: Optional[Dict[str, Any]]

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _today(info: ValidationInfo) -> date:
    ctx = info.context or {}
    return ctx.get("today") or dates.today()


def _cfg(info: ValidationInfo) -> ProductConfig:
    ctx = info.context or {}
    return ctx.get("cfg") or ProductConfig()


def _within(v: int, lo: int, hi: int) -> int:
    if v < lo:
        raise PydanticCustomError("greater_than_equal", "Input should be greater than or equal to {ge}", {"ge": lo})
    if v > hi:
        raise PydanticCustomError("less_than_equal", "Input should be less than or equal to {le}", {"le": hi})
    return v


# -----------------------------
# Schemas
# -----------------------------
class _RequestSchema(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class _CoverAmount(_RequestSchema):
    cover_amount: int

    @field_validator("cover_amount")
    @classmethod
    def _cover_bounds(cls, v: int, info: ValidationInfo) -> int:
        cfg = _cfg(info)
        return _within(v, cfg.min_cover_amount, cfg.max_cover_amount)


class QuoteRequest(_CoverAmount):
    start_date: DateInput = Field(union_mode="left_to_right")
    birth_date: DateInput = Field(union_mode="left_to_right")
    species: Species
    health_checks_updated: StrictBool

    @field_validator("start_date")
    @classmethod
    def _start_date_window(cls, v: DateInput, info: ValidationInfo) -> date:
        v = dates.to_date(v)
        today = _today(info)
        latest = today + timedelta(days=_cfg(info).max_start_days)
        if v < today:
            raise ValueError(f"start_date must be on or after {today.isoformat()}")
        if v > latest:
            raise ValueError(f"start_date must be on or before {latest.isoformat()}")
        return v

    @field_validator("birth_date")
    @classmethod
    def _birth_date_window(cls, v: DateInput, info: ValidationInfo) -> date:
        v = dates.to_date(v)
        today = _today(info)
        earliest = date(today.year - _cfg(info).max_age_years, 1, 1)
        if v < earliest:
            raise ValueError(f"birth_date must be on or after {earliest.isoformat()}")
        if v > today:
            raise ValueError(f"birth_date must be on or before {today.isoformat()}")
        return v


class UpdateCoverRequest(_CoverAmount):
    pass


class ApplicationRequest(_RequestSchema):
    dinosaur_name: StrictStr = Field(min_length=1)
    dinosaur_colour: DinosaurColour
    ndrn: int

    @field_validator("dinosaur_name")
    @classmethod
    def _name_length(cls, v: str, info: ValidationInfo) -> str:
        limit = _cfg(info).max_name_length
        if len(v) > limit:
            raise PydanticCustomError(
                "string_too_long", "String should have at most {max_length} characters", {"max_length": limit}
            )
        return v

    @field_validator("ndrn")
    @classmethod
    def _ndrn_bounds(cls, v: int, info: ValidationInfo) -> int:
        cfg = _cfg(info)
        return _within(v, cfg.min_ndrn, cfg.max_ndrn)


ALTERATION_SCHEMAS: Dict[str, Type[_RequestSchema]] = {
    "update_cover": UpdateCoverRequest,
}


def alteration_schema(alteration_hook_key: str) -> Type[_RequestSchema]:
    schema = ALTERATION_SCHEMAS.get(alteration_hook_key)
    if schema is None:
        logger.warning("Unknown alteration hook key: %r", alteration_hook_key)
        raise UnknownAlterationHookError(alteration_hook_key)
    return schema


# -----------------------------
# Validation
# -----------------------------
def _error_entries(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


def validate(
    schema: Type[BaseModel],
    payload: Any,
    *,
    today: Optional[date] = None,
    cfg: Optional[ProductConfig] = None,
) -> ValidationResult:
    """
    Validate payload against schema, collecting every violation.

    On success `value` is the sanitised input; on failure `value` echoes the
    raw payload and `error` lists one entry per violated constraint.
    """
    context = {"today": today or dates.today(), "cfg": cfg or ProductConfig()}
    try:
        model = schema.model_validate(payload, context=context)
    except ValidationError as e:
        errors = _error_entries(e)
        logger.info("%s rejected with %d error(s)", schema.__name__, len(errors))
        raw = dict(payload) if isinstance(payload, Mapping) else payload
        return ValidationResult(error=errors, value=raw)

    return ValidationResult(error=None, value=model.model_dump())


def validate_quote_request(
    data: Any,
    *,
    today: Optional[date] = None,
    cfg: Optional[ProductConfig] = None,
) -> ValidationResult:
    return validate(QuoteRequest, data, today=today, cfg=cfg)


def validate_application_data(data: Any, *, cfg: Optional[ProductConfig] = None) -> ValidationResult:
    return validate(ApplicationRequest, data, cfg=cfg)


def validate_alteration_params(
    alteration_hook_key: str,
    params: Any,
    *,
    cfg: Optional[ProductConfig] = None,
) -> ValidationResult:
    return validate(alteration_schema(alteration_hook_key), params, cfg=cfg)
