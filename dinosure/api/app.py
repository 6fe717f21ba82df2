# dinosure/api/app.py
"""
FastAPI hook host for the Dinosure product module (thin API wrapper).

Endpoints:
- GET  /health
- POST /quote                           -> quote packages
- POST /application                     -> application
- POST /policy                          -> issued policy
- POST /alterations/{hook_key}          -> alteration package
- POST /alterations/{hook_key}/apply    -> altered policy
- POST /lifecycle/reactivate            -> update_policy actions
- POST /lifecycle/claim-block-updated   -> update_policy actions
- POST /scheduled/anniversary           -> update_policy actions

The API layer stays thin:
- wraps bodies into hook arguments
- maps validation results to 422 and contract errors to 400
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dinosure.errors import DinosureError
from dinosure.lifecycle.alteration import apply_alteration, get_alteration, validate_alteration_package_request
from dinosure.lifecycle.application import get_application, validate_application_request
from dinosure.lifecycle.hooks import after_claim_block_updated, before_policy_reactivated
from dinosure.lifecycle.policy import get_policy
from dinosure.lifecycle.scheduled import anniversary_cover_increase
from dinosure.lifecycle.validation import ValidationResult, validate_quote_request
from dinosure.pricing.quote import generate_quote
from dinosure.utils.config import configure_logging, get_settings

app = FastAPI(title=get_settings().app_title, version="0.1.0")


@app.on_event("startup")
def _startup() -> None:
    configure_logging()


class ValidationFailed(Exception):
    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__("Validation failed")


@app.exception_handler(ValidationFailed)
async def _validation_failed(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"message": str(exc), "errors": exc.result.error}),
    )


@app.exception_handler(DinosureError)
async def _contract_error(request: Request, exc: DinosureError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc)})


def _require_valid(result: ValidationResult) -> Dict[str, Any]:
    if result.error is not None:
        raise ValidationFailed(result)
    return result.value or {}


# -----------------------------
# Schemas
# -----------------------------
class ApplicationBody(BaseModel):
    data: Dict[str, Any]
    quote_package: Dict[str, Any]
    policyholder: Dict[str, Any] = Field(default_factory=dict)


class PolicyBody(BaseModel):
    application: Dict[str, Any]
    policyholder: Dict[str, Any] = Field(default_factory=dict)
    billing_day: Optional[int] = None


class AlterationBody(BaseModel):
    policy: Dict[str, Any]
    params: Dict[str, Any]
    policyholder: Dict[str, Any] = Field(default_factory=dict)


class ApplyAlterationBody(BaseModel):
    policy: Dict[str, Any]
    alteration_package: Dict[str, Any]
    policyholder: Dict[str, Any] = Field(default_factory=dict)


class LifecycleBody(BaseModel):
    policy: Dict[str, Any]
    policyholder: Dict[str, Any] = Field(default_factory=dict)


class ClaimBlockBody(LifecycleBody):
    claim: Dict[str, Any]


class AnniversaryBody(LifecycleBody):
    effective_date: date


# -----------------------------
# Routes
# -----------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/quote")
def quote(body: Dict[str, Any]) -> Dict[str, Any]:
    data = _require_valid(validate_quote_request(body))
    return {"quote_packages": [p.to_dict() for p in generate_quote(data)]}


@app.post("/application")
def application(body: ApplicationBody) -> Dict[str, Any]:
    data = _require_valid(validate_application_request(body.data, body.policyholder, body.quote_package))
    return get_application(data, body.policyholder, body.quote_package).to_dict()


@app.post("/policy")
def policy(body: PolicyBody) -> Dict[str, Any]:
    return get_policy(body.application, body.policyholder, body.billing_day).to_dict()


@app.post("/alterations/{hook_key}")
def alteration(hook_key: str, body: AlterationBody) -> Dict[str, Any]:
    context = {"alteration_hook_key": hook_key, "policy": body.policy, "policyholder": body.policyholder}
    params = _require_valid(validate_alteration_package_request(context, body.params))
    return get_alteration(context, params).to_dict()


@app.post("/alterations/{hook_key}/apply")
def alteration_apply(hook_key: str, body: ApplyAlterationBody) -> Dict[str, Any]:
    context = {
        "alteration_hook_key": hook_key,
        "policy": body.policy,
        "policyholder": body.policyholder,
        "alteration_package": body.alteration_package,
    }
    return apply_alteration(context).to_dict()


@app.post("/lifecycle/reactivate")
def reactivate(body: LifecycleBody) -> Dict[str, Any]:
    actions = before_policy_reactivated(body.policy, body.policyholder)
    return {"actions": [a.to_dict() for a in actions]}


@app.post("/lifecycle/claim-block-updated")
def claim_block_updated(body: ClaimBlockBody) -> Dict[str, Any]:
    actions = after_claim_block_updated(body.claim, body.policy, body.policyholder)
    return {"actions": [a.to_dict() for a in actions or []]}


@app.post("/scheduled/anniversary")
def anniversary(body: AnniversaryBody) -> Dict[str, Any]:
    actions = anniversary_cover_increase(body.policy, body.policyholder, body.effective_date)
    return {"actions": [a.to_dict() for a in actions]}
