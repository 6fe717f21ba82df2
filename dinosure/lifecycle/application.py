from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from dinosure.lifecycle.modules import application_module
from dinosure.lifecycle.schemas import Application, QuotePackage
from dinosure.lifecycle.validation import ValidationResult, validate_application_data
from dinosure.pricing.config import ProductConfig

logger = logging.getLogger(__name__)


def validate_application_request(
    data: Any,
    policyholder: Optional[Mapping[str, Any]] = None,
    quote_package: Union[QuotePackage, Mapping[str, Any], None] = None,
    *,
    cfg: Optional[ProductConfig] = None,
) -> ValidationResult:
    """
    Validate the underwriting fields (name, colour class, NDRN).
    The policyholder and quote package are part of the hook signature only.
    """
    return validate_application_data(data, cfg=cfg)


def get_application(
    data: Dict[str, Any],
    policyholder: Optional[Mapping[str, Any]],
    quote_package: Union[QuotePackage, Mapping[str, Any]],
) -> Application:
    """
    Assemble an application from an accepted quote.

    Pricing is carried over from the quote, never recomputed. The accepted
    premium is the quote's suggested premium.
    """
    quote = QuotePackage.from_dict(quote_package)

    application = Application(
        package_name=quote.package_name,
        sum_assured=quote.sum_assured,
        base_premium=quote.base_premium,
        monthly_premium=quote.suggested_premium,
        billing_frequency=quote.billing_frequency,
        module=application_module(quote.module, data),
        input_data=dict(data),
    )
    logger.info(
        "Application assembled for policyholder %s: %s premium=%s",
        (policyholder or {}).get("id"),
        application.package_name,
        application.monthly_premium,
    )
    return application
