"""Tests for collect-all request validation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from dinosure.errors import UnknownAlterationHookError
from dinosure.lifecycle.validation import (
    ValidationResult,
    validate_alteration_params,
    validate_application_data,
    validate_quote_request,
)
from dinosure.pricing.config import ProductConfig


def _fields(result: ValidationResult):
    return {e["field"] for e in result.error}


# --- Quote ---


def test_quote_valid(quote_request, today):
    result = validate_quote_request(quote_request(), today=today)
    assert result.error is None
    assert result.ok
    assert result.value["species"] == "Tyrannosaurus Rex"
    assert result.value["start_date"] == today + timedelta(days=30)


def test_quote_collects_every_violation(today):
    body = {
        "start_date": today + timedelta(days=70),
        "cover_amount": 5000 * 100,
        "birth_date": date(today.year - 60, 1, 1),
        "species": "Brontosaurus",
        "health_checks_updated": "yes",
    }
    result = validate_quote_request(body, today=today)
    assert result.error is not None
    assert len(result.error) == 5
    assert _fields(result) == set(body)
    # raw payload is echoed back on failure
    assert result.value == body


def test_quote_missing_fields(today):
    result = validate_quote_request({}, today=today)
    assert len(result.error) == 5
    assert {e["type"] for e in result.error} == {"missing"}


def test_quote_rejects_unknown_keys(quote_request, today):
    result = validate_quote_request(quote_request(colour="green"), today=today)
    assert _fields(result) == {"colour"}


def test_quote_rejects_non_object(today):
    result = validate_quote_request(None, today=today)
    assert result.error
    assert result.value is None


@pytest.mark.parametrize("days, ok", [(0, True), (60, True), (61, False), (-1, False)])
def test_quote_start_date_window(quote_request, today, days, ok):
    result = validate_quote_request(quote_request(start_date=today + timedelta(days=days)), today=today)
    assert (result.error is None) is ok


@pytest.mark.parametrize(
    "birth_date, ok",
    [
        (date(1975, 1, 1), True),
        (date(1974, 12, 31), False),
        (date(2025, 1, 15), True),
        (date(2025, 1, 16), False),
    ],
)
def test_quote_birth_date_window(quote_request, today, birth_date, ok):
    result = validate_quote_request(quote_request(birth_date=birth_date), today=today)
    assert (result.error is None) is ok


@pytest.mark.parametrize(
    "cover_amount, ok",
    [(1_000_000, True), (10_000_000, True), (999_999, False), (10_000_001, False), (5_000_000.5, False)],
)
def test_quote_cover_amount_bounds(quote_request, today, cover_amount, ok):
    result = validate_quote_request(quote_request(cover_amount=cover_amount), today=today)
    assert (result.error is None) is ok


def test_quote_accepts_iso_strings(quote_request, today):
    body = quote_request(start_date="2025-02-01", birth_date="2000-06-30")
    result = validate_quote_request(body, today=today)
    assert result.error is None
    assert result.value["start_date"] == date(2025, 2, 1)
    assert result.value["birth_date"] == date(2000, 6, 30)


def test_quote_accepts_timestamps_with_time_of_day(quote_request, today):
    body = quote_request(start_date="2025-02-14T10:23:45.123Z", birth_date="2000-06-30T08:00:00Z")
    result = validate_quote_request(body, today=today)
    assert result.error is None
    assert result.value["start_date"] == date(2025, 2, 14)
    assert result.value["birth_date"] == date(2000, 6, 30)


def test_quote_accepts_datetime_objects(quote_request, today):
    start = datetime(2025, 2, 14, 10, 23, 45, tzinfo=timezone.utc)
    result = validate_quote_request(quote_request(start_date=start), today=today)
    assert result.error is None
    assert result.value["start_date"] == date(2025, 2, 14)


def test_quote_timestamp_outside_window_is_rejected(quote_request, today):
    result = validate_quote_request(quote_request(start_date="2025-03-20T09:00:00Z"), today=today)
    assert _fields(result) == {"start_date"}


def test_quote_bounds_follow_product_config(quote_request, today):
    """A caller-supplied config moves the validation bounds too."""
    cfg = ProductConfig(max_cover_amount=20_000_000, max_start_days=90)
    body = quote_request(cover_amount=15_000_000, start_date=today + timedelta(days=80))
    assert validate_quote_request(body, today=today).error is not None
    assert validate_quote_request(body, today=today, cfg=cfg).error is None


def test_quote_health_checks_must_be_boolean(quote_request, today):
    result = validate_quote_request(quote_request(health_checks_updated=1), today=today)
    assert _fields(result) == {"health_checks_updated"}


# --- Alteration ---


def test_update_cover_valid():
    result = validate_alteration_params("update_cover", {"cover_amount": 7_500_000})
    assert result.error is None
    assert result.value == {"cover_amount": 7_500_000}


def test_update_cover_too_low():
    result = validate_alteration_params("update_cover", {"cover_amount": 5000 * 100})
    assert result.error is not None
    assert _fields(result) == {"cover_amount"}


@pytest.mark.parametrize("params", [{"cover_amount": 7_500_000}, {}, None, {"anything": 1}])
def test_unknown_alteration_key_raises_whatever_the_payload(params):
    with pytest.raises(UnknownAlterationHookError, match='"update_species"'):
        validate_alteration_params("update_species", params)


# --- Application ---


def test_application_valid(application_data):
    result = validate_application_data(application_data)
    assert result.error is None
    assert result.value == application_data


def test_application_collects_every_violation():
    result = validate_application_data({"dinosaur_name": "a" * 101, "dinosaur_colour": "Red", "ndrn": 50000})
    assert len(result.error) == 3
    assert _fields(result) == {"dinosaur_name", "dinosaur_colour", "ndrn"}


def test_application_empty_name():
    result = validate_application_data({"dinosaur_name": "", "dinosaur_colour": "Lilac", "ndrn": 123456})
    assert _fields(result) == {"dinosaur_name"}


def test_application_bounds_follow_product_config():
    cfg = ProductConfig(min_ndrn=1000, max_name_length=5)
    result = validate_application_data({"dinosaur_name": "Rexy", "dinosaur_colour": "Lilac", "ndrn": 1234}, cfg=cfg)
    assert result.error is None

    result = validate_application_data({"dinosaur_name": "Rexy Jr", "dinosaur_colour": "Lilac", "ndrn": 1234}, cfg=cfg)
    assert _fields(result) == {"dinosaur_name"}
    assert result.error[0]["type"] == "string_too_long"


def test_update_cover_bounds_follow_product_config():
    cfg = ProductConfig(min_cover_amount=100_000)
    assert validate_alteration_params("update_cover", {"cover_amount": 500_000}, cfg=cfg).error is None
    result = validate_alteration_params("update_cover", {"cover_amount": 50_000}, cfg=cfg)
    assert result.error[0]["type"] == "greater_than_equal"
