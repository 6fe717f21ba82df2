"""Tests for the anniversary cover increase and its calendar helpers."""

from datetime import date, datetime, timezone

import pytest

from dinosure.errors import DinosureError
from dinosure.lifecycle.scheduled import anniversary_cover_increase
from dinosure.utils.dates import calendar_age, to_iso, years_between


def test_no_increase_for_policy_younger_than_a_year(policy):
    policy["start_date"] = date(2024, 6, 1)
    assert anniversary_cover_increase(policy, {}, date(2025, 1, 1)) == []


def test_increase_for_policy_older_than_a_year(policy):
    actions = anniversary_cover_increase(policy, {}, date(2025, 1, 1))
    assert len(actions) == 1
    assert actions[0].name == "update_policy"

    module = actions[0].data["module"]
    assert module["cover_amount"] == 6_000_000
    assert module["anniversary_increase_applied"] == "2025-01-01T00:00:00+00:00"
    assert module["previous_cover_amount"] == 5_000_000
    assert module["previous_premium"] == 13375
    assert module["species"] == "Stegosaurus"


def test_increase_is_not_gated_on_january_first(policy):
    """The scheduler owns the calendar trigger, not the function."""
    assert len(anniversary_cover_increase(policy, {}, date(2025, 6, 15))) == 1


def test_increase_is_flat(policy):
    policy.update(start_date=date(2023, 1, 1), sum_assured=9_000_000, monthly_premium=14580)
    policy["module"].update(age=20, species="Tyrannosaurus Rex", cover_amount=9_000_000)
    module = anniversary_cover_increase(policy, {}, date(2025, 1, 1))[0].data["module"]
    assert module["cover_amount"] == 10_000_000


@pytest.mark.parametrize(
    "start_date, effective_date, expected_actions",
    [
        (date(2024, 1, 1), date(2025, 1, 1), 1),
        (date(2024, 1, 2), date(2025, 1, 1), 0),
        (date(2024, 2, 29), date(2025, 2, 28), 1),
        (date(2024, 2, 29), date(2025, 2, 27), 0),
    ],
)
def test_one_year_boundary(policy, start_date, effective_date, expected_actions):
    policy["start_date"] = start_date
    assert len(anniversary_cover_increase(policy, {}, effective_date)) == expected_actions


def test_increase_accepts_iso_strings(policy):
    policy["start_date"] = "2023-06-01"
    actions = anniversary_cover_increase(policy, {}, "2025-01-01T00:00:00+00:00")
    assert actions[0].data["module"]["cover_amount"] == 6_000_000


def test_increase_does_not_mutate_policy(policy):
    anniversary_cover_increase(policy, {}, date(2025, 1, 1))
    assert policy["module"]["cover_amount"] == 5_000_000
    assert "previous_cover_amount" not in policy["module"]


def test_missing_start_date_raises(policy):
    policy["start_date"] = None
    with pytest.raises(DinosureError):
        anniversary_cover_increase(policy, {}, date(2025, 1, 1))


def test_increase_for_bare_read_model():
    """Only start date, cover, premium and module are needed."""
    policy = {
        "start_date": date(2023, 6, 1),
        "sum_assured": 5_000_000,
        "monthly_premium": 13375,
        "module": {"age": 25, "species": "Stegosaurus", "health_checks_updated": True, "cover_amount": 5_000_000},
    }
    actions = anniversary_cover_increase(policy, {}, date(2025, 1, 1))
    assert actions[0].data["module"]["cover_amount"] == 6_000_000


def test_increase_keeps_legacy_module_values(policy):
    policy["module"].update(age="25 years", dinosaur_colour=3)
    module = anniversary_cover_increase(policy, {}, date(2025, 1, 1))[0].data["module"]
    assert module["age"] == "25 years"
    assert module["dinosaur_colour"] == 3
    assert module["cover_amount"] == 6_000_000


def test_increase_accepts_zulu_timestamps(policy):
    policy["start_date"] = "2023-06-01T08:30:00.000Z"
    actions = anniversary_cover_increase(policy, {}, "2025-01-01T00:00:00Z")
    assert actions[0].data["module"]["anniversary_increase_applied"] == "2025-01-01T00:00:00+00:00"


# --- Calendar helpers ---


def test_years_between_is_fractional():
    years = years_between(date(2023, 6, 1), date(2025, 1, 1))
    assert 1.5 < years < 1.6


def test_years_between_whole_years():
    assert years_between(date(2020, 3, 15), date(2025, 3, 15)) == 5.0


def test_years_between_negative_when_reversed():
    assert years_between(date(2025, 1, 1), date(2024, 1, 1)) == -1.0


def test_calendar_age_ignores_birthday():
    assert calendar_age(date(2000, 12, 31), date(2025, 1, 1)) == 25


def test_to_iso_normalises_to_utc():
    assert to_iso(date(2025, 1, 1)) == "2025-01-01T00:00:00+00:00"
    assert to_iso(datetime(2025, 1, 1, 2, 0, tzinfo=timezone.utc)) == "2025-01-01T02:00:00+00:00"
