"""Pytest fixtures shared by the pricing and lifecycle tests."""

from datetime import date, timedelta

import pytest

TODAY = date(2025, 1, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def quote_request(today):
    """Factory for a valid quote request body relative to `today`."""

    def _make(age=20, cover_amount=5_000_000, species="Tyrannosaurus Rex", health_checks_updated=True, **overrides):
        body = {
            "start_date": today + timedelta(days=30),
            "cover_amount": cover_amount,
            "birth_date": date(today.year - age, 1, 1),
            "species": species,
            "health_checks_updated": health_checks_updated,
        }
        body.update(overrides)
        return body

    return _make


@pytest.fixture
def application_data():
    return {"dinosaur_name": "Rexy", "dinosaur_colour": "Sea green", "ndrn": 555555}


@pytest.fixture
def policy():
    """Live policy read model as the platform hands it to hooks."""
    return {
        "policy_id": "pol_123",
        "package_name": "DinoSure",
        "status": "active",
        "sum_assured": 5_000_000,
        "base_premium": 13375,
        "monthly_premium": 13375,
        "start_date": date(2023, 6, 1),
        "end_date": None,
        "charges": [{"type": "fixed", "name": "admin_fee", "amount": 500}],
        "module": {
            "age": 25,
            "species": "Stegosaurus",
            "health_checks_updated": True,
            "cover_amount": 5_000_000,
        },
    }
