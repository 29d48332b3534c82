"""
Shared fixtures for the Claim Risk Engine tests.
"""

import random
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import pytest

from claim_risk import (
    ClaimAttributes,
    ClaimantHistory,
    ClaimType,
    DensityCategory,
    RiskCategory,
    RiskFactors,
)


@pytest.fixture
def now() -> datetime:
    """Fixed assessment time."""
    return datetime(2025, 6, 15, 12, 0)


@pytest.fixture
def high_risk_claim() -> ClaimAttributes:
    """Theft at 03:15 in Napoli, claimed 2.5x the estimated damage."""
    return ClaimAttributes(
        claim_id="CLM-HIGH-001",
        incident_date=date(2025, 6, 10),
        incident_time="03:15",
        claimed_amount=20000,
        estimated_damage=8000,
        incident_city="Napoli",
        incident_province="NA",
        vehicle_make="Fiat",
        vehicle_model="Panda",
        vehicle_year=2024,
        claimant_id="RSSMRA85A01H501X",
        claim_type=ClaimType.THEFT,
    )


@pytest.fixture
def fraud_history() -> ClaimantHistory:
    return ClaimantHistory(previous_claims=3, previous_fraud=1, average_claim_amount=9500)


@pytest.fixture
def low_risk_claim() -> ClaimAttributes:
    """Afternoon collision in Milano with a matching damage estimate."""
    return ClaimAttributes(
        claim_id="CLM-LOW-001",
        incident_date=date(2025, 6, 10),
        incident_time="14:00",
        claimed_amount=1000,
        estimated_damage=1000,
        incident_city="Milano",
        incident_province="MI",
        vehicle_make="Fiat",
        vehicle_model="Punto",
        vehicle_year=2017,
        claimant_id="VRDLGU70B12F205Z",
        claim_type=ClaimType.COLLISION,
    )


@pytest.fixture
def make_factors() -> Callable[..., RiskFactors]:
    """Factory for RiskFactors with neutral defaults."""

    def _make(**overrides: Any) -> RiskFactors:
        history = overrides.pop("history", ClaimantHistory())
        values: dict[str, Any] = {
            "incident_hour": 14,
            "incident_day_of_week": 2,
            "incident_month": 6,
            "days_since_incident": 5,
            "claimed_amount": 1000.0,
            "amount_to_damage_ratio": 1.0,
            "is_high_risk_area": False,
            "urban_density": DensityCategory.LOW,
            "vehicle_age": 8,
            "is_luxury_vehicle": False,
            "vehicle_risk_category": RiskCategory.LOW,
            "claimant_history": history,
            "is_repeat_location": history.repeat_location,
            "is_similar_vehicle": history.similar_vehicle,
            "suspicious_timing": False,
        }
        values.update(overrides)
        return RiskFactors(**values)

    return _make


def random_factors(rng: random.Random) -> RiskFactors:
    """Arbitrary but valid risk factors."""
    hour = rng.randint(0, 23)
    history = ClaimantHistory(
        previous_claims=rng.randint(0, 10),
        previous_fraud=rng.randint(0, 4),
        average_claim_amount=rng.uniform(0, 50000),
        repeat_location=rng.random() < 0.3,
        similar_vehicle=rng.random() < 0.3,
    )
    return RiskFactors(
        incident_hour=hour,
        incident_day_of_week=rng.randint(0, 6),
        incident_month=rng.randint(1, 12),
        days_since_incident=rng.randint(0, 2000),
        claimed_amount=rng.choice([0.0, rng.uniform(0, 1), rng.uniform(1, 500000)]),
        amount_to_damage_ratio=rng.choice([None, rng.uniform(0, 10)]),
        is_high_risk_area=rng.random() < 0.5,
        urban_density=rng.choice(list(DensityCategory)),
        vehicle_age=rng.randint(0, 40),
        is_luxury_vehicle=rng.random() < 0.5,
        vehicle_risk_category=rng.choice(list(RiskCategory)),
        claimant_history=history,
        is_repeat_location=history.repeat_location,
        is_similar_vehicle=history.similar_vehicle,
        suspicious_timing=2 <= hour <= 5,
    )


@pytest.fixture(params=range(40), ids=lambda seed: f"seed{seed}")
def arbitrary_factors(request: pytest.FixtureRequest) -> RiskFactors:
    """Randomized factor sets from fixed seeds."""
    return random_factors(random.Random(request.param))
