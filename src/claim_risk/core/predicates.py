"""
Named risk predicates.

Each condition that makes a claim look risky is defined exactly once here
and consumed by both the scoring strategies and the explanation
generator.
"""

from .models import ClaimType, RiskFactors

NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6
SUSPICIOUS_START_HOUR = 2
SUSPICIOUS_END_HOUR = 5

AMOUNT_ANOMALY_RATIO = 1.5
SEVERE_AMOUNT_ANOMALY_RATIO = 2.0

NEW_VEHICLE_MAX_AGE = 2  # exclusive
NEAR_NEW_VEHICLE_MAX_AGE = 1  # exclusive
OLD_VEHICLE_MIN_AGE = 10  # exclusive

CLAIM_TYPE_RISK: dict[ClaimType, int] = {
    ClaimType.THEFT: 25,
    ClaimType.VANDALISM: 15,
    ClaimType.COLLISION: 5,
    ClaimType.NATURAL_DISASTER: 0,
    ClaimType.OTHER: 10,
}
HIGH_RISK_CLAIM_TYPE_MIN = 10  # exclusive


def is_night_hour(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour <= NIGHT_END_HOUR


def is_suspicious_hour(hour: int) -> bool:
    return SUSPICIOUS_START_HOUR <= hour <= SUSPICIOUS_END_HOUR


def is_night_incident(factors: RiskFactors) -> bool:
    """Incident happened during night hours (22:00-06:59)."""
    return is_night_hour(factors.incident_hour)


def has_suspicious_timing(factors: RiskFactors) -> bool:
    return factors.suspicious_timing


def _ratio_exceeds(factors: RiskFactors, threshold: float) -> bool:
    # An undefined ratio carries no anomaly signal
    ratio = factors.amount_to_damage_ratio
    return ratio is not None and ratio > threshold


def has_amount_anomaly(factors: RiskFactors) -> bool:
    """Claimed amount exceeds estimated damage by more than 50%."""
    return _ratio_exceeds(factors, AMOUNT_ANOMALY_RATIO)


def has_severe_amount_anomaly(factors: RiskFactors) -> bool:
    """Claimed amount is more than double the estimated damage."""
    return _ratio_exceeds(factors, SEVERE_AMOUNT_ANOMALY_RATIO)


def has_fraud_history(factors: RiskFactors) -> bool:
    return factors.claimant_history.previous_fraud > 0


def in_high_risk_area(factors: RiskFactors) -> bool:
    return factors.is_high_risk_area


def is_new_vehicle(factors: RiskFactors) -> bool:
    return factors.vehicle_age < NEW_VEHICLE_MAX_AGE


def is_near_new_vehicle(factors: RiskFactors) -> bool:
    return factors.vehicle_age < NEAR_NEW_VEHICLE_MAX_AGE


def is_old_vehicle(factors: RiskFactors) -> bool:
    return factors.vehicle_age > OLD_VEHICLE_MIN_AGE


def is_repeat_location(factors: RiskFactors) -> bool:
    return factors.is_repeat_location


def claim_type_risk(factors: RiskFactors) -> int:
    """Risk weight of the declared claim type; 0 when the type is unknown."""
    if factors.claim_type is None:
        return 0
    return CLAIM_TYPE_RISK[factors.claim_type]


def has_high_risk_claim_type(factors: RiskFactors) -> bool:
    return claim_type_risk(factors) > HIGH_RISK_CLAIM_TYPE_MIN
