"""
Linear (logit) Strategy.
Fixed-coefficient logistic score over a handful of indicators.
"""

import logging
import math

from ..core import predicates
from ..core.models import RiskFactors, StrategyOutput
from .base import ScoringStrategy, clamp_confidence, clamp_score

logger = logging.getLogger(__name__)

COEFFICIENTS = {
    "intercept": -3.0,
    "claimed_amount_log": 0.8,
    "incident_hour_night": 1.2,
    "claimant_fraud_history": 2.1,
    "vehicle_age": -0.1,
    "high_risk_area": 0.9,
    "amount_ratio_high": 1.5,
}

BASE_CONFIDENCE = 0.70
CONFIDENCE_SPAN = 0.25
MAX_CONFIDENCE = 0.95
CONFIDENCE_VARIANCE = 0.25


def amount_log_term(claimed_amount: float) -> float:
    """log(amount / 1000); zero for non-positive amounts."""
    if claimed_amount <= 0:
        return 0.0
    return math.log(claimed_amount / 1000)


def logistic(logit: float) -> float:
    # Split on sign to avoid overflow in exp()
    if logit >= 0:
        return 1.0 / (1.0 + math.exp(-logit))
    z = math.exp(logit)
    return z / (1.0 + z)


class LinearStrategy(ScoringStrategy):
    """Logistic model with fixed coefficients."""

    name = "linear"

    def logit(self, factors: RiskFactors) -> float:
        c = COEFFICIENTS
        value = c["intercept"]
        value += c["claimed_amount_log"] * amount_log_term(factors.claimed_amount)
        value += c["incident_hour_night"] * int(predicates.is_night_incident(factors))
        value += c["claimant_fraud_history"] * factors.claimant_history.previous_fraud
        value += c["vehicle_age"] * factors.vehicle_age
        value += c["high_risk_area"] * int(predicates.in_high_risk_area(factors))
        value += c["amount_ratio_high"] * int(predicates.has_amount_anomaly(factors))
        return value

    def score(self, factors: RiskFactors) -> StrategyOutput:
        probability = logistic(self.logit(factors))
        score = clamp_score(probability * 100)

        confidence = min(
            MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_SPAN * abs(score - 50) / 50
        )
        confidence += self.jitter(CONFIDENCE_VARIANCE)

        logger.debug("%s p=%.4f -> score=%d", self.name, probability, score)
        return StrategyOutput(
            strategy=self.name,
            score=score,
            confidence=clamp_confidence(confidence),
            importance=dict(COEFFICIENTS),
        )
