"""
Staged-Increment Strategy.

Collects candidate increments for the signals present, sorts them from
strongest to weakest, and applies the top three at 80% weight and the
rest at 50%. Ordering matters: the same signals summed flat would score
differently.
"""

import logging
from decimal import Decimal

from ..core import predicates
from ..core.models import RiskFactors, StrategyOutput
from .base import ScoringStrategy, clamp_confidence, clamp_score

logger = logging.getLogger(__name__)

BASE_SCORE = Decimal("45")
BOOSTED_COUNT = 3
BOOSTED_WEIGHT = Decimal("0.8")
TAIL_WEIGHT = Decimal("0.5")

BASE_CONFIDENCE = 0.80
CONFIDENCE_PER_SIGNAL = 0.03
MAX_CONFIDENCE = 0.95
CONFIDENCE_VARIANCE = 0.15

# (factor, increment, predicate)
SIGNALS = (
    ("fraud_history", 30, predicates.has_fraud_history),
    ("amount_anomaly", 25, predicates.has_severe_amount_anomaly),
    ("timing_anomaly", 18, predicates.has_suspicious_timing),
    ("location_repeat", 15, predicates.is_repeat_location),
    ("vehicle_new", 12, predicates.is_near_new_vehicle),
)

FEATURE_IMPORTANCE = {
    "fraud_history": 0.30,
    "amount_anomaly": 0.25,
    "timing_anomaly": 0.18,
    "location_repeat": 0.15,
    "vehicle_new": 0.12,
}


def staged_total(increments: list[int]) -> Decimal:
    """Weighted sum of increments: strongest three boosted, remainder damped."""
    ordered = sorted(increments, reverse=True)
    boosted = sum((Decimal(v) * BOOSTED_WEIGHT for v in ordered[:BOOSTED_COUNT]), Decimal(0))
    tail = sum((Decimal(v) * TAIL_WEIGHT for v in ordered[BOOSTED_COUNT:]), Decimal(0))
    return boosted + tail


class StagedIncrementStrategy(ScoringStrategy):
    """Boosted-increment scoring emphasizing the strongest few signals."""

    name = "staged_increment"

    def score(self, factors: RiskFactors) -> StrategyOutput:
        increments = [
            increment for _, increment, predicate in SIGNALS if predicate(factors)
        ]
        raw = BASE_SCORE + staged_total(increments)

        confidence = min(
            MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_PER_SIGNAL * len(increments)
        )
        confidence += self.jitter(CONFIDENCE_VARIANCE)

        output = StrategyOutput(
            strategy=self.name,
            score=clamp_score(raw),
            confidence=clamp_confidence(confidence),
            importance=dict(FEATURE_IMPORTANCE),
        )
        logger.debug("%s increments=%s -> score=%d", self.name, increments, output.score)
        return output
