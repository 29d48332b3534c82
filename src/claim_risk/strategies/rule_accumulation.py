"""
Rule-Accumulation Strategy.
Adds a fixed increment to a base score for every threshold rule that fires.
"""

import logging
import random

from ..core import predicates
from ..core.models import RiskFactors, StrategyOutput
from ..core.rules import ScoringRule, fired_rules
from .base import ScoringStrategy, clamp_confidence, clamp_score

logger = logging.getLogger(__name__)

BASE_SCORE = 50
BASE_CONFIDENCE = 0.75
CONFIDENCE_PER_RULE = 0.02
SCORE_VARIANCE = 10.0
CONFIDENCE_VARIANCE = 0.2

RULES: tuple[ScoringRule, ...] = (
    ScoringRule(
        rule_id="RA-001",
        name="Night-time incident",
        factor="temporal",
        increment=15,
        predicate=predicates.is_night_incident,
        description="Incident occurred between 22:00 and 06:59",
    ),
    ScoringRule(
        rule_id="RA-002",
        name="Amount anomaly",
        factor="amount_ratio",
        increment=20,
        predicate=predicates.has_amount_anomaly,
        description="Claimed amount exceeds estimated damage by more than 50%",
    ),
    ScoringRule(
        rule_id="RA-003",
        name="Fraud history",
        factor="claimant_history",
        increment=25,
        predicate=predicates.has_fraud_history,
        description="Claimant has at least one confirmed fraud",
    ),
    ScoringRule(
        rule_id="RA-004",
        name="High-risk area",
        factor="location",
        increment=10,
        predicate=predicates.in_high_risk_area,
        description="Incident city is on the high-risk list",
    ),
    ScoringRule(
        rule_id="RA-005",
        name="New vehicle",
        factor="vehicle",
        increment=8,
        predicate=predicates.is_new_vehicle,
        description="Vehicle is less than two years old",
    ),
    ScoringRule(
        rule_id="RA-006",
        name="Suspicious timing",
        factor="timing",
        increment=12,
        predicate=predicates.has_suspicious_timing,
        description="Incident occurred between 02:00 and 05:59",
    ),
)

FEATURE_IMPORTANCE = {
    "claimant_history": 0.25,
    "amount_ratio": 0.20,
    "temporal": 0.15,
    "location": 0.12,
    "vehicle": 0.10,
    "timing": 0.10,
    "other": 0.08,
}


class RuleAccumulationStrategy(ScoringStrategy):
    """
    Threshold rules over the risk factors.

    Starts at 50 and adds each fired rule's increment. Confidence grows
    slightly with the number of rules that fired.
    """

    name = "rule_accumulation"

    def __init__(
        self,
        rng: random.Random | None = None,
        rules: tuple[ScoringRule, ...] = RULES,
    ) -> None:
        super().__init__(rng)
        self.rules = rules

    def score(self, factors: RiskFactors) -> StrategyOutput:
        fired = fired_rules(self.rules, factors)
        raw = BASE_SCORE + sum(rule.increment for rule in fired)
        raw += self.jitter(SCORE_VARIANCE)

        confidence = BASE_CONFIDENCE + CONFIDENCE_PER_RULE * len(fired)
        confidence += self.jitter(CONFIDENCE_VARIANCE)

        output = StrategyOutput(
            strategy=self.name,
            score=clamp_score(raw),
            confidence=clamp_confidence(confidence),
            importance=dict(FEATURE_IMPORTANCE),
        )
        logger.debug(
            "%s fired %s -> score=%d", self.name, [r.rule_id for r in fired], output.score
        )
        return output
