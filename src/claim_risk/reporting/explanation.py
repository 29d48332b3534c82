"""
Explanation Generator.

Ranks the factors that contributed to an assessment, writes a summary
for the risk category and assembles recommended follow-up actions.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from ..core import predicates
from ..core.classifier import classify
from ..core.models import (
    EnsembleResult,
    Explanation,
    KeyFactor,
    RiskCategory,
    RiskFactors,
    StrategyOutput,
)
from ..core.rules import ScoringRule
from ..strategies.rule_accumulation import RULES

MAX_KEY_FACTORS = 5
MAX_RECOMMENDATIONS = 5
SUMMARY_FACTOR_COUNT = 3
DIVERGENCE_THRESHOLD = 40

BASE_RECOMMENDATIONS = (
    "Verify the documentation provided by the claimant",
    "Check the claimant's claim history",
)

CATEGORY_RECOMMENDATIONS: dict[RiskCategory, tuple[str, ...]] = {
    RiskCategory.HIGH: (
        "Assign a senior investigator for an in-depth review",
        "Request further supporting evidence",
        "Carry out an on-site inspection",
    ),
}

SUMMARY_TEMPLATES: dict[RiskCategory, str] = {
    RiskCategory.LOW: "The claim presents a low risk ({score}/100).",
    RiskCategory.MEDIUM: "The claim presents a medium risk ({score}/100).",
    RiskCategory.HIGH: "The claim presents a high risk ({score}/100).",
}

FACTOR_LEADS: dict[RiskCategory, str] = {
    RiskCategory.LOW: "Main factors",
    RiskCategory.MEDIUM: "Several risk factors were identified",
    RiskCategory.HIGH: "Multiple fraud indicators are present",
}


@dataclass(frozen=True)
class FactorCandidate:
    """
    A risk condition that can be surfaced to the user.

    Candidates backed by a scoring rule take their impact from that
    rule's increment in the active rule set; the others compute it from
    the factors.
    """

    key: str
    label: str
    predicate: Callable[[RiskFactors], bool]
    describe: Callable[[RiskFactors], str]
    rule_id: str | None = None
    impact: Callable[[RiskFactors], int] | None = None
    recommendation: str | None = None

    def impact_for(self, factors: RiskFactors, increments: Mapping[str, float]) -> int | None:
        """Impact under the given rule increments; None if the backing rule is inactive."""
        if self.rule_id is None:
            return self.impact(factors)
        if self.rule_id not in increments:
            return None
        return int(increments[self.rule_id])


CANDIDATES: tuple[FactorCandidate, ...] = (
    FactorCandidate(
        key="fraud_history",
        label="Fraud history",
        predicate=predicates.has_fraud_history,
        rule_id="RA-003",
        describe=lambda f: (
            f"The claimant has {f.claimant_history.previous_fraud} confirmed "
            f"prior fraud case(s)"
        ),
    ),
    FactorCandidate(
        key="amount_anomaly",
        label="Amount anomaly",
        predicate=predicates.has_amount_anomaly,
        rule_id="RA-002",
        describe=lambda f: (
            f"The claimed amount is {f.amount_to_damage_ratio:.1f} times the "
            f"estimated damage"
        ),
        recommendation="Verify the reasonableness of the claimed amount",
    ),
    FactorCandidate(
        key="night_timing",
        label="Night-time incident",
        predicate=predicates.is_night_incident,
        rule_id="RA-001",
        describe=lambda f: (
            f"The incident occurred at {f.incident_hour:02d}:00, during night "
            f"hours with a statistically higher risk"
        ),
        recommendation="Investigate the circumstances of the incident timing",
    ),
    FactorCandidate(
        key="high_risk_area",
        label="High-risk area",
        predicate=predicates.in_high_risk_area,
        rule_id="RA-004",
        describe=lambda f: "The incident area is classified as high fraud risk",
        recommendation="Consult crime statistics for the incident area",
    ),
    FactorCandidate(
        key="vehicle_age",
        label="Vehicle age",
        predicate=predicates.is_old_vehicle,
        impact=lambda f: min(15, f.vehicle_age - predicates.OLD_VEHICLE_MIN_AGE),
        describe=lambda f: f"The vehicle is {f.vehicle_age} years old, above the risk threshold",
        recommendation="Check the vehicle's maintenance records",
    ),
    FactorCandidate(
        key="claim_type",
        label="Claim type",
        predicate=predicates.has_high_risk_claim_type,
        impact=predicates.claim_type_risk,
        describe=lambda f: f"Claims of type {f.claim_type.value} carry an elevated fraud risk",
    ),
)

_CANDIDATES_BY_LABEL = {candidate.label: candidate for candidate in CANDIDATES}


def rank_factors(
    factors: RiskFactors, rules: Iterable[ScoringRule] = RULES
) -> list[KeyFactor]:
    """Key factors whose condition holds, by impact descending (stable), top 5."""
    increments = {rule.rule_id: rule.increment for rule in rules}
    found = []
    for candidate in CANDIDATES:
        if not candidate.predicate(factors):
            continue
        impact = candidate.impact_for(factors, increments)
        if impact is None:
            continue
        found.append(
            KeyFactor(
                factor=candidate.label,
                impact=impact,
                description=candidate.describe(factors),
            )
        )
    found.sort(key=lambda kf: kf.impact, reverse=True)
    return found[:MAX_KEY_FACTORS]



def build_summary(
    score: int,
    category: RiskCategory,
    key_factors: list[KeyFactor],
    strategy_outputs: Mapping[str, StrategyOutput] | None = None,
) -> str:
    parts = [SUMMARY_TEMPLATES[category].format(score=score)]
    if key_factors:
        names = ", ".join(kf.factor for kf in key_factors[:SUMMARY_FACTOR_COUNT])
        parts.append(f"{FACTOR_LEADS[category]}: {names}.")
    else:
        parts.append("No significant risk factors were identified.")

    if strategy_outputs:
        scores = [output.score for output in strategy_outputs.values()]
        if max(scores) - min(scores) > DIVERGENCE_THRESHOLD:
            parts.append("The scoring strategies disagree markedly on this claim.")
    return " ".join(parts)


def build_recommendations(
    category: RiskCategory, key_factors: list[KeyFactor]
) -> list[str]:
    """Base actions, then category actions, then factor actions; unique, max 5."""
    ordered: list[str] = list(BASE_RECOMMENDATIONS)
    ordered.extend(CATEGORY_RECOMMENDATIONS.get(category, ()))
    for key_factor in key_factors:
        candidate = _CANDIDATES_BY_LABEL.get(key_factor.factor)
        if candidate is not None and candidate.recommendation:
            ordered.append(candidate.recommendation)

    # dict preserves first-occurrence order
    return list(dict.fromkeys(ordered))[:MAX_RECOMMENDATIONS]


class ExplanationGenerator:
    """Builds the human-readable explanation for an assessment."""

    def __init__(self, rules: tuple[ScoringRule, ...] = RULES) -> None:
        self.rules = rules

    def explain(
        self,
        ensemble: EnsembleResult,
        factors: RiskFactors,
        strategy_outputs: Mapping[str, StrategyOutput] | None = None,
    ) -> Explanation:
        """
        Generate an explanation.

        Args:
            ensemble: Combined ensemble result
            factors: Risk factors used for scoring
            strategy_outputs: Individual strategy outputs keyed by name

        Returns:
            Summary, ranked key factors and recommendations
        """
        category = classify(ensemble.score)
        key_factors = rank_factors(factors, self.rules)
        return Explanation(
            summary=build_summary(ensemble.score, category, key_factors, strategy_outputs),
            key_factors=key_factors,
            recommendations=build_recommendations(category, key_factors),
        )
