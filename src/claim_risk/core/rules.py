"""
Scoring rule definitions.
A rule pairs a named predicate with the score increment it contributes.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .models import RiskFactors


@dataclass(frozen=True)
class ScoringRule:
    """Definition of a scoring rule."""

    rule_id: str
    name: str
    factor: str
    increment: float
    predicate: Callable[[RiskFactors], bool]
    description: str = ""

    def applies(self, factors: RiskFactors) -> bool:
        return self.predicate(factors)


def fired_rules(rules: Iterable[ScoringRule], factors: RiskFactors) -> list[ScoringRule]:
    """Return the rules whose predicate holds, in definition order."""
    return [rule for rule in rules if rule.applies(factors)]


def list_rules(rules: Iterable[ScoringRule]) -> list[dict[str, object]]:
    """List rules in a display-friendly form."""
    return [
        {
            "rule_id": rule.rule_id,
            "name": rule.name,
            "factor": rule.factor,
            "increment": rule.increment,
            "description": rule.description,
        }
        for rule in rules
    ]
