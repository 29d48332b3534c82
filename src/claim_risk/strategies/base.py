"""
Common base for scoring strategies.
"""

import random
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal

from ..core.models import RiskFactors, StrategyOutput

MIN_SCORE = 1
MAX_SCORE = 100


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_score(value: float | Decimal) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


class ScoringStrategy(ABC):
    """
    A deterministic scoring policy over risk factors.

    Strategies hold no claim-specific state. An optional seeded random
    source simulates model variance for demos; without one, output is a
    pure function of the factors.
    """

    name: str = "strategy"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng

    @property
    def is_deterministic(self) -> bool:
        return self.rng is None

    def jitter(self, spread: float) -> float:
        """Uniform noise in [-spread/2, spread/2), or 0 without a random source."""
        if self.rng is None:
            return 0.0
        return (self.rng.random() - 0.5) * spread

    @abstractmethod
    def score(self, factors: RiskFactors) -> StrategyOutput:
        """Score a set of risk factors."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(deterministic={self.is_deterministic})"
