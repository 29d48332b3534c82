"""
Ensemble Combiner.
Fixed-weight average of the three strategy outputs.
"""

from collections.abc import Mapping
from decimal import Decimal

from ..core.config import StrategyWeights
from ..core.errors import ConfigurationError
from ..core.models import EnsembleResult, StrategyOutput
from .base import clamp_confidence, round_half_up

STRATEGY_NAMES = ("rule_accumulation", "staged_increment", "linear")


class EnsembleCombiner:
    """
    Combines strategy outputs using the configured weights.

    The weights are fixed for the lifetime of the combiner and are
    identical across calls.
    """

    def __init__(self, weights: StrategyWeights | None = None) -> None:
        self.weights = weights or StrategyWeights()
        self._decimal_weights = self.weights.as_decimals()
        if sum(self._decimal_weights.values()) != Decimal("1"):
            raise ConfigurationError("strategy weights must sum to 1")

    def weighted_score(self, outputs: Mapping[str, StrategyOutput]) -> Decimal:
        """Exact weighted sum of the strategy scores."""
        return sum(
            (self._decimal_weights[name] * outputs[name].score for name in STRATEGY_NAMES),
            Decimal(0),
        )

    def combine(self, outputs: Mapping[str, StrategyOutput]) -> EnsembleResult:
        """
        Combine the outputs of all strategies.

        Args:
            outputs: Strategy outputs keyed by strategy name

        Returns:
            Ensemble score (rounded half-up) and weighted confidence
        """
        missing = [name for name in STRATEGY_NAMES if name not in outputs]
        if missing:
            raise KeyError(f"missing strategy outputs: {', '.join(missing)}")

        score = round_half_up(self.weighted_score(outputs))
        confidence = sum(
            float(self._decimal_weights[name]) * outputs[name].confidence
            for name in STRATEGY_NAMES
        )
        return EnsembleResult(
            score=max(1, min(100, score)),
            confidence=clamp_confidence(confidence),
            weights=self.weights.as_dict(),
        )
