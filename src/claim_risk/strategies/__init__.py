"""
Scoring strategies for the Claim Risk Engine.
"""

from .base import ScoringStrategy, clamp_confidence, clamp_score, round_half_up
from .ensemble import STRATEGY_NAMES, EnsembleCombiner
from .linear import LinearStrategy
from .rule_accumulation import RuleAccumulationStrategy
from .staged_increment import StagedIncrementStrategy

__all__ = [
    "EnsembleCombiner",
    "LinearStrategy",
    "RuleAccumulationStrategy",
    "STRATEGY_NAMES",
    "ScoringStrategy",
    "StagedIncrementStrategy",
    "clamp_confidence",
    "clamp_score",
    "round_half_up",
]
