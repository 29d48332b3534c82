"""
Claim Risk Engine - Main Orchestrator.
Runs feature extraction, the scoring strategies, the ensemble, the
classifier and the explanation generator for a single claim.
"""

import logging
import random
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any

from .core.classifier import classify
from .core.config import EngineConfig
from .core.feature_extractor import FeatureExtractor, coerce_claim
from .core.models import (
    ClaimAttributes,
    ClaimantHistory,
    ModelMetadata,
    RiskAssessmentResult,
    RiskFactors,
    StrategyOutput,
)
from .core.rules import ScoringRule
from .reporting.explanation import ExplanationGenerator
from .strategies import (
    STRATEGY_NAMES,
    EnsembleCombiner,
    LinearStrategy,
    RuleAccumulationStrategy,
    ScoringStrategy,
    StagedIncrementStrategy,
)
from .strategies.rule_accumulation import RULES

logger = logging.getLogger(__name__)


class RiskScoringEngine:
    """
    Main orchestrator for the Claim Risk Engine.

    Holds only the fixed configuration; every call computes fresh
    structures and nothing claim-specific is retained between calls.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
        parallel_strategies: bool = False,
        rules: tuple[ScoringRule, ...] = RULES,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Lookup tables and strategy weights (defaults if None)
            rng: Seeded random source for simulated variance; None disables it
            parallel_strategies: Run the three strategies on a thread pool
            rules: Rule set for the rule-accumulation strategy and explanations
        """
        self.config = config or EngineConfig()
        self.rules = rules
        # A single draw fixes the run; each claim derives its own streams from it
        self.variance_seed = rng.getrandbits(64) if rng is not None else None
        self.extractor = FeatureExtractor(self.config.lookup_tables)
        self.strategies = self.build_strategies()
        self.combiner = EnsembleCombiner(self.config.strategy_weights)
        self.explainer = ExplanationGenerator(rules)
        self.parallel_strategies = parallel_strategies

    def build_strategies(self, claim_id: str | None = None) -> dict[str, ScoringStrategy]:
        """
        Strategy set for one claim.

        With variance enabled every strategy draws from its own stream
        seeded by the run seed, the claim id and the strategy name, so a
        claim's result does not depend on batch order or scheduling.
        """

        def stream(name: str) -> random.Random | None:
            if self.variance_seed is None:
                return None
            return random.Random(f"{self.variance_seed}:{claim_id}:{name}")

        return {
            "rule_accumulation": RuleAccumulationStrategy(
                stream("rule_accumulation"), self.rules
            ),
            "staged_increment": StagedIncrementStrategy(stream("staged_increment")),
            "linear": LinearStrategy(stream("linear")),
        }

    def score_factors(
        self,
        factors: RiskFactors,
        strategies: Mapping[str, ScoringStrategy] | None = None,
    ) -> dict[str, StrategyOutput]:
        """Run every strategy over the factors."""
        strategies = strategies or self.strategies
        if self.parallel_strategies:
            with ThreadPoolExecutor(max_workers=len(STRATEGY_NAMES)) as pool:
                futures = {
                    name: pool.submit(strategies[name].score, factors)
                    for name in STRATEGY_NAMES
                }
                return {name: future.result() for name, future in futures.items()}
        return {name: strategies[name].score(factors) for name in STRATEGY_NAMES}


    def assess(
        self,
        claim: ClaimAttributes | Mapping[str, Any],
        history: ClaimantHistory | None = None,
        now: datetime | None = None,
    ) -> RiskAssessmentResult:
        """
        Assess a single claim.

        Args:
            claim: The claim record (model or raw mapping)
            history: Claimant history; an empty history if None
            now: Assessment time; defaults to the current local time

        Returns:
            Complete risk assessment
        """
        claim = coerce_claim(claim)
        history = history or ClaimantHistory()
        now = now or datetime.now()

        factors = self.extractor.extract(claim, history, now)
        strategies = None
        if self.variance_seed is not None:
            strategies = self.build_strategies(claim.claim_id)
        outputs = self.score_factors(factors, strategies)
        ensemble = self.combiner.combine(outputs)
        category = classify(ensemble.score)
        explanation = self.explainer.explain(ensemble, factors, outputs)

        logger.info(
            "Assessed claim %s: score=%d category=%s confidence=%.2f",
            claim.claim_id,
            ensemble.score,
            category.value,
            ensemble.confidence,
        )
        return RiskAssessmentResult(
            claim_id=claim.claim_id,
            assessed_at=now,
            overall_score=ensemble.score,
            risk_category=category,
            rule_accumulation=outputs["rule_accumulation"],
            staged_increment=outputs["staged_increment"],
            linear=outputs["linear"],
            ensemble=ensemble,
            risk_factors=factors,
            explanation=explanation,
        )

    def get_model_metadata(self) -> ModelMetadata:
        """Static model description for display purposes."""
        return ModelMetadata(
            model_version=self.config.model_version,
            strategy_weights=self.config.strategy_weights.as_dict(),
            illustrative_metrics=dict(self.config.illustrative_metrics),
        )


# Convenience function for one-off assessments
def assess_claim(
    claim: ClaimAttributes | Mapping[str, Any],
    history: ClaimantHistory | None = None,
    now: datetime | None = None,
) -> RiskAssessmentResult:
    """
    Convenience function for quick claim assessments.

    Args:
        claim: The claim to assess
        history: Claimant history
        now: Assessment time

    Returns:
        Complete risk assessment
    """
    engine = RiskScoringEngine()
    return engine.assess(claim, history, now)
