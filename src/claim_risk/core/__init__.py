"""
Core components for the Claim Risk Engine.
"""

from .classifier import classify
from .config import EngineConfig, EngineSettings, LookupTables, StrategyWeights
from .errors import (
    AssessmentCancelledError,
    BatchTooLargeError,
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    RiskEngineError,
)
from .feature_extractor import FeatureExtractor, coerce_claim, parse_incident_time
from .models import (
    ClaimAttributes,
    ClaimantHistory,
    ClaimType,
    DensityCategory,
    EnsembleResult,
    Explanation,
    KeyFactor,
    ModelMetadata,
    RiskAssessmentResult,
    RiskCategory,
    RiskFactors,
    StrategyOutput,
)
from .rules import ScoringRule, fired_rules, list_rules

__all__ = [
    # Models
    "ClaimAttributes",
    "ClaimantHistory",
    "ClaimType",
    "DensityCategory",
    "EnsembleResult",
    "Explanation",
    "KeyFactor",
    "ModelMetadata",
    "RiskAssessmentResult",
    "RiskCategory",
    "RiskFactors",
    "StrategyOutput",
    # Configuration
    "EngineConfig",
    "EngineSettings",
    "LookupTables",
    "StrategyWeights",
    # Errors
    "AssessmentCancelledError",
    "BatchTooLargeError",
    "ConfigurationError",
    "InvalidInputError",
    "NotFoundError",
    "RiskEngineError",
    # Extraction and classification
    "FeatureExtractor",
    "classify",
    "coerce_claim",
    "parse_incident_time",
    # Rules
    "ScoringRule",
    "fired_rules",
    "list_rules",
]
