"""
Claim Risk Engine.

Deterministic fraud-risk scoring for insurance claims: feature
extraction, three scoring strategies, a fixed-weight ensemble, risk
classification and human-readable explanations.
"""

from .batch import AssessmentOutcome, BatchCoordinator, BatchResult
from .core.classifier import classify
from .core.config import EngineConfig, EngineSettings, LookupTables, StrategyWeights
from .core.errors import (
    AssessmentCancelledError,
    BatchTooLargeError,
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    RiskEngineError,
)
from .core.models import (
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
from .engine import RiskScoringEngine, assess_claim
from .reporting import AssessmentFormatter, ExplanationGenerator, format_batch_summary
from .service import AssessmentRequest, AssessmentResponse, AssessmentService
from .stores import ClaimStore, InMemoryClaimStore
from .utils.log import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Main Engine
    "RiskScoringEngine",
    "assess_claim",
    # Batch and service
    "AssessmentOutcome",
    "AssessmentRequest",
    "AssessmentResponse",
    "AssessmentService",
    "BatchCoordinator",
    "BatchResult",
    "ClaimStore",
    "InMemoryClaimStore",
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
    # Reporting
    "AssessmentFormatter",
    "ExplanationGenerator",
    "classify",
    "format_batch_summary",
    # Utils
    "configure_logging",
]
