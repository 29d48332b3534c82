"""
Core data models for the Claim Risk Engine.
Uses Pydantic for validation and serialization.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ClaimType(str, Enum):
    """Type of incident declared on the claim."""

    COLLISION = "COLLISION"
    THEFT = "THEFT"
    VANDALISM = "VANDALISM"
    NATURAL_DISASTER = "NATURAL_DISASTER"
    OTHER = "OTHER"


class RiskCategory(str, Enum):
    """Risk bucket derived from the ensemble score."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DensityCategory(str, Enum):
    """Urban density of the incident province."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class FrozenModel(BaseModel):
    """Base for immutable engine structures."""

    model_config = ConfigDict(frozen=True)


class ClaimAttributes(FrozenModel):
    """Claim record as read from the claim store."""

    claim_id: str | None = None
    incident_date: date
    incident_time: str = Field(description="Local time of the incident, HH:MM")
    claimed_amount: float = Field(ge=0)
    estimated_damage: float = Field(ge=0)
    incident_city: str
    incident_province: str
    vehicle_make: str
    vehicle_model: str
    vehicle_year: int
    claimant_id: str
    claim_type: ClaimType


class ClaimantHistory(FrozenModel):
    """Summary of a claimant's past claims, supplied by the claim store."""

    previous_claims: int = Field(default=0, ge=0)
    previous_fraud: int = Field(default=0, ge=0)
    average_claim_amount: float = Field(default=0.0, ge=0)
    repeat_location: bool = False
    similar_vehicle: bool = False


class RiskFactors(FrozenModel):
    """Normalized signals extracted from a single claim."""

    # Temporal
    incident_hour: int = Field(ge=0, le=23)
    incident_day_of_week: int = Field(ge=0, le=6)
    incident_month: int = Field(ge=1, le=12)
    days_since_incident: int = Field(ge=0)

    # Financial
    claimed_amount: float = Field(ge=0)
    amount_to_damage_ratio: float | None = Field(
        default=None,
        description="claimed / estimated damage; None when damage is zero",
    )

    # Location
    is_high_risk_area: bool
    urban_density: DensityCategory

    # Vehicle
    vehicle_age: int = Field(ge=0)
    is_luxury_vehicle: bool
    vehicle_risk_category: RiskCategory

    # Claim
    claim_type: ClaimType | None = None

    # Claimant
    claimant_history: ClaimantHistory

    # Patterns
    is_repeat_location: bool = False
    is_similar_vehicle: bool = False
    suspicious_timing: bool = False


class StrategyOutput(FrozenModel):
    """Result of one scoring strategy."""

    strategy: str
    score: int = Field(ge=1, le=100)
    confidence: float = Field(ge=0.0, le=1.0)
    importance: dict[str, float] = Field(default_factory=dict)


class EnsembleResult(FrozenModel):
    """Fixed-weight combination of the strategy outputs."""

    score: int = Field(ge=1, le=100)
    confidence: float = Field(ge=0.0, le=1.0)
    weights: dict[str, float]


class KeyFactor(FrozenModel):
    """A ranked contributor to the overall score."""

    factor: str
    impact: int
    description: str


class Explanation(FrozenModel):
    """Human-readable account of an assessment."""

    summary: str
    key_factors: list[KeyFactor] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class RiskAssessmentResult(FrozenModel):
    """Complete output of the scoring pipeline for one claim."""

    claim_id: str | None = None
    assessed_at: datetime
    overall_score: int = Field(ge=1, le=100)
    risk_category: RiskCategory
    rule_accumulation: StrategyOutput
    staged_increment: StrategyOutput
    linear: StrategyOutput
    ensemble: EnsembleResult
    risk_factors: RiskFactors
    explanation: Explanation

    @property
    def strategy_outputs(self) -> dict[str, StrategyOutput]:
        """Strategy outputs keyed by strategy name."""
        return {
            "rule_accumulation": self.rule_accumulation,
            "staged_increment": self.staged_increment,
            "linear": self.linear,
        }


class ModelMetadata(FrozenModel):
    """Static description of the scoring policy, for display only."""

    model_version: str
    strategy_weights: dict[str, float]
    illustrative_metrics: dict[str, float]
    metrics_are_illustrative: bool = True
    metrics_note: str = (
        "Static configuration values for display; not measured against "
        "real claim outcomes."
    )
