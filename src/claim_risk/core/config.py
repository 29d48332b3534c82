"""
Engine configuration.

`EngineConfig` holds the fixed lookup tables and strategy weights. It is
built once at process start and injected into the engine; validation
failures raise `ConfigurationError` so a misconfigured engine never
serves requests. `EngineSettings` reads runtime knobs from the
environment (prefix ``CLAIM_RISK_``) or a local ``.env`` file.
"""

from decimal import Decimal
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


DEFAULT_HIGH_RISK_CITIES = ("Napoli", "Palermo", "Catania", "Bari", "Taranto")
DEFAULT_HIGH_DENSITY_PROVINCES = ("RM", "MI", "NA", "TO", "BO", "FI", "BA", "CT")
DEFAULT_MEDIUM_DENSITY_PROVINCES = ("GE", "VE", "VR", "PR", "PA", "ME")
DEFAULT_LUXURY_BRANDS = (
    "BMW",
    "Mercedes-Benz",
    "Audi",
    "Porsche",
    "Maserati",
    "Lamborghini",
)


class LookupTables(BaseModel):
    """Reference lists used by the feature extractor."""

    model_config = ConfigDict(frozen=True)

    high_risk_cities: frozenset[str] = frozenset(DEFAULT_HIGH_RISK_CITIES)
    high_density_provinces: frozenset[str] = frozenset(DEFAULT_HIGH_DENSITY_PROVINCES)
    medium_density_provinces: frozenset[str] = frozenset(DEFAULT_MEDIUM_DENSITY_PROVINCES)
    luxury_brands: frozenset[str] = frozenset(DEFAULT_LUXURY_BRANDS)

    @field_validator("*")
    @classmethod
    def _not_empty(cls, value: frozenset[str], info: ValidationInfo) -> frozenset[str]:
        if not value:
            raise ConfigurationError(f"lookup table '{info.field_name}' is empty")
        return value


class StrategyWeights(BaseModel):
    """Ensemble weight per strategy. Must sum to exactly 1."""

    model_config = ConfigDict(frozen=True)

    rule_accumulation: float = 0.40
    staged_increment: float = 0.35
    linear: float = 0.25

    @model_validator(mode="after")
    def _sum_to_one(self) -> "StrategyWeights":
        for name, weight in self.as_dict().items():
            if not 0 <= weight <= 1:
                raise ConfigurationError(f"weight '{name}' is {weight}, expected 0..1")
        total = sum(self.as_decimals().values())
        if total != Decimal("1"):
            raise ConfigurationError(f"strategy weights sum to {total}, expected 1")
        return self

    def as_decimals(self) -> dict[str, Decimal]:
        """Weights as exact decimals, keyed by strategy name."""
        return {
            "rule_accumulation": Decimal(str(self.rule_accumulation)),
            "staged_increment": Decimal(str(self.staged_increment)),
            "linear": Decimal(str(self.linear)),
        }

    def as_dict(self) -> dict[str, float]:
        return {
            "rule_accumulation": self.rule_accumulation,
            "staged_increment": self.staged_increment,
            "linear": self.linear,
        }


class EngineConfig(BaseModel):
    """Process-wide, read-only configuration for the scoring engine."""

    model_config = ConfigDict(frozen=True)

    lookup_tables: LookupTables = Field(default_factory=LookupTables)
    strategy_weights: StrategyWeights = Field(default_factory=StrategyWeights)
    model_version: str = "1.2.0"
    illustrative_metrics: dict[str, float] = Field(
        default_factory=lambda: {
            "accuracy": 0.87,
            "precision": 0.82,
            "recall": 0.79,
            "f1_score": 0.80,
            "auc_roc": 0.91,
        }
    )

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to a JSON document with the EngineConfig structure

        Returns:
            Validated configuration
        """
        path = Path(path)
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"cannot read {path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"invalid configuration in {path}: {e}") from e


class EngineSettings(BaseSettings):
    """Runtime settings loaded from the environment or `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="CLAIM_RISK_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    max_batch_size: int = Field(default=100, gt=0)
    max_workers: int = Field(default=4, gt=0)
    parallel_strategies: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    config_path: Path | None = None

    def load_config(self) -> EngineConfig:
        """Build the engine configuration, from `config_path` when set."""
        if self.config_path is not None:
            return EngineConfig.from_file(self.config_path)
        return EngineConfig()
