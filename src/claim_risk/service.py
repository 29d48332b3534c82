"""
Service boundary for the surrounding application.

Takes a request carrying claim ids and returns per-id assessments or
errors together with the static model metadata. Transport (HTTP,
queues) is left to the caller.
"""

import threading
from datetime import datetime

from pydantic import BaseModel, Field

from .batch import BatchCoordinator, BatchResult
from .core.config import EngineSettings
from .core.errors import InvalidInputError
from .core.models import ModelMetadata, RiskAssessmentResult
from .engine import RiskScoringEngine
from .stores import ClaimStore
from .utils.log import configure_logging


class AssessmentRequest(BaseModel):
    """Claim ids to assess."""

    claim_ids: list[str]


class AssessmentErrorInfo(BaseModel):
    """Serializable description of a per-id failure."""

    error_type: str
    stage: str
    message: str


class AssessmentResponse(BaseModel):
    """Per-id results plus display metadata."""

    success: bool
    cancelled: bool = False
    assessments: dict[str, RiskAssessmentResult] = Field(default_factory=dict)
    errors: dict[str, AssessmentErrorInfo] = Field(default_factory=dict)
    model_metadata: ModelMetadata


class AssessmentService:
    """Glue between a request and the batch coordinator."""

    def __init__(self, coordinator: BatchCoordinator) -> None:
        self.coordinator = coordinator

    @classmethod
    def from_settings(
        cls, store: ClaimStore, settings: EngineSettings | None = None
    ) -> "AssessmentService":
        """
        Build a service from environment settings.

        Configuration errors surface here, before any request is served.
        """
        settings = settings or EngineSettings()
        configure_logging(settings.log_level, json_output=settings.log_json)
        engine = RiskScoringEngine(
            config=settings.load_config(),
            parallel_strategies=settings.parallel_strategies,
        )
        coordinator = BatchCoordinator(
            engine,
            store,
            max_batch_size=settings.max_batch_size,
            max_workers=settings.max_workers,
        )
        return cls(coordinator)

    def model_metadata(self) -> ModelMetadata:
        return self.coordinator.engine.get_model_metadata()

    def handle(
        self,
        request: AssessmentRequest,
        cancel_event: threading.Event | None = None,
        now: datetime | None = None,
    ) -> AssessmentResponse:
        """Assess the requested claims; raises on an empty or oversized request."""
        if not request.claim_ids:
            raise InvalidInputError("claim_ids", "must be a non-empty list", stage="batch")
        batch = self.coordinator.assess_batch(request.claim_ids, cancel_event, now)
        return self.build_response(batch)

    def build_response(self, batch: BatchResult) -> AssessmentResponse:
        return AssessmentResponse(
            success=True,
            cancelled=batch.cancelled,
            assessments=batch.successes,
            errors={
                claim_id: AssessmentErrorInfo(
                    error_type=type(error).__name__,
                    stage=error.stage,
                    message=str(error),
                )
                for claim_id, error in batch.errors.items()
            },
            model_metadata=self.model_metadata(),
        )
