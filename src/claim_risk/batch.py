"""
Batch Coordinator.

Assesses many claim ids on a bounded worker pool. Each id is isolated:
a failure is recorded for that id and never aborts the batch. A
cancellation event stops new work from being launched while in-flight
assessments finish.
"""

import logging
import threading
from collections import deque
from collections.abc import Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime

from .core.errors import (
    AssessmentCancelledError,
    BatchTooLargeError,
    RiskEngineError,
)
from .core.models import RiskAssessmentResult
from .engine import RiskScoringEngine
from .stores import ClaimStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_BATCH_SIZE = 100
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class AssessmentOutcome:
    """Either a result or the error that prevented one."""

    claim_id: str
    result: RiskAssessmentResult | None = None
    error: RiskEngineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Per-id outcomes of a batch run."""

    outcomes: dict[str, AssessmentOutcome] = field(default_factory=dict)
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.outcomes)

    def __getitem__(self, claim_id: str) -> AssessmentOutcome:
        return self.outcomes[claim_id]

    def __contains__(self, claim_id: object) -> bool:
        return claim_id in self.outcomes

    @property
    def successes(self) -> dict[str, RiskAssessmentResult]:
        return {
            claim_id: outcome.result
            for claim_id, outcome in self.outcomes.items()
            if outcome.result is not None
        }

    @property
    def errors(self) -> dict[str, RiskEngineError]:
        return {
            claim_id: outcome.error
            for claim_id, outcome in self.outcomes.items()
            if outcome.error is not None
        }


class BatchCoordinator:
    """Runs the scoring pipeline for many claim ids."""

    def __init__(
        self,
        engine: RiskScoringEngine,
        store: ClaimStore,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_batch_size < 1 or max_workers < 1:
            raise ValueError("max_batch_size and max_workers must be positive")
        self.engine = engine
        self.store = store
        self.max_batch_size = max_batch_size
        self.max_workers = max_workers

    def assess_one(self, claim_id: str, now: datetime | None = None) -> AssessmentOutcome:
        """Assess a single id, capturing any failure as an outcome."""
        try:
            claim = self.store.get_claim(claim_id)
            # History lookup happens before the pure scoring pipeline
            history = self.store.get_claimant_history(claim.claimant_id)
            result = self.engine.assess(claim, history, now)
        except RiskEngineError as e:
            if e.claim_id is None:
                e.attach_claim_id(claim_id)
            logger.warning("Assessment of claim %s failed: %s", claim_id, e)
            return AssessmentOutcome(claim_id=claim_id, error=e)
        except Exception as e:
            logger.exception("Unexpected error assessing claim %s", claim_id)
            error = RiskEngineError(
                f"{type(e).__name__}: {e}", claim_id=claim_id, stage="assess"
            )
            return AssessmentOutcome(claim_id=claim_id, error=error)
        return AssessmentOutcome(claim_id=claim_id, result=result)

    def assess_batch(
        self,
        claim_ids: Sequence[str],
        cancel_event: threading.Event | None = None,
        now: datetime | None = None,
    ) -> BatchResult:
        """
        Assess a batch of claims.

        Args:
            claim_ids: Ids to assess; duplicates are assessed once
            cancel_event: When set, no further ids are launched
            now: Assessment time shared by the whole batch

        Returns:
            One outcome per distinct requested id

        Raises:
            BatchTooLargeError: If more ids than `max_batch_size` are given
        """
        if len(claim_ids) > self.max_batch_size:
            raise BatchTooLargeError(len(claim_ids), self.max_batch_size)

        now = now or datetime.now()
        queue = deque(dict.fromkeys(claim_ids))
        batch = BatchResult()
        logger.info("Starting batch of %d claims", len(queue))

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            running: dict[Future[AssessmentOutcome], str] = {}
            while True:
                while queue and len(running) < self.max_workers and not cancelled():
                    claim_id = queue.popleft()
                    running[pool.submit(self.assess_one, claim_id, now)] = claim_id
                if not running:
                    break
                done, _ = wait(running, return_when=FIRST_COMPLETED)
                for future in done:
                    claim_id = running.pop(future)
                    batch.outcomes[claim_id] = future.result()

        if queue:
            batch.cancelled = True
            logger.info("Batch cancelled; %d claims not launched", len(queue))
            for claim_id in queue:
                batch.outcomes[claim_id] = AssessmentOutcome(
                    claim_id=claim_id,
                    error=AssessmentCancelledError(
                        "batch cancelled before launch", claim_id=claim_id
                    ),
                )

        logger.info(
            "Finished batch: %d succeeded, %d failed",
            len(batch.successes),
            len(batch.errors),
        )
        return batch
