"""
Tests for batch assessment and the service boundary.
"""

import logging
import random
import threading

import pytest

from claim_risk import (
    AssessmentCancelledError,
    AssessmentRequest,
    AssessmentService,
    BatchCoordinator,
    BatchTooLargeError,
    ClaimantHistory,
    ClaimAttributes,
    EngineSettings,
    InMemoryClaimStore,
    InvalidInputError,
    NotFoundError,
    RiskEngineError,
    RiskScoringEngine,
    format_batch_summary,
)
from claim_risk.stores import ClaimStore


@pytest.fixture
def store(high_risk_claim: ClaimAttributes, low_risk_claim: ClaimAttributes) -> InMemoryClaimStore:
    """Store with four claims: CLM-1, CLM-2, CLM-4, CLM-5."""
    claims = [
        high_risk_claim.model_copy(update={"claim_id": "CLM-1"}),
        low_risk_claim.model_copy(update={"claim_id": "CLM-2"}),
        high_risk_claim.model_copy(update={"claim_id": "CLM-4"}),
        low_risk_claim.model_copy(update={"claim_id": "CLM-5"}),
    ]
    return InMemoryClaimStore(
        claims,
        histories={high_risk_claim.claimant_id: ClaimantHistory(previous_fraud=1)},
    )


@pytest.fixture
def coordinator(store: InMemoryClaimStore) -> BatchCoordinator:
    return BatchCoordinator(RiskScoringEngine(), store)


class RecordingStore:
    """Wraps a store and records every claim lookup."""

    def __init__(self, inner: InMemoryClaimStore, on_get=None) -> None:
        self.inner = inner
        self.requested: list[str] = []
        self.on_get = on_get

    def get_claim(self, claim_id: str) -> ClaimAttributes:
        self.requested.append(claim_id)
        if self.on_get is not None:
            self.on_get(claim_id)
        return self.inner.get_claim(claim_id)

    def get_claimant_history(self, claimant_id: str) -> ClaimantHistory:
        return self.inner.get_claimant_history(claimant_id)


class TestInMemoryClaimStore:
    def test_satisfies_protocol(self, store: InMemoryClaimStore) -> None:
        assert isinstance(store, ClaimStore)
        assert len(store) == 4

    def test_unknown_claim(self, store: InMemoryClaimStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            store.get_claim("nope")
        assert exc_info.value.claim_id == "nope"

    def test_unknown_claimant_has_empty_history(self, store: InMemoryClaimStore) -> None:
        assert store.get_claimant_history("unknown") == ClaimantHistory()


class TestBatchCoordinator:
    """Tests for BatchCoordinator."""

    def test_isolates_missing_claim(self, coordinator: BatchCoordinator, now) -> None:
        """Five ids with the third unknown: four results, one NotFoundError."""
        ids = ["CLM-1", "CLM-2", "CLM-3", "CLM-4", "CLM-5"]
        batch = coordinator.assess_batch(ids, now=now)

        assert len(batch) == 5
        assert set(batch.outcomes) == set(ids)
        assert len(batch.successes) == 4
        assert list(batch.errors) == ["CLM-3"]
        error = batch["CLM-3"].error
        assert isinstance(error, NotFoundError)
        assert error.claim_id == "CLM-3"
        assert batch.cancelled is False

    def test_uses_claimant_history(self, coordinator: BatchCoordinator, now) -> None:
        batch = coordinator.assess_batch(["CLM-1"], now=now)
        result = batch["CLM-1"].result
        assert result.risk_factors.claimant_history.previous_fraud == 1

    def test_matches_single_assessment(
        self, coordinator: BatchCoordinator, store: InMemoryClaimStore, now
    ) -> None:
        batch = coordinator.assess_batch(["CLM-2"], now=now)
        claim = store.get_claim("CLM-2")
        single = RiskScoringEngine().assess(
            claim, store.get_claimant_history(claim.claimant_id), now
        )
        assert batch["CLM-2"].result == single

    def test_duplicates_assessed_once(self, store: InMemoryClaimStore, now) -> None:
        recording = RecordingStore(store)
        coordinator = BatchCoordinator(RiskScoringEngine(), recording)
        batch = coordinator.assess_batch(["CLM-1", "CLM-1", "CLM-2"], now=now)

        assert len(batch) == 2
        assert sorted(recording.requested) == ["CLM-1", "CLM-2"]

    def test_too_large_rejected_before_work(self, store: InMemoryClaimStore, now) -> None:
        recording = RecordingStore(store)
        coordinator = BatchCoordinator(RiskScoringEngine(), recording, max_batch_size=3)

        with pytest.raises(BatchTooLargeError) as exc_info:
            coordinator.assess_batch(["CLM-1", "CLM-2", "CLM-4", "CLM-5"], now=now)
        assert exc_info.value.limit == 3
        assert recording.requested == []

    def test_default_limit_is_100(self, coordinator: BatchCoordinator) -> None:
        with pytest.raises(BatchTooLargeError):
            coordinator.assess_batch([f"CLM-{i}" for i in range(101)])

    def test_invalid_claim_isolated(
        self, store: InMemoryClaimStore, high_risk_claim: ClaimAttributes, now
    ) -> None:
        store.add_claim(high_risk_claim.model_copy(update={"claim_id": "BAD", "incident_time": "x"}))
        batch = BatchCoordinator(RiskScoringEngine(), store).assess_batch(["BAD", "CLM-1"], now=now)

        error = batch["BAD"].error
        assert isinstance(error, InvalidInputError)
        assert error.field == "incident_time"
        assert batch["CLM-1"].ok

    def test_unexpected_error_isolated(self, store: InMemoryClaimStore, now) -> None:
        def explode(claim_id: str) -> None:
            if claim_id == "CLM-2":
                raise RuntimeError("database went away")

        coordinator = BatchCoordinator(RiskScoringEngine(), RecordingStore(store, explode))
        batch = coordinator.assess_batch(["CLM-1", "CLM-2"], now=now)

        error = batch["CLM-2"].error
        assert isinstance(error, RiskEngineError)
        assert "database went away" in str(error)
        assert batch["CLM-1"].ok

    def test_seeded_variance_independent_of_batch_order(
        self, store: InMemoryClaimStore, now
    ) -> None:
        """With a seeded engine a claim scores the same alone or after others."""
        alone = BatchCoordinator(
            RiskScoringEngine(rng=random.Random(5)), store, max_workers=1
        ).assess_batch(["CLM-1"], now=now)
        mixed = BatchCoordinator(
            RiskScoringEngine(rng=random.Random(5)), store, max_workers=3
        ).assess_batch(["CLM-2", "CLM-5", "CLM-1", "CLM-4"], now=now)

        assert mixed["CLM-1"].result == alone["CLM-1"].result

    def test_error_message_names_claim(self, store: InMemoryClaimStore, now) -> None:
        def vanish(claim_id: str) -> None:
            raise NotFoundError("record vanished")

        coordinator = BatchCoordinator(RiskScoringEngine(), RecordingStore(store, vanish))
        error = coordinator.assess_batch(["CLM-1"], now=now)["CLM-1"].error

        assert error.claim_id == "CLM-1"
        assert str(error) == "[lookup] claim CLM-1: record vanished"

    def test_cancellation_keeps_partial_results(self, store: InMemoryClaimStore, now) -> None:
        """Cancelling stops new launches; in-flight work completes."""
        cancel = threading.Event()
        recording = RecordingStore(store, on_get=lambda claim_id: cancel.set())
        coordinator = BatchCoordinator(RiskScoringEngine(), recording, max_workers=1)

        ids = ["CLM-1", "CLM-2", "CLM-4", "CLM-5"]
        batch = coordinator.assess_batch(ids, cancel_event=cancel, now=now)

        assert batch.cancelled is True
        assert len(batch) == 4
        assert batch["CLM-1"].ok
        assert recording.requested == ["CLM-1"]
        for claim_id in ids[1:]:
            assert isinstance(batch[claim_id].error, AssessmentCancelledError)

    def test_cancelled_before_start(self, coordinator: BatchCoordinator, now) -> None:
        cancel = threading.Event()
        cancel.set()
        batch = coordinator.assess_batch(["CLM-1", "CLM-2"], cancel_event=cancel, now=now)
        assert batch.successes == {}
        assert len(batch.errors) == 2

    def test_invalid_limits(self, store: InMemoryClaimStore) -> None:
        with pytest.raises(ValueError):
            BatchCoordinator(RiskScoringEngine(), store, max_workers=0)

    def test_batch_summary(self, coordinator: BatchCoordinator, now) -> None:
        batch = coordinator.assess_batch(["CLM-1", "CLM-3"], now=now)
        summary = format_batch_summary(batch)
        assert "CLM-1" in summary
        assert "NotFoundError" in summary


class TestAssessmentService:
    """Tests for the service boundary."""

    @pytest.fixture
    def service(self, coordinator: BatchCoordinator) -> AssessmentService:
        return AssessmentService(coordinator)

    def test_handle(self, service: AssessmentService, now) -> None:
        response = service.handle(AssessmentRequest(claim_ids=["CLM-1", "CLM-3"]), now=now)

        assert response.success is True
        assert set(response.assessments) == {"CLM-1"}
        assert response.errors["CLM-3"].error_type == "NotFoundError"
        assert response.errors["CLM-3"].stage == "lookup"
        assert response.model_metadata.metrics_are_illustrative is True

    def test_empty_request_rejected(self, service: AssessmentService) -> None:
        with pytest.raises(InvalidInputError):
            service.handle(AssessmentRequest(claim_ids=[]))

    def test_response_serializes(self, service: AssessmentService, now) -> None:
        response = service.handle(AssessmentRequest(claim_ids=["CLM-2"]), now=now)
        payload = response.model_dump(mode="json")
        assert payload["assessments"]["CLM-2"]["risk_category"] == "MEDIUM"
        assert payload["model_metadata"]["model_version"] == "1.2.0"

    def test_from_settings(self, store: InMemoryClaimStore, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        settings = EngineSettings(max_batch_size=2, max_workers=1)
        service = AssessmentService.from_settings(store, settings)
        try:
            assert service.coordinator.max_batch_size == 2
            with pytest.raises(BatchTooLargeError):
                service.handle(AssessmentRequest(claim_ids=["CLM-1", "CLM-2", "CLM-4"]))
        finally:
            logger = logging.getLogger("claim_risk")
            logger.handlers.clear()
            logger.propagate = True

    def test_error_info_message_names_claim(self, store: InMemoryClaimStore, now) -> None:
        def vanish(claim_id: str) -> None:
            raise NotFoundError("record vanished")

        coordinator = BatchCoordinator(RiskScoringEngine(), RecordingStore(store, vanish))
        response = AssessmentService(coordinator).handle(
            AssessmentRequest(claim_ids=["CLM-2"]), now=now
        )
        assert "claim CLM-2" in response.errors["CLM-2"].message
