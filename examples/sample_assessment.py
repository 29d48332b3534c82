#!/usr/bin/env python3
"""
Sample Assessment Script.
Demonstrates usage of the Claim Risk Engine.
"""

from datetime import date, datetime

from claim_risk import (
    AssessmentFormatter,
    AssessmentRequest,
    AssessmentService,
    BatchCoordinator,
    ClaimantHistory,
    ClaimAttributes,
    ClaimType,
    InMemoryClaimStore,
    RiskScoringEngine,
    configure_logging,
    format_batch_summary,
)


def create_sample_claims() -> list[ClaimAttributes]:
    """Create sample claims for demonstration."""
    return [
        ClaimAttributes(
            claim_id="CLM-2025-0001",
            incident_date=date(2025, 3, 2),
            incident_time="03:40",  # Early-morning incident
            claimed_amount=20000,
            estimated_damage=8000,  # Claimed 2.5x the estimate
            incident_city="Napoli",
            incident_province="NA",
            vehicle_make="BMW",
            vehicle_model="Serie 3",
            vehicle_year=2024,
            claimant_id="RSSMRA85A01H501X",
            claim_type=ClaimType.THEFT,
        ),
        ClaimAttributes(
            claim_id="CLM-2025-0002",
            incident_date=date(2025, 3, 5),
            incident_time="14:30",
            claimed_amount=1500,
            estimated_damage=1400,
            incident_city="Verona",
            incident_province="VR",
            vehicle_make="Fiat",
            vehicle_model="Panda",
            vehicle_year=2012,
            claimant_id="BNCGNN90C41L219K",
            claim_type=ClaimType.COLLISION,
        ),
        ClaimAttributes(
            claim_id="CLM-2025-0003",
            incident_date=date(2025, 3, 7),
            incident_time="23:10",
            claimed_amount=6000,
            estimated_damage=0,  # No estimate yet
            incident_city="Bari",
            incident_province="BA",
            vehicle_make="Audi",
            vehicle_model="A4",
            vehicle_year=2019,
            claimant_id="VRDLGU70B12F205Z",
            claim_type=ClaimType.VANDALISM,
        ),
    ]


def create_sample_store() -> InMemoryClaimStore:
    """Claim store with histories for the sample claimants."""
    return InMemoryClaimStore(
        create_sample_claims(),
        histories={
            "RSSMRA85A01H501X": ClaimantHistory(
                previous_claims=4,
                previous_fraud=1,
                average_claim_amount=11000,
                repeat_location=True,
            ),
            "VRDLGU70B12F205Z": ClaimantHistory(previous_claims=1, average_claim_amount=2500),
        },
    )


def main() -> None:
    """Run sample assessments."""
    configure_logging("INFO")
    now = datetime(2025, 3, 10, 9, 0)

    print("\n" + "=" * 70)
    print("CLAIM RISK ENGINE - SAMPLE ASSESSMENT")
    print("=" * 70 + "\n")

    store = create_sample_store()
    engine = RiskScoringEngine()

    # Single claim, full report
    claim = store.get_claim("CLM-2025-0001")
    result = engine.assess(claim, store.get_claimant_history(claim.claimant_id), now)
    AssessmentFormatter(result).print_full()

    # Batch run, including an unknown id
    coordinator = BatchCoordinator(engine, store, max_workers=2)
    batch = coordinator.assess_batch(
        ["CLM-2025-0001", "CLM-2025-0002", "CLM-2025-0003", "CLM-2025-9999"], now=now
    )
    print()
    print(format_batch_summary(batch))

    # Service boundary response as JSON
    service = AssessmentService(coordinator)
    response = service.handle(AssessmentRequest(claim_ids=["CLM-2025-0002"]), now=now)
    print()
    print(response.model_dump_json(indent=2, include={"errors", "model_metadata"}))


if __name__ == "__main__":
    main()
