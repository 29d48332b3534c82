"""
Feature extraction.

Turns a raw claim record into the normalized `RiskFactors` consumed by
the scoring strategies. The claimant history is supplied by the caller;
nothing here performs I/O.
"""

import logging
import re
from collections.abc import Mapping
from datetime import datetime, time
from typing import Any

from pydantic import ValidationError

from .config import LookupTables
from .errors import InvalidInputError
from .models import (
    ClaimAttributes,
    ClaimantHistory,
    DensityCategory,
    RiskCategory,
    RiskFactors,
)
from .predicates import is_suspicious_hour

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def coerce_claim(claim: ClaimAttributes | Mapping[str, Any]) -> ClaimAttributes:
    """
    Validate a raw mapping into `ClaimAttributes`.

    Pydantic validation errors are reported as `InvalidInputError`
    naming the first offending field.
    """
    if isinstance(claim, ClaimAttributes):
        return claim
    try:
        return ClaimAttributes.model_validate(dict(claim))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "claim"
        raise InvalidInputError(
            field, first["msg"], claim_id=claim.get("claim_id")
        ) from e


def parse_incident_time(value: str | None, claim_id: str | None = None) -> time:
    """Parse an HH:MM[:SS] string into a time of day."""
    match = _TIME_PATTERN.match(value or "")
    if match is None:
        raise InvalidInputError(
            "incident_time", f"cannot parse {value!r} as HH:MM", claim_id=claim_id
        )
    hour, minute, second = (int(part) if part else 0 for part in match.groups())
    try:
        return time(hour, minute, second)
    except ValueError as e:
        raise InvalidInputError("incident_time", str(e), claim_id=claim_id) from e


class FeatureExtractor:
    """
    Derives risk factors from claim attributes.

    All category lookups use the injected `LookupTables`, so results are
    reproducible without network or database access.
    """

    def __init__(self, tables: LookupTables | None = None) -> None:
        self.tables = tables or LookupTables()

    def extract(
        self,
        claim: ClaimAttributes | Mapping[str, Any],
        history: ClaimantHistory,
        now: datetime,
    ) -> RiskFactors:
        """
        Extract risk factors from a claim.

        Args:
            claim: The claim record (model or raw mapping)
            history: Claimant history from the claim store
            now: Assessment time; the incident may not be later than this

        Returns:
            Immutable risk factors for the claim
        """
        claim = coerce_claim(claim)
        claim_id = claim.claim_id

        incident_time = parse_incident_time(claim.incident_time, claim_id)
        incident_at = datetime.combine(claim.incident_date, incident_time)
        reference = now.replace(tzinfo=None)
        if incident_at > reference:
            raise InvalidInputError(
                "incident_date",
                f"incident at {incident_at.isoformat()} is after assessment time "
                f"{reference.isoformat()}",
                claim_id=claim_id,
            )

        # model_copy and model_construct bypass field validation
        for field in ("claimed_amount", "estimated_damage"):
            amount = getattr(claim, field)
            if amount < 0:
                raise InvalidInputError(
                    field, f"must not be negative, got {amount}", claim_id=claim_id
                )

        ratio = None
        if claim.estimated_damage > 0:
            ratio = claim.claimed_amount / claim.estimated_damage

        vehicle_age = max(0, reference.year - claim.vehicle_year)
        is_luxury = self.is_luxury_vehicle(claim.vehicle_make)

        factors = RiskFactors(
            incident_hour=incident_time.hour,
            incident_day_of_week=claim.incident_date.weekday(),
            incident_month=claim.incident_date.month,
            days_since_incident=(reference.date() - claim.incident_date).days,
            claimed_amount=claim.claimed_amount,
            amount_to_damage_ratio=ratio,
            is_high_risk_area=self.is_high_risk_area(claim.incident_city),
            urban_density=self.urban_density(claim.incident_province),
            vehicle_age=vehicle_age,
            is_luxury_vehicle=is_luxury,
            vehicle_risk_category=self.vehicle_risk_category(vehicle_age, is_luxury),
            claim_type=claim.claim_type,
            claimant_history=history,
            is_repeat_location=history.repeat_location,
            is_similar_vehicle=history.similar_vehicle,
            suspicious_timing=is_suspicious_hour(incident_time.hour),
        )
        logger.debug("Extracted risk factors for claim %s: %s", claim_id, factors)
        return factors

    def is_high_risk_area(self, city: str) -> bool:
        return city in self.tables.high_risk_cities

    def urban_density(self, province: str) -> DensityCategory:
        if province in self.tables.high_density_provinces:
            return DensityCategory.HIGH
        if province in self.tables.medium_density_provinces:
            return DensityCategory.MEDIUM
        return DensityCategory.LOW

    def is_luxury_vehicle(self, make: str) -> bool:
        return make in self.tables.luxury_brands

    @staticmethod
    def vehicle_risk_category(vehicle_age: int, is_luxury: bool) -> RiskCategory:
        """Categorize vehicle risk from age and luxury status."""
        if is_luxury and vehicle_age < 3:
            return RiskCategory.HIGH
        if vehicle_age > 15:
            return RiskCategory.HIGH
        if vehicle_age > 8:
            return RiskCategory.MEDIUM
        return RiskCategory.LOW
