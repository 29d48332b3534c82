"""
Claim store interface.

The engine only reads from the claim store. `InMemoryClaimStore` backs
tests and examples; production deployments supply their own
implementation of `ClaimStore`.
"""

from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from .core.errors import NotFoundError
from .core.models import ClaimAttributes, ClaimantHistory


@runtime_checkable
class ClaimStore(Protocol):
    """Read-only access to claims and claimant history."""

    def get_claim(self, claim_id: str) -> ClaimAttributes:
        """Return the claim or raise `NotFoundError`."""
        ...

    def get_claimant_history(self, claimant_id: str) -> ClaimantHistory:
        """Return the claimant's history summary."""
        ...


class InMemoryClaimStore:
    """Dictionary-backed claim store."""

    def __init__(
        self,
        claims: Iterable[ClaimAttributes] = (),
        histories: Mapping[str, ClaimantHistory] | None = None,
    ) -> None:
        self._claims: dict[str, ClaimAttributes] = {}
        self._histories: dict[str, ClaimantHistory] = dict(histories or {})
        for claim in claims:
            self.add_claim(claim)

    def add_claim(self, claim: ClaimAttributes) -> None:
        if claim.claim_id is None:
            raise ValueError("claims stored by id need a claim_id")
        self._claims[claim.claim_id] = claim

    def set_history(self, claimant_id: str, history: ClaimantHistory) -> None:
        self._histories[claimant_id] = history

    def get_claim(self, claim_id: str) -> ClaimAttributes:
        try:
            return self._claims[claim_id]
        except KeyError:
            raise NotFoundError("claim not found", claim_id=claim_id) from None

    def get_claimant_history(self, claimant_id: str) -> ClaimantHistory:
        # Unknown claimants have no history
        return self._histories.get(claimant_id, ClaimantHistory())

    def __len__(self) -> int:
        return len(self._claims)
