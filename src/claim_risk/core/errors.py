"""
Error taxonomy for the Claim Risk Engine.
"""


class RiskEngineError(Exception):
    """Base class for all engine errors."""

    default_stage = "assess"

    def __init__(
        self,
        message: str,
        claim_id: str | None = None,
        stage: str | None = None,
    ) -> None:
        self.claim_id = claim_id
        self.stage = stage or self.default_stage
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"[{self.stage}]"
        if self.claim_id is not None:
            prefix += f" claim {self.claim_id}:"
        return f"{prefix} {self.message}"

    def attach_claim_id(self, claim_id: str) -> None:
        """Record the claim id after the fact and refresh the message."""
        self.claim_id = claim_id
        self.args = (self._format(),)


class InvalidInputError(RiskEngineError):
    """Malformed claim data: bad time or date, negative amounts."""

    default_stage = "extract"

    def __init__(
        self,
        field: str,
        message: str,
        claim_id: str | None = None,
        stage: str | None = None,
    ) -> None:
        self.field = field
        super().__init__(f"{field}: {message}", claim_id=claim_id, stage=stage)


class NotFoundError(RiskEngineError):
    """The claim id is unknown to the claim store."""

    default_stage = "lookup"


class ConfigurationError(RiskEngineError):
    """Invalid engine configuration; fatal at startup."""

    default_stage = "config"


class BatchTooLargeError(RiskEngineError):
    """A batch request exceeded the configured maximum size."""

    default_stage = "batch"

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"batch of {size} ids exceeds the maximum of {limit}")


class AssessmentCancelledError(RiskEngineError):
    """The batch was cancelled before this claim was launched."""

    default_stage = "batch"
