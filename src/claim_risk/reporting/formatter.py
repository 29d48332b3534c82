"""
Assessment Reporting Module.
Renders risk assessments as text, dictionaries or JSON.
"""

import json
from typing import Any

from ..core.models import RiskAssessmentResult, RiskCategory
from ..strategies import STRATEGY_NAMES


class AssessmentFormatter:
    """
    Formats a risk assessment for various output formats.
    """

    CATEGORY_ICONS = {
        RiskCategory.LOW: "🟢",
        RiskCategory.MEDIUM: "🟡",
        RiskCategory.HIGH: "🔴",
    }

    STRATEGY_LABELS = {
        "rule_accumulation": "Rule Accumulation",
        "staged_increment": "Staged Increment",
        "linear": "Linear (Logit)",
    }

    def __init__(self, result: RiskAssessmentResult) -> None:
        self.result = result

    def to_text(self, include_details: bool = True) -> str:
        """
        Format the assessment as a plain text report.

        Args:
            include_details: Whether to include strategy scores and factors

        Returns:
            Formatted text report
        """
        result = self.result
        lines: list[str] = []

        lines.append("=" * 70)
        lines.append("CLAIM RISK ASSESSMENT")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Claim ID: {result.claim_id or 'n/a'}")
        lines.append(f"Assessed: {result.assessed_at.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

        icon = self.CATEGORY_ICONS.get(result.risk_category, "•")
        lines.append(
            f"{icon} Risk Score: {result.overall_score}/100 "
            f"[{result.risk_category.value}]"
        )
        lines.append(f"Confidence: {result.ensemble.confidence:.0%}")
        lines.append("")
        lines.append(result.explanation.summary)
        lines.append("")

        if include_details:
            lines.append("-" * 70)
            lines.append("STRATEGY SCORES")
            lines.append("-" * 70)
            outputs = result.strategy_outputs
            for name in STRATEGY_NAMES:
                output = outputs[name]
                weight = result.ensemble.weights.get(name, 0.0)
                lines.append(
                    f"  {self.STRATEGY_LABELS[name]:<20} score {output.score:>3}  "
                    f"confidence {output.confidence:.2f}  weight {weight:.2f}"
                )
            lines.append("")

            if result.explanation.key_factors:
                lines.append("-" * 70)
                lines.append("KEY FACTORS")
                lines.append("-" * 70)
                for key_factor in result.explanation.key_factors:
                    lines.append(f"  [{key_factor.impact:>2}] {key_factor.factor}")
                    lines.append(f"       {key_factor.description}")
                lines.append("")

        lines.append("-" * 70)
        lines.append("RECOMMENDATIONS")
        lines.append("-" * 70)
        for recommendation in result.explanation.recommendations:
            lines.append(f"  - {recommendation}")
        lines.append("")

        lines.append("=" * 70)
        lines.append("END OF REPORT")
        lines.append("=" * 70)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the assessment to a JSON-compatible dictionary.

        Returns:
            Dictionary representation of the assessment
        """
        return self.result.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        """
        Convert the assessment to JSON.

        Args:
            indent: JSON indentation level

        Returns:
            JSON string representation
        """
        return json.dumps(self.to_dict(), indent=indent)

    def print_summary(self) -> None:
        """Print a brief summary to stdout."""
        print(self.to_text(include_details=False))

    def print_full(self) -> None:
        """Print the full report to stdout."""
        print(self.to_text(include_details=True))


def format_batch_summary(outcomes: Any) -> str:
    """
    One line per claim id with its score or error.

    Args:
        outcomes: A BatchResult or a mapping of claim id to AssessmentOutcome
    """
    items = getattr(outcomes, "outcomes", outcomes)
    lines = [f"{'CLAIM':<20} {'SCORE':>5}  {'CATEGORY':<8}  DETAIL"]
    for claim_id, outcome in items.items():
        if outcome.result is not None:
            result = outcome.result
            lines.append(
                f"{claim_id:<20} {result.overall_score:>5}  "
                f"{result.risk_category.value:<8}  "
                f"confidence {result.ensemble.confidence:.2f}"
            )
        else:
            lines.append(
                f"{claim_id:<20} {'-':>5}  {'ERROR':<8}  "
                f"{type(outcome.error).__name__}: {outcome.error.message}"
            )
    return "\n".join(lines)
