"""
Reporting components for the Claim Risk Engine.
"""

from .explanation import ExplanationGenerator
from .formatter import AssessmentFormatter, format_batch_summary

__all__ = [
    "AssessmentFormatter",
    "ExplanationGenerator",
    "format_batch_summary",
]
