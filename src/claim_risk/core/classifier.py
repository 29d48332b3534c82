"""
Risk category classification.
"""

from .models import RiskCategory

LOW_MAX_SCORE = 30
MEDIUM_MAX_SCORE = 70


def classify(score: int) -> RiskCategory:
    """
    Map an overall score to a risk category.

    Args:
        score: Ensemble score in [1, 100]

    Returns:
        LOW for <= 30, MEDIUM for 31-70, HIGH above 70

    Raises:
        ValueError: If the score is outside [1, 100]
    """
    if isinstance(score, bool) or not isinstance(score, int) or not 1 <= score <= 100:
        raise ValueError(f"score must be an integer in [1, 100], got {score!r}")
    if score <= LOW_MAX_SCORE:
        return RiskCategory.LOW
    if score <= MEDIUM_MAX_SCORE:
        return RiskCategory.MEDIUM
    return RiskCategory.HIGH
