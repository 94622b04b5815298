"""
Configuration for the schedule quality gate and LLM review.
"""

from dataclasses import dataclass

from itinerary.shared.llm.client import DEFAULT_MODEL, DEFAULT_TIMEOUT


@dataclass
class ReviewConfig:
    """
    Configuration for review.

    Attributes:
        max_daily_distance_km: A day travelling further than this needs review
        min_places: A day with fewer places needs review
        max_places: A day with more places needs review
        model: LLM model used by the reviewer
        timeout_seconds: Per-request timeout for the review call
    """

    max_daily_distance_km: float = 20.0
    min_places: int = 4
    max_places: int = 10

    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT


# Default configuration instance
DEFAULT_CONFIG = ReviewConfig()
