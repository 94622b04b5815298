"""
Schedule review.

Rule-based quality gate, LLM reviewer and the adjustments applied from its
verdict.
"""

from itinerary.review.adjustments import AdjustmentApplier
from itinerary.review.config import ReviewConfig
from itinerary.review.quality_gate import ScheduleQualityGate
from itinerary.review.response_parser import ParseError, parse_review_response
from itinerary.review.reviewer import ItineraryReviewer, LLMItineraryReviewer, ReviewError
from itinerary.review.service import review_and_adjust

__all__ = [
    "AdjustmentApplier",
    "ReviewConfig",
    "ScheduleQualityGate",
    "ParseError",
    "parse_review_response",
    "ItineraryReviewer",
    "LLMItineraryReviewer",
    "ReviewError",
    "review_and_adjust",
]
