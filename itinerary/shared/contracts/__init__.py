"""Output contracts handed to downstream collaborators."""

from itinerary.shared.contracts.itinerary_output import (
    DayItineraryOutput,
    ItineraryOutputV1,
    PlannedPlace,
    TripSummary,
)
from itinerary.shared.contracts.review_contract import (
    REVIEW_CRITERIA,
    RenderedDay,
    RenderedPlace,
    ReviewRequest,
    ReviewVerdict,
    Suggestion,
)

__all__ = [
    "DayItineraryOutput",
    "ItineraryOutputV1",
    "PlannedPlace",
    "TripSummary",
    "REVIEW_CRITERIA",
    "RenderedDay",
    "RenderedPlace",
    "ReviewRequest",
    "ReviewVerdict",
    "Suggestion",
]
