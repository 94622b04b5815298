"""
Trip summary statistics.
"""

from collections import Counter
from typing import Dict

from itinerary.shared.contracts.itinerary_output import (
    DayItineraryOutput,
    ItineraryOutputV1,
    TripSummary,
)
from itinerary.shared.schemas.places import DailyItinerary


def build_summary(
    itineraries: Dict[int, DailyItinerary],
    llm_review_applied: bool = False,
) -> TripSummary:
    """
    Summarise a set of daily itineraries.

    Args:
        itineraries: Day number -> itinerary
        llm_review_applied: Whether an LLM review verdict was obtained

    Returns:
        TripSummary with totals, distinct-region count and category histogram
    """
    days = list(itineraries.values())
    all_regions = {region for d in days for region in d.regions}
    categories = Counter(p.category for d in days for p in d.places)

    return TripSummary(
        total_days=len(days),
        total_places=sum(len(d.places) for d in days),
        total_regions=len(all_regions),
        average_regions_per_day=len(all_regions) / len(days) if days else 0.0,
        category_distribution=dict(categories),
        estimated_total_distance_km=round(sum(d.total_distance_km for d in days), 3),
        llm_review_applied=llm_review_applied,
    )


def build_output(
    itineraries: Dict[int, DailyItinerary],
    llm_review_applied: bool = False,
) -> ItineraryOutputV1:
    """Final output contract: days in order plus the trip summary."""
    return ItineraryOutputV1(
        daily_itineraries=[
            DayItineraryOutput.from_itinerary(itineraries[day])
            for day in sorted(itineraries)
        ],
        summary=build_summary(itineraries, llm_review_applied),
    )
