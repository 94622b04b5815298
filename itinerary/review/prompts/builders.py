"""
Prompt builders for the itinerary review call.

These functions turn daily itineraries into the reviewer request and render
that request as prompt text.
"""

from typing import Dict, List, Optional

from itinerary.review.prompts.templates import (
    DAY_HEADER_TEMPLATE,
    DEFAULT_DESTINATIONS,
    DEFAULT_TRAVEL_STYLES,
    PLACE_LINE_TEMPLATE,
    REVIEW_PROMPT_TEMPLATE,
)
from itinerary.shared.contracts.review_contract import (
    RenderedDay,
    RenderedPlace,
    ReviewRequest,
)
from itinerary.shared.schemas.places import DailyItinerary


def render_itinerary(itinerary: DailyItinerary) -> RenderedDay:
    """Reduce a day to the time-block/place/category triples the reviewer sees."""
    return RenderedDay(
        day=itinerary.day_number,
        total_distance_km=itinerary.total_distance_km,
        places=[
            RenderedPlace(
                time_block=p.time_block.value if p.time_block else "UNSCHEDULED",
                place=p.name,
                category=p.category,
                recommend_time=p.recommend_time,
            )
            for p in itinerary.places
        ],
    )


def build_review_request(
    itineraries: Dict[int, DailyItinerary],
    destinations: Optional[List[str]] = None,
    travel_styles: Optional[List[str]] = None,
) -> ReviewRequest:
    """
    Build the reviewer request for a set of days.

    Args:
        itineraries: Day number -> itinerary
        destinations: Trip destinations (defaults to DEFAULT_DESTINATIONS)
        travel_styles: Travel style tags (defaults to DEFAULT_TRAVEL_STYLES)

    Returns:
        ReviewRequest with one rendered day per itinerary, in day order
    """
    return ReviewRequest(
        destinations=list(destinations or DEFAULT_DESTINATIONS),
        day_count=len(itineraries),
        travel_styles=list(travel_styles or DEFAULT_TRAVEL_STYLES),
        days=[render_itinerary(itineraries[day]) for day in sorted(itineraries)],
    )


def render_day(day: RenderedDay) -> str:
    lines = [DAY_HEADER_TEMPLATE.format(day=day.day, distance=day.total_distance_km)]
    for entry in day.places:
        lines.append(
            PLACE_LINE_TEMPLATE.format(
                recommend_time=entry.recommend_time or "--:--",
                time_block=entry.time_block,
                place=entry.place,
                category=entry.category,
            )
        )
    return "\n".join(lines)


def render_review_prompt(request: ReviewRequest) -> str:
    """Render a ReviewRequest as the user prompt text."""
    return REVIEW_PROMPT_TEMPLATE.format(
        destinations=", ".join(request.destinations),
        day_count=request.day_count,
        travel_styles=", ".join(request.travel_styles),
        days="\n\n".join(render_day(d) for d in request.days),
        criteria="\n".join(
            f"{i}. {criterion}" for i, criterion in enumerate(request.criteria, start=1)
        ),
    )
