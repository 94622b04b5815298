"""
Review-and-adjust boundary.

The only place where an external failure is allowed to fail soft: a
timeout, network error or unparseable response leaves the itinerary as it
was before the review.
"""

import logging
from typing import Dict, List, Optional, Tuple

from itinerary.review.adjustments import AdjustmentApplier
from itinerary.review.prompts.builders import build_review_request
from itinerary.review.reviewer import ItineraryReviewer
from itinerary.shared.schemas.places import DailyItinerary


logger = logging.getLogger(__name__)


def review_and_adjust(
    itineraries: Dict[int, DailyItinerary],
    reviewer: ItineraryReviewer,
    destinations: Optional[List[str]] = None,
    travel_styles: Optional[List[str]] = None,
    applier: Optional[AdjustmentApplier] = None,
) -> Tuple[Dict[int, DailyItinerary], bool]:
    """
    Ask the reviewer for a verdict and apply it.

    Args:
        itineraries: Day number -> itinerary
        reviewer: Reviewer capability
        destinations: Trip destinations for the request
        travel_styles: Travel style tags for the request
        applier: Adjustment applier (a fresh one if not provided)

    Returns:
        Tuple of (itineraries, reviewed). ``reviewed`` is False when the
        reviewer failed, in which case the input itineraries are returned.
    """
    request = build_review_request(itineraries, destinations, travel_styles)

    try:
        verdict = reviewer.review(request)
    except Exception as e:
        logger.warning(f"Review failed, keeping itinerary as generated: {e}")
        return dict(itineraries), False

    logger.info(
        f"Review verdict | needs_adjustment={verdict.needs_adjustment}, "
        f"suggestions={len(verdict.suggestions)}, reason={verdict.reason!r}"
    )

    applier = applier or AdjustmentApplier()
    return applier.apply(itineraries, verdict), True
