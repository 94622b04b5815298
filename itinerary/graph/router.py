"""
Routing logic for the itinerary graph.

Decides whether the gated itinerary goes through LLM review.
"""

import logging
from typing import Literal

from itinerary.graph.state import ItineraryState


logger = logging.getLogger(__name__)


def route_after_gate(state: ItineraryState) -> Literal["review", "finalize"]:
    """
    Route to review when the gate asked for it, otherwise straight to finalize.

    Args:
        state: Current itinerary state

    Returns:
        Name of the next node to execute
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=itinerary] [router=route_after_gate] "

    flagged = sorted((state.get("review_reasons") or {}).keys())

    if state.get("review_requested"):
        logger.info(f"{_log}Routing to 'review' | flagged_days={flagged}")
        return "review"

    logger.info(f"{_log}Routing to 'finalize' | flagged_days={flagged}")
    return "finalize"
