"""
Itinerary graph construction.

Builds the graph that takes candidate places through clustering, day
assignment, schedule building, confirmed-entry merging and the quality gate,
with an optional LLM review before the final output.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Sequence

from langgraph.graph import StateGraph, END

from itinerary.graph.config import PipelineConfig, DEFAULT_CONFIG
from itinerary.graph.nodes import (
    finalize_node,
    make_assign_node,
    make_build_node,
    make_cluster_node,
    make_gate_node,
    make_merge_node,
    make_review_node,
)
from itinerary.graph.router import route_after_gate
from itinerary.graph.state import ItineraryState
from itinerary.review.reviewer import ItineraryReviewer
from itinerary.shared.contracts.itinerary_output import ItineraryOutputV1
from itinerary.shared.schemas.places import ConfirmedEntry, Place


logger = logging.getLogger(__name__)


def create_itinerary_graph(
    reviewer: Optional[ItineraryReviewer] = None,
    config: Optional[PipelineConfig] = None,
):
    """
    Create and compile the itinerary graph.

    The graph structure is:
        Entry -> cluster -> assign -> build -> merge -> gate
          -> route_after_gate
             -> "review"   -> review -> finalize -> END
             -> "finalize" -> finalize -> END

    Args:
        reviewer: Optional reviewer. Without one the review branch is never taken.
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    if config is None:
        config = DEFAULT_CONFIG

    graph = StateGraph(ItineraryState)

    # Add nodes
    graph.add_node("cluster", make_cluster_node(config))
    graph.add_node("assign", make_assign_node(config))
    graph.add_node("build", make_build_node(config))
    graph.add_node("merge", make_merge_node(config))
    graph.add_node("gate", make_gate_node(config, reviewer))
    graph.add_node("finalize", finalize_node)

    # Set entry point and edges
    graph.set_entry_point("cluster")
    graph.add_edge("cluster", "assign")
    graph.add_edge("assign", "build")
    graph.add_edge("build", "merge")
    graph.add_edge("merge", "gate")

    if reviewer is not None:
        graph.add_node("review", make_review_node(config, reviewer))
        graph.add_conditional_edges(
            "gate",
            route_after_gate,
            {
                "review": "review",
                "finalize": "finalize",
            },
        )
        graph.add_edge("review", "finalize")
    else:
        graph.add_edge("gate", "finalize")

    graph.add_edge("finalize", END)

    # Compile
    app = graph.compile()

    return app


def initial_state(
    places: Sequence[Place],
    trip_start_date: date,
    trip_days: int,
    confirmed_entries: Optional[Sequence[ConfirmedEntry]] = None,
    destinations: Optional[List[str]] = None,
    travel_styles: Optional[List[str]] = None,
    session_id: Optional[str] = None,
) -> ItineraryState:
    """Starting state for one pipeline run."""
    return {
        "session_id": session_id,
        "trip_start_date": trip_start_date,
        "trip_days": trip_days,
        "places": list(places),
        "confirmed_entries": list(confirmed_entries or []),
        "destinations": destinations,
        "travel_styles": travel_styles,
        "optimal_k": 0,
        "regions": [],
        "day_assignment": {},
        "itineraries": {},
        "review_reasons": {},
        "review_requested": False,
        "llm_review_applied": False,
        "output": None,
        "stage": "Started",
        "errors": [],
        "messages": [
            {
                "role": "system",
                "agent": "itinerary",
                "content": f"Pipeline started for {trip_days} day(s) with {len(places)} places",
            }
        ],
    }


def run_itinerary_pipeline(
    places: Sequence[Place],
    trip_start_date: date,
    trip_days: int,
    confirmed_entries: Optional[Sequence[ConfirmedEntry]] = None,
    reviewer: Optional[ItineraryReviewer] = None,
    destinations: Optional[List[str]] = None,
    travel_styles: Optional[List[str]] = None,
    config: Optional[PipelineConfig] = None,
    session_id: Optional[str] = None,
) -> ItineraryOutputV1:
    """
    Run the whole pipeline and return the output contract.

    Empty candidate lists and non-positive trip lengths produce a
    well-formed (possibly empty) result rather than an error.
    """
    config = config or DEFAULT_CONFIG
    session_id = session_id or str(uuid.uuid4())
    _log = f"[session={session_id}] [graph=itinerary] [run] "

    logger.info(
        f"{_log}Invoking itinerary graph | places={len(places)}, trip_days={trip_days}, "
        f"confirmed={len(confirmed_entries or [])}, reviewer={reviewer is not None}"
    )

    app = create_itinerary_graph(reviewer=reviewer, config=config)
    final_state = app.invoke(
        initial_state(
            places,
            trip_start_date,
            trip_days,
            confirmed_entries=confirmed_entries,
            destinations=destinations,
            travel_styles=travel_styles,
            session_id=session_id,
        ),
        config={"recursion_limit": config.recursion_limit},
    )

    logger.info(
        f"{_log}Graph finished | stage={final_state['stage']}, "
        f"errors={len(final_state.get('errors', []))}"
    )
    return final_state["output"]
