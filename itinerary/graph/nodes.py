"""
Nodes for the itinerary graph.

Each factory closes over the stage objects it needs and returns a node
function ``(state) -> state updates``. Every node records the stage it
reached and appends one tracking message.
"""

import logging
from typing import Any, Callable, Dict, Optional

from itinerary.clustering.kmeans import RegionClusterer
from itinerary.confirmed.merger import ConfirmedScheduleMerger
from itinerary.distribution.day_assigner import DayAssigner
from itinerary.distribution.schedule_builder import DailyScheduleBuilder, empty_itineraries
from itinerary.distribution.scoring import score_candidate
from itinerary.distribution.summary import build_output
from itinerary.graph.config import PipelineConfig
from itinerary.graph.state import ItineraryState
from itinerary.review.quality_gate import ScheduleQualityGate
from itinerary.review.reviewer import ItineraryReviewer
from itinerary.review.service import review_and_adjust
from itinerary.shared.logging.config import log_stage_transition


logger = logging.getLogger(__name__)

Node = Callable[[ItineraryState], Dict[str, Any]]


def _prefix(state: ItineraryState, node: str) -> str:
    session_id = state.get("session_id") or "unknown"
    return f"[session={session_id}] [graph=itinerary] [node={node}] "


def _message(content: str) -> dict:
    return {"role": "system", "agent": "itinerary", "content": content}


def _transition(stage: str, state: ItineraryState, update: Dict[str, Any]) -> Dict[str, Any]:
    update["stage"] = stage
    log_stage_transition(stage, {**state, **update})
    return update


def make_cluster_node(config: PipelineConfig) -> Node:
    clusterer = RegionClusterer(config.clustering, seed=config.seed)

    def cluster_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "cluster")
        places = state.get("places") or []
        trip_days = state["trip_days"]

        logger.info(f"{_log}Entering node | places={len(places)}, trip_days={trip_days}")

        if trip_days <= 0 or not places:
            logger.warning(f"{_log}Nothing to cluster; producing empty regions")
            return _transition("Clustered", state, {
                "optimal_k": 0,
                "regions": [],
                "messages": [_message("No places to cluster.")],
            })

        optimal_k = clusterer.determine_optimal_k(places, trip_days)
        regions = clusterer.to_regions(clusterer.cluster(places, optimal_k))

        logger.info(
            f"{_log}Clustering complete | k={optimal_k}, "
            f"regions={[(r.name, r.place_count) for r in regions]}"
        )

        return _transition("Clustered", state, {
            "optimal_k": optimal_k,
            "regions": regions,
            "messages": [
                _message(f"Clustered {len(places)} places into {len(regions)} regions (k={optimal_k}).")
            ],
        })

    return cluster_node


def make_assign_node(config: PipelineConfig) -> Node:
    assigner = DayAssigner(config.distribution)

    def assign_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "assign")
        regions = state.get("regions") or []

        logger.info(f"{_log}Entering node | regions={len(regions)}")
        assignment = assigner.assign(regions, state["trip_days"])

        return _transition("Assigned", state, {
            "day_assignment": assignment,
            "messages": [_message(f"Assigned {len(regions)} regions to {len(assignment)} days.")],
        })

    return assign_node


def make_build_node(config: PipelineConfig) -> Node:
    def score(candidate, previous):
        return score_candidate(candidate, previous, config.distribution)

    builder = DailyScheduleBuilder(score_fn=score)

    def build_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "build")
        assignment = state.get("day_assignment") or {}

        logger.info(f"{_log}Entering node | days={len(assignment)}")

        if assignment:
            itineraries = builder.build_all(assignment, state["trip_start_date"])
        else:
            itineraries = empty_itineraries(state["trip_days"], state["trip_start_date"])

        total = sum(len(d.places) for d in itineraries.values())
        return _transition("Built", state, {
            "itineraries": itineraries,
            "messages": [_message(f"Built {len(itineraries)} days with {total} places.")],
        })

    return build_node


def make_merge_node(config: PipelineConfig) -> Node:
    merger = ConfirmedScheduleMerger()

    def merge_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "merge")
        entries = state.get("confirmed_entries") or []

        logger.info(f"{_log}Entering node | confirmed_entries={len(entries)}")
        itineraries = merger.merge(state["itineraries"], entries, state["trip_start_date"])

        return _transition("Merged", state, {
            "itineraries": itineraries,
            "messages": [_message(f"Merged {len(entries)} confirmed entries.")],
        })

    return merge_node


def make_gate_node(config: PipelineConfig, reviewer: Optional[ItineraryReviewer]) -> Node:
    gate = ScheduleQualityGate(config.review)

    def gate_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "gate")
        itineraries = state["itineraries"]

        reasons = gate.days_needing_review(itineraries)
        for day, day_reasons in reasons.items():
            logger.warning(f"{_log}Day {day} needs review: {'; '.join(day_reasons)}")

        has_places = any(d.places for d in itineraries.values())
        requested = reviewer is not None and bool(reasons) and has_places

        logger.info(
            f"{_log}Gate evaluated | flagged_days={sorted(reasons)}, "
            f"reviewer={'yes' if reviewer is not None else 'no'}, review_requested={requested}"
        )

        update = {
            "review_reasons": reasons,
            "review_requested": requested,
            "messages": [
                _message(f"Quality gate flagged {len(reasons)} of {len(itineraries)} days.")
            ],
        }
        if requested:
            return update
        return _transition("Gated-Pass", state, update)

    return gate_node


def make_review_node(config: PipelineConfig, reviewer: ItineraryReviewer) -> Node:
    def review_node(state: ItineraryState) -> Dict[str, Any]:
        _log = _prefix(state, "review")
        logger.info(f"{_log}Entering node | flagged_days={sorted(state.get('review_reasons') or {})}")

        itineraries, reviewed = review_and_adjust(
            state["itineraries"],
            reviewer,
            destinations=state.get("destinations"),
            travel_styles=state.get("travel_styles"),
        )

        logger.info(f"{_log}Review finished | applied={reviewed}")

        update = {
            "itineraries": itineraries,
            "llm_review_applied": reviewed,
            "messages": [
                _message("LLM review applied." if reviewed else "LLM review failed; itinerary kept.")
            ],
        }
        if not reviewed:
            update["errors"] = ["LLM review failed"]
        return _transition("Gated-Reviewed", state, update)

    return review_node


def finalize_node(state: ItineraryState) -> Dict[str, Any]:
    """Build the output contract from the final itineraries."""
    _log = _prefix(state, "finalize")

    output = build_output(state["itineraries"], state.get("llm_review_applied", False))

    logger.info(
        f"{_log}Pipeline complete | days={output.summary.total_days}, "
        f"places={output.summary.total_places}, "
        f"distance={output.summary.estimated_total_distance_km:.1f}km, "
        f"llm_review_applied={output.summary.llm_review_applied} -> END"
    )

    return _transition("Final", state, {
        "output": output,
        "messages": [_message("Itinerary finalized.")],
    })
