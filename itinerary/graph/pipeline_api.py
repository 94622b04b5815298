"""
FastAPI endpoints for the itinerary pipeline.

Provides the API to distribute candidate places into a day-by-day
itinerary, optionally reviewed by an LLM.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from itinerary.graph.build import run_itinerary_pipeline
from itinerary.graph.config import get_config
from itinerary.mock_data import generate_mock_places
from itinerary.review.reviewer import LLMItineraryReviewer
from itinerary.shared.contracts.itinerary_output import ItineraryOutputV1
from itinerary.shared.logging.debug_logger import get_or_create_logger, remove_logger
from itinerary.shared.schemas.places import ConfirmedEntry, Place


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/itinerary", tags=["itinerary"])


# ============================================================================
# Request/Response Models
# ============================================================================


class DistributeRequest(BaseModel):
    """Request to distribute candidate places over the trip."""

    trip_start_date: date = Field(description="First day of the trip")
    trip_days: int = Field(ge=0, description="Number of trip days")
    places: List[Place] = Field(default_factory=list, description="Candidate places")
    confirmed_entries: List[ConfirmedEntry] = Field(
        default_factory=list, description="Fixed appointments from booking documents"
    )
    destinations: Optional[List[str]] = Field(default=None, description="Trip destinations")
    travel_styles: Optional[List[str]] = Field(default=None, description="Travel style tags")
    use_llm_review: bool = Field(default=False, description="Review flagged days with an LLM")
    seed: Optional[int] = Field(default=None, description="Clustering RNG seed")


class MockRequest(BaseModel):
    """Request to run the pipeline on generated candidates."""

    trip_start_date: date = Field(description="First day of the trip")
    trip_days: int = Field(ge=1, le=30, description="Number of trip days")
    seed: Optional[int] = Field(default=None, description="Seed for mock data and clustering")
    use_llm_review: bool = Field(default=False)


class DistributeResponse(BaseModel):
    """Response from the itinerary pipeline."""

    session_id: str = Field(description="Pipeline session identifier")
    itinerary: ItineraryOutputV1


# ============================================================================
# Helpers
# ============================================================================


def _run(
    session_id: str,
    places: List[Place],
    trip_start_date: date,
    trip_days: int,
    confirmed_entries: Optional[List[ConfirmedEntry]] = None,
    destinations: Optional[List[str]] = None,
    travel_styles: Optional[List[str]] = None,
    use_llm_review: bool = False,
    seed: Optional[int] = None,
) -> DistributeResponse:
    _log = f"[session={session_id}] [graph=itinerary] [api=run] "
    config = get_config(seed=seed)

    debug_logger = None
    reviewer = None
    if use_llm_review:
        debug_logger = get_or_create_logger(session_id)
        reviewer = LLMItineraryReviewer(config.review, debug_logger=debug_logger)

    try:
        output = run_itinerary_pipeline(
            places,
            trip_start_date,
            trip_days,
            confirmed_entries=confirmed_entries,
            reviewer=reviewer,
            destinations=destinations,
            travel_styles=travel_styles,
            config=config,
            session_id=session_id,
        )
    except Exception as e:
        logger.exception(f"{_log}Pipeline failed: {e}")
        raise HTTPException(status_code=500, detail=f"Itinerary pipeline failed: {str(e)}")
    finally:
        if debug_logger is not None:
            remove_logger(session_id)

    if debug_logger is not None:
        debug_logger.log_session_summary(
            total_days=output.summary.total_days,
            review_applied=output.summary.llm_review_applied,
        )

    logger.info(
        f"{_log}Pipeline finished | days={output.summary.total_days}, "
        f"places={output.summary.total_places}, "
        f"llm_review_applied={output.summary.llm_review_applied}"
    )
    return DistributeResponse(session_id=session_id, itinerary=output)


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/distribute", response_model=DistributeResponse)
def distribute(request: DistributeRequest):
    """
    Distribute candidate places into daily itineraries.

    Clusters the candidates into regions, assigns regions to days, picks one
    place per time block, merges confirmed entries and, if requested, has an
    LLM review days that fail the quality gate.
    """
    session_id = str(uuid.uuid4())
    logger.info(
        f"[session={session_id}] [graph=itinerary] [api=distribute] Request received | "
        f"places={len(request.places)}, trip_days={request.trip_days}, "
        f"confirmed={len(request.confirmed_entries)}, review={request.use_llm_review}"
    )

    return _run(
        session_id,
        request.places,
        request.trip_start_date,
        request.trip_days,
        confirmed_entries=request.confirmed_entries,
        destinations=request.destinations,
        travel_styles=request.travel_styles,
        use_llm_review=request.use_llm_review,
        seed=request.seed,
    )


@router.post("/mock", response_model=DistributeResponse)
def distribute_mock(request: MockRequest):
    """Run the pipeline on generated Seoul candidates."""
    session_id = str(uuid.uuid4())
    places = generate_mock_places(request.trip_days, seed=request.seed)

    logger.info(
        f"[session={session_id}] [graph=itinerary] [api=mock] Generated {len(places)} "
        f"mock places for {request.trip_days} day(s)"
    )

    return _run(
        session_id,
        places,
        request.trip_start_date,
        request.trip_days,
        destinations=["서울"],
        use_llm_review=request.use_llm_review,
        seed=request.seed,
    )
