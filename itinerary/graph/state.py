"""
Itinerary pipeline state schema.

Defines the state that flows through the itinerary graph. Every stage
replaces the collections it produces instead of mutating earlier ones.
"""

from datetime import date
from typing import Annotated, Dict, List, Optional, TypedDict
import operator

from itinerary.clustering.schemas import RegionCluster
from itinerary.shared.contracts.itinerary_output import ItineraryOutputV1
from itinerary.shared.schemas.places import ConfirmedEntry, DailyItinerary, Place


class ItineraryState(TypedDict):
    """
    State schema for the itinerary graph.

    Stage values, in order: Clustered, Assigned, Built, Merged,
    Gated-Pass or Gated-Reviewed, Final.
    """

    # Trip input
    session_id: Optional[str]
    trip_start_date: date
    trip_days: int
    places: List[Place]
    confirmed_entries: List[ConfirmedEntry]
    destinations: Optional[List[str]]
    travel_styles: Optional[List[str]]

    # Stage outputs
    optimal_k: int
    regions: List[RegionCluster]
    day_assignment: Dict[int, List[RegionCluster]]
    itineraries: Dict[int, DailyItinerary]
    review_reasons: Dict[int, List[str]]
    review_requested: bool
    llm_review_applied: bool
    output: Optional[ItineraryOutputV1]

    # Tracking
    stage: str
    errors: Annotated[List[str], operator.add]
    messages: Annotated[List[dict], operator.add]
