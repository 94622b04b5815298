"""
Itinerary output contract.

Defines the per-day itinerary and trip summary handed to downstream
collaborators once the pipeline reaches its final stage.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from itinerary.shared.schemas.places import DailyItinerary, Place


class _CamelModel(BaseModel):
    """Serialises with camelCase aliases (``model_dump(by_alias=True)``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlannedPlace(_CamelModel):
    """A place as it appears in the final itinerary."""

    id: str
    name: str
    category: str
    time_block: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rating: Optional[float] = None
    is_trendy: bool = False
    recommend_time: Optional[str] = None
    address: Optional[str] = None
    confirmed: bool = Field(default=False, description="Came from a confirmed booking")

    @classmethod
    def from_place(cls, place: Place) -> "PlannedPlace":
        return cls(
            id=place.id,
            name=place.name,
            category=place.category,
            time_block=place.time_block.value if place.time_block else None,
            latitude=place.latitude,
            longitude=place.longitude,
            rating=place.rating,
            is_trendy=place.is_trendy,
            recommend_time=place.recommend_time,
            address=place.address,
            confirmed=place.is_confirmed,
        )


class DayItineraryOutput(_CamelModel):
    """A single day in the itinerary."""

    day_number: int = Field(ge=1, description="Day number (1-indexed)")
    date: date
    regions: List[str] = Field(default_factory=list)
    places: List[PlannedPlace] = Field(default_factory=list)
    total_distance_km: float = Field(ge=0, description="Travel distance across the day")

    @classmethod
    def from_itinerary(cls, itinerary: DailyItinerary) -> "DayItineraryOutput":
        return cls(
            day_number=itinerary.day_number,
            date=itinerary.date,
            regions=list(itinerary.regions),
            places=[PlannedPlace.from_place(p) for p in itinerary.places],
            total_distance_km=round(itinerary.total_distance_km, 3),
        )


class TripSummary(_CamelModel):
    """Trip-level statistics."""

    total_days: int = Field(ge=0)
    total_places: int = Field(ge=0)
    total_regions: int = Field(ge=0, description="Distinct region names across all days")
    average_regions_per_day: float = Field(ge=0)
    category_distribution: Dict[str, int] = Field(default_factory=dict)
    estimated_total_distance_km: float = Field(ge=0)
    llm_review_applied: bool = False


class ItineraryOutputV1(_CamelModel):
    """
    Contract for the itinerary pipeline output (v1).

    ``daily_itineraries`` is ordered by day number.
    """

    daily_itineraries: List[DayItineraryOutput] = Field(default_factory=list)
    summary: TripSummary
