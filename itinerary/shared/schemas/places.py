"""
Domain models shared by every stage of the itinerary pipeline.

Places, confirmed entries and daily itineraries are frozen pydantic models.
Stages never edit them in place; they hand back copies built with
``model_copy(update=...)`` so a later stage can never alias a collection an
earlier stage still holds.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


CONFIRMED_MARKER = "확정"


class TimeBlock(str, Enum):
    """Ordered time-of-day slots. ``LATE_ACTIVITY`` is only produced by confirmed entries."""

    BREAKFAST = "BREAKFAST"
    MORNING_ACTIVITY = "MORNING_ACTIVITY"
    LUNCH = "LUNCH"
    CAFE = "CAFE"
    AFTERNOON_ACTIVITY = "AFTERNOON_ACTIVITY"
    DINNER = "DINNER"
    EVENING_ACTIVITY = "EVENING_ACTIVITY"
    LATE_ACTIVITY = "LATE_ACTIVITY"

    @property
    def order(self) -> int:
        """1-based position of the block within a day."""
        return _TIME_BLOCK_ORDER[self]


_TIME_BLOCK_ORDER = {block: index for index, block in enumerate(TimeBlock, start=1)}

# The seven slots a generated schedule fills, in day order.
SCHEDULE_TIME_BLOCKS: Tuple[TimeBlock, ...] = tuple(
    block for block in TimeBlock if block is not TimeBlock.LATE_ACTIVITY
)

MEAL_TIME_BLOCKS: Tuple[TimeBlock, ...] = (TimeBlock.LUNCH, TimeBlock.DINNER)

UNKNOWN_BLOCK_ORDER = 99


def time_block_order(block: Optional[TimeBlock]) -> int:
    """Sort index for a block; places without a block sort last."""
    if block is None:
        return UNKNOWN_BLOCK_ORDER
    return block.order


class DocumentType(str, Enum):
    """Kind of document a confirmed entry was extracted from."""

    FLIGHT = "FLIGHT"
    HOTEL = "HOTEL"
    TRAIN = "TRAIN"
    EVENT = "EVENT"
    RESTAURANT = "RESTAURANT"
    ATTRACTION = "ATTRACTION"
    RENTAL = "RENTAL"
    OTHER = "OTHER"

    @property
    def category(self) -> str:
        """Place category label used for the synthetic place."""
        return _DOCUMENT_CATEGORIES[self]


_DOCUMENT_CATEGORIES = {
    DocumentType.FLIGHT: "교통(항공)",
    DocumentType.HOTEL: "숙박",
    DocumentType.TRAIN: "교통(기차)",
    DocumentType.EVENT: "공연/이벤트",
    DocumentType.RESTAURANT: "맛집(예약)",
    DocumentType.ATTRACTION: "관광지(예약)",
    DocumentType.RENTAL: "교통(렌터카)",
    DocumentType.OTHER: "기타(확정)",
}


class Place(BaseModel):
    """A candidate location (or a synthetic place built from a confirmed entry)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique place identifier")
    name: str = Field(description="Display name")
    category: str = Field(default="", description="Free-form category label")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    time_block: Optional[TimeBlock] = Field(
        default=None, description="Time-of-day slot this place fits"
    )
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_trendy: bool = Field(default=False)
    day: Optional[int] = Field(
        default=None, description="Trip day this place was distributed to"
    )
    address: Optional[str] = Field(default=None)
    recommend_time: Optional[str] = Field(
        default=None, description="Suggested visit window (HH:MM-HH:MM)"
    )
    operating_hours: Optional[str] = Field(default=None)
    price_level: Optional[str] = Field(default=None)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_confirmed(self) -> bool:
        return self.price_level == CONFIRMED_MARKER


class ConfirmedEntry(BaseModel):
    """A fixed appointment extracted from a booking document."""

    model_config = ConfigDict(frozen=True)

    title: str
    start_time: datetime
    end_time: Optional[datetime] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location: Optional[str] = None
    address: Optional[str] = None
    document_type: DocumentType = DocumentType.OTHER


class DailyItinerary(BaseModel):
    """One day of the trip: its regions, ordered places and travel distance."""

    model_config = ConfigDict(frozen=True)

    day_number: int = Field(ge=1)
    date: date
    regions: List[str] = Field(default_factory=list)
    places: List[Place] = Field(default_factory=list)
    total_distance_km: float = Field(default=0.0, ge=0)

    @property
    def time_blocks(self) -> set:
        return {p.time_block for p in self.places if p.time_block is not None}
