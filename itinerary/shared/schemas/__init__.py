"""Domain models shared across pipeline stages."""

from itinerary.shared.schemas.places import (
    CONFIRMED_MARKER,
    MEAL_TIME_BLOCKS,
    SCHEDULE_TIME_BLOCKS,
    ConfirmedEntry,
    DailyItinerary,
    DocumentType,
    Place,
    TimeBlock,
    time_block_order,
)

__all__ = [
    "CONFIRMED_MARKER",
    "MEAL_TIME_BLOCKS",
    "SCHEDULE_TIME_BLOCKS",
    "ConfirmedEntry",
    "DailyItinerary",
    "DocumentType",
    "Place",
    "TimeBlock",
    "time_block_order",
]
