"""
Confirmed schedule merging.

Places externally booked appointments into the generated itinerary.
"""

from itinerary.confirmed.merger import (
    ConfirmedScheduleMerger,
    group_by_day,
    time_block_for,
    to_place,
)

__all__ = [
    "ConfirmedScheduleMerger",
    "group_by_day",
    "time_block_for",
    "to_place",
]
