"""
Confirmed schedule merging.

Overlays fixed appointments (flights, reservations, tickets) onto the
generated daily itineraries. A confirmed entry always takes its time block:
any generated place in the same block is evicted, the synthetic place is put
in front, and the day is re-sorted by block order.
"""

import hashlib
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from itinerary.shared.geo import total_distance_km
from itinerary.shared.schemas.places import (
    CONFIRMED_MARKER,
    ConfirmedEntry,
    DailyItinerary,
    Place,
    TimeBlock,
    time_block_order,
)


logger = logging.getLogger(__name__)

CONFIRMED_RATING = 5.0

# (start hour inclusive, end hour exclusive, block)
_HOUR_BANDS = (
    (6, 10, TimeBlock.BREAKFAST),
    (10, 12, TimeBlock.MORNING_ACTIVITY),
    (12, 14, TimeBlock.LUNCH),
    (14, 16, TimeBlock.CAFE),
    (16, 18, TimeBlock.AFTERNOON_ACTIVITY),
    (18, 20, TimeBlock.DINNER),
    (20, 23, TimeBlock.EVENING_ACTIVITY),
)


def time_block_for(start_time: datetime) -> TimeBlock:
    """Time block for an appointment starting at ``start_time``."""
    for start_hour, end_hour, block in _HOUR_BANDS:
        if start_hour <= start_time.hour < end_hour:
            return block
    return TimeBlock.LATE_ACTIVITY


def trip_day_number(moment: datetime, trip_start_date: date) -> int:
    """1-based trip day on which ``moment`` falls (may be < 1 before the trip)."""
    return (moment.date() - trip_start_date).days + 1


def _format_window(start: datetime, end: Optional[datetime]) -> str:
    if end is None:
        return f"{start:%H:%M}"
    return f"{start:%H:%M}-{end:%H:%M}"


def _entry_id(entry: ConfirmedEntry) -> str:
    digest = hashlib.sha1(
        f"{entry.title}|{entry.start_time.isoformat()}".encode("utf-8")
    ).hexdigest()
    return f"confirmed_{digest[:12]}"


def to_place(entry: ConfirmedEntry, day: int) -> Place:
    """Convert a confirmed entry into a synthetic, top-rated place."""
    return Place(
        id=_entry_id(entry),
        name=entry.title,
        category=entry.document_type.category,
        latitude=entry.latitude,
        longitude=entry.longitude,
        time_block=time_block_for(entry.start_time),
        rating=CONFIRMED_RATING,
        is_trendy=False,
        day=day,
        address=entry.address or entry.location,
        recommend_time=_format_window(entry.start_time, entry.end_time),
        operating_hours=CONFIRMED_MARKER,
        price_level=CONFIRMED_MARKER,
    )


def group_by_day(
    entries: Sequence[ConfirmedEntry],
    trip_start_date: date,
) -> Dict[int, List[ConfirmedEntry]]:
    """
    Bucket entries by trip day.

    Entries dated before the trip starts are dropped with a warning.
    """
    by_day: Dict[int, List[ConfirmedEntry]] = defaultdict(list)
    for entry in entries:
        day = trip_day_number(entry.start_time, trip_start_date)
        if day < 1:
            logger.warning(f"Confirmed entry before trip start dropped: {entry.title}")
            continue
        by_day[day].append(entry)
    return dict(by_day)


class ConfirmedScheduleMerger:
    """Merges confirmed entries into daily itineraries."""

    def merge_day(
        self,
        itinerary: DailyItinerary,
        entries: Sequence[ConfirmedEntry],
    ) -> DailyItinerary:
        """
        Merge one day's confirmed entries.

        Args:
            itinerary: The generated itinerary for the day
            entries: Confirmed entries that fall on that day

        Returns:
            A new itinerary with conflicting places evicted, the confirmed
            places added, places sorted by time block and distance recomputed
        """
        if not entries:
            return itinerary

        confirmed = [to_place(e, itinerary.day_number) for e in entries]
        occupied = {p.time_block for p in confirmed}

        kept = []
        for place in itinerary.places:
            if place.time_block in occupied:
                logger.debug(
                    f"Day {itinerary.day_number}: evicting '{place.name}' "
                    f"({place.time_block.value}) for confirmed entry"
                )
                continue
            kept.append(place)

        evicted = len(itinerary.places) - len(kept)
        if evicted:
            logger.info(
                f"Day {itinerary.day_number}: {evicted} place(s) evicted by confirmed entries"
            )

        # sorted() is stable, so confirmed places stay ahead within a shared block
        places = sorted(confirmed + kept, key=lambda p: time_block_order(p.time_block))
        return itinerary.model_copy(
            update={"places": places, "total_distance_km": total_distance_km(places)}
        )

    def merge(
        self,
        itineraries: Dict[int, DailyItinerary],
        entries: Sequence[ConfirmedEntry],
        trip_start_date: date,
    ) -> Dict[int, DailyItinerary]:
        """
        Merge confirmed entries into every affected day.

        Args:
            itineraries: Day number -> generated itinerary
            entries: All confirmed entries for the trip
            trip_start_date: First day of the trip

        Returns:
            A new mapping; days without confirmed entries are carried over as-is
        """
        merged = dict(itineraries)
        if not entries:
            logger.info("No confirmed entries to merge")
            return merged

        logger.info(f"Merging {len(entries)} confirmed entries")

        for day, day_entries in sorted(group_by_day(entries, trip_start_date).items()):
            if day not in merged:
                logger.warning(
                    f"Day {day} is outside the itinerary; "
                    f"{len(day_entries)} confirmed entr(ies) not placed"
                )
                continue
            merged[day] = self.merge_day(merged[day], day_entries)
            logger.info(f"Day {day}: merged {len(day_entries)} confirmed entries")

        return merged
