"""
Tests for merging confirmed entries into generated itineraries.
"""

from datetime import date, datetime

import pytest

from itinerary.confirmed.merger import (
    CONFIRMED_RATING,
    ConfirmedScheduleMerger,
    group_by_day,
    time_block_for,
    to_place,
    trip_day_number,
)
from itinerary.shared.geo import total_distance_km
from itinerary.shared.schemas.places import (
    ConfirmedEntry,
    DailyItinerary,
    DocumentType,
    Place,
    TimeBlock,
)


TRIP_START = date(2025, 6, 1)


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_place(pid, block, lat=37.5, lon=127.0):
    return Place(
        id=pid,
        name=f"Place {pid}",
        category="맛집",
        latitude=lat,
        longitude=lon,
        time_block=block,
        rating=4.2,
        day=1,
    )


def _make_day(places, day=1):
    return DailyItinerary(
        day_number=day,
        date=date(2025, 6, day),
        regions=["명동"],
        places=places,
        total_distance_km=total_distance_km(places),
    )


def _make_flight(start=datetime(2025, 6, 1, 12, 30), end=datetime(2025, 6, 1, 13, 30)):
    return ConfirmedEntry(
        title="Flight CX700",
        start_time=start,
        end_time=end,
        location="인천국제공항",
        latitude=37.4602,
        longitude=126.4407,
        document_type=DocumentType.FLIGHT,
    )


# ============================================================================
# TestTimeBlockFor
# ============================================================================


class TestTimeBlockFor:
    """Tests for mapping start hours onto time blocks."""

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (6, TimeBlock.BREAKFAST),
            (9, TimeBlock.BREAKFAST),
            (10, TimeBlock.MORNING_ACTIVITY),
            (12, TimeBlock.LUNCH),
            (13, TimeBlock.LUNCH),
            (14, TimeBlock.CAFE),
            (16, TimeBlock.AFTERNOON_ACTIVITY),
            (18, TimeBlock.DINNER),
            (20, TimeBlock.EVENING_ACTIVITY),
            (22, TimeBlock.EVENING_ACTIVITY),
            (23, TimeBlock.LATE_ACTIVITY),
            (2, TimeBlock.LATE_ACTIVITY),
        ],
    )
    def test_hour_bands(self, hour, expected):
        assert time_block_for(datetime(2025, 6, 1, hour, 15)) == expected


class TestConfirmedHelpers:
    """Tests for the day-number and conversion helpers."""

    def test_trip_day_number(self):
        assert trip_day_number(datetime(2025, 6, 1, 9), TRIP_START) == 1
        assert trip_day_number(datetime(2025, 6, 3, 23), TRIP_START) == 3
        assert trip_day_number(datetime(2025, 5, 31, 23), TRIP_START) == 0

    def test_to_place(self):
        place = to_place(_make_flight(), 1)

        assert place.name == "Flight CX700"
        assert place.category == "교통(항공)"
        assert place.time_block == TimeBlock.LUNCH
        assert place.rating == CONFIRMED_RATING
        assert place.recommend_time == "12:30-13:30"
        assert place.address == "인천국제공항"
        assert place.is_confirmed
        assert place.day == 1
        assert place.id.startswith("confirmed_")

    def test_to_place_id_is_stable(self):
        assert to_place(_make_flight(), 1).id == to_place(_make_flight(), 1).id

    def test_to_place_without_end_time(self):
        entry = ConfirmedEntry(title="Show", start_time=datetime(2025, 6, 1, 19, 0))
        place = to_place(entry, 1)

        assert place.recommend_time == "19:00"
        assert place.category == "기타(확정)"
        assert not place.has_coordinates

    def test_group_by_day_drops_pre_trip_entries(self):
        early = _make_flight(start=datetime(2025, 5, 31, 12, 30), end=None)
        later = _make_flight(start=datetime(2025, 6, 2, 18, 0), end=None)

        grouped = group_by_day([early, later], TRIP_START)

        assert list(grouped) == [2]
        assert grouped[2] == [later]


# ============================================================================
# TestConfirmedScheduleMerger
# ============================================================================


class TestConfirmedScheduleMerger:
    """Tests for ConfirmedScheduleMerger."""

    def test_confirmed_entry_evicts_lunch_candidate(self):
        """A 12:30 flight takes the LUNCH slot and the algorithmic lunch is evicted."""
        lunch = _make_place("lunch", TimeBlock.LUNCH)
        dinner = _make_place("dinner", TimeBlock.DINNER, lat=37.51)
        itineraries = {1: _make_day([lunch, dinner])}

        merged = ConfirmedScheduleMerger().merge(itineraries, [_make_flight()], TRIP_START)

        places = merged[1].places
        assert [p.name for p in places] == ["Flight CX700", "Place dinner"]
        assert places[0].time_block == TimeBlock.LUNCH
        assert places[0].is_confirmed
        assert "lunch" not in {p.id for p in places}

    def test_no_entries_is_identity(self):
        itineraries = {1: _make_day([_make_place("a", TimeBlock.LUNCH)])}
        assert ConfirmedScheduleMerger().merge(itineraries, [], TRIP_START) == itineraries

    def test_input_is_not_mutated(self):
        original = _make_day([_make_place("lunch", TimeBlock.LUNCH)])
        itineraries = {1: original}

        ConfirmedScheduleMerger().merge(itineraries, [_make_flight()], TRIP_START)

        assert itineraries[1] is original
        assert [p.id for p in original.places] == ["lunch"]

    def test_places_resorted_by_block_order(self):
        itineraries = {
            1: _make_day([
                _make_place("b", TimeBlock.BREAKFAST),
                _make_place("d", TimeBlock.DINNER),
            ])
        }
        late = ConfirmedEntry(title="Night bus", start_time=datetime(2025, 6, 1, 23, 30))
        morning = ConfirmedEntry(title="Palace tour", start_time=datetime(2025, 6, 1, 10, 0))

        merged = ConfirmedScheduleMerger().merge(itineraries, [late, morning], TRIP_START)

        assert [p.time_block for p in merged[1].places] == [
            TimeBlock.BREAKFAST,
            TimeBlock.MORNING_ACTIVITY,
            TimeBlock.DINNER,
            TimeBlock.LATE_ACTIVITY,
        ]

    def test_distance_recomputed(self):
        itineraries = {
            1: _make_day([
                _make_place("b", TimeBlock.BREAKFAST),
                _make_place("d", TimeBlock.DINNER, lat=37.51),
            ])
        }
        merged = ConfirmedScheduleMerger().merge(itineraries, [_make_flight()], TRIP_START)

        assert merged[1].total_distance_km == pytest.approx(total_distance_km(merged[1].places))
        assert merged[1].total_distance_km > itineraries[1].total_distance_km

    def test_entry_outside_trip_is_skipped(self):
        itineraries = {1: _make_day([_make_place("a", TimeBlock.LUNCH)])}
        beyond = _make_flight(start=datetime(2025, 6, 5, 12, 30), end=None)

        merged = ConfirmedScheduleMerger().merge(itineraries, [beyond], TRIP_START)

        assert merged == itineraries

    def test_pre_trip_entry_is_dropped(self):
        itineraries = {1: _make_day([_make_place("a", TimeBlock.LUNCH)])}
        early = _make_flight(start=datetime(2025, 5, 30, 12, 30), end=None)

        merged = ConfirmedScheduleMerger().merge(itineraries, [early], TRIP_START)

        assert [p.id for p in merged[1].places] == ["a"]

    def test_two_confirmed_entries_in_same_block_both_kept(self):
        itineraries = {1: _make_day([_make_place("a", TimeBlock.LUNCH)])}
        first = ConfirmedEntry(title="Lunch reservation", start_time=datetime(2025, 6, 1, 12, 0),
                               document_type=DocumentType.RESTAURANT)
        second = ConfirmedEntry(title="Museum slot", start_time=datetime(2025, 6, 1, 13, 0),
                                document_type=DocumentType.ATTRACTION)

        merged = ConfirmedScheduleMerger().merge(itineraries, [first, second], TRIP_START)

        assert [p.name for p in merged[1].places] == ["Lunch reservation", "Museum slot"]
