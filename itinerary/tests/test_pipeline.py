"""
Tests for the itinerary pipeline graph.

Runs the full cluster -> assign -> build -> merge -> gate (-> review) ->
finalize sequence with mock candidates and fake reviewers.
"""

from datetime import date, datetime

from itinerary.graph.build import create_itinerary_graph, initial_state, run_itinerary_pipeline
from itinerary.graph.config import DEFAULT_CONFIG, PipelineConfig, get_config
from itinerary.graph.router import route_after_gate
from itinerary.mock_data import SEOUL_DISTRICTS, generate_mock_places
from itinerary.shared.contracts.itinerary_output import ItineraryOutputV1
from itinerary.shared.contracts.review_contract import ReviewVerdict, Suggestion
from itinerary.shared.schemas.places import (
    SCHEDULE_TIME_BLOCKS,
    ConfirmedEntry,
    DocumentType,
    Place,
    TimeBlock,
)


TRIP_START = date(2025, 6, 1)


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_place(pid, block, rating=4.0, lat=37.5636, lon=126.9869, category="관광지"):
    return Place(
        id=pid,
        name=f"Place {pid}",
        category=category,
        latitude=lat,
        longitude=lon,
        time_block=block,
        rating=rating,
        address="중구 명동길",
    )


def _make_lunch_only_places():
    return [
        _make_place("a", TimeBlock.LUNCH, rating=4.0, lat=37.5636),
        _make_place("b", TimeBlock.LUNCH, rating=4.8, lat=37.5640),
        _make_place("c", TimeBlock.LUNCH, rating=4.5, lat=37.5645),
    ]


def _make_full_day_places():
    """One candidate per schedulable block, all within a few hundred metres."""
    return [
        _make_place(f"p{i}", block, lat=37.5636 + i * 0.0005)
        for i, block in enumerate(SCHEDULE_TIME_BLOCKS)
    ]


class FakeReviewer:
    """Reviewer returning a canned verdict and recording requests."""

    def __init__(self, verdict=None, error=None):
        self.verdict = verdict or ReviewVerdict.no_adjustment("looks fine")
        self.error = error
        self.requests = []

    def review(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.verdict


def _config(seed=7):
    return get_config(seed=seed)


# ============================================================================
# TestItineraryGraph
# ============================================================================


class TestItineraryGraph:
    """Tests for the compiled graph and its stage tracking."""

    def test_pass_branch_reaches_final(self):
        app = create_itinerary_graph(reviewer=FakeReviewer(), config=_config())
        result = app.invoke(
            initial_state(_make_full_day_places(), TRIP_START, 1, session_id="test-session-001")
        )

        assert result["stage"] == "Final"
        assert result["review_requested"] is False
        assert result["review_reasons"] == {}
        assert isinstance(result["output"], ItineraryOutputV1)
        assert len(result["errors"]) == 0

    def test_messages_track_every_stage(self):
        app = create_itinerary_graph(config=_config())
        result = app.invoke(initial_state(_make_full_day_places(), TRIP_START, 1))

        messages = result["messages"]
        # initial + cluster, assign, build, merge, gate, finalize
        assert len(messages) == 7
        assert {m["agent"] for m in messages} == {"itinerary"}

    def test_review_branch_taken_when_gate_fails(self):
        reviewer = FakeReviewer()
        app = create_itinerary_graph(reviewer=reviewer, config=_config())
        result = app.invoke(initial_state(_make_lunch_only_places(), TRIP_START, 1))

        assert result["stage"] == "Final"
        assert result["review_requested"] is True
        assert 1 in result["review_reasons"]
        assert result["llm_review_applied"] is True
        assert len(reviewer.requests) == 1

    def test_without_reviewer_gate_failure_goes_to_finalize(self):
        app = create_itinerary_graph(config=_config())
        result = app.invoke(initial_state(_make_lunch_only_places(), TRIP_START, 1))

        assert result["review_requested"] is False
        assert result["llm_review_applied"] is False
        assert 1 in result["review_reasons"]


class TestRouteAfterGate:
    """Tests for the gate router."""

    def test_routes_to_review_when_requested(self):
        assert route_after_gate({"review_requested": True, "review_reasons": {1: ["x"]}}) == "review"

    def test_routes_to_finalize_otherwise(self):
        assert route_after_gate({"review_requested": False}) == "finalize"
        assert route_after_gate({}) == "finalize"


# ============================================================================
# TestRunItineraryPipeline
# ============================================================================


class TestRunItineraryPipeline:
    """End-to-end pipeline scenarios."""

    def test_single_day_lunch_scenario(self):
        """Three lunch candidates over one day: best-rated lunch, nothing else."""
        output = run_itinerary_pipeline(_make_lunch_only_places(), TRIP_START, 1, config=_config())

        assert len(output.daily_itineraries) == 1
        day = output.daily_itineraries[0]
        assert [p.id for p in day.places] == ["b"]
        assert day.places[0].time_block == "LUNCH"
        assert output.summary.llm_review_applied is False

    def test_mock_trip_is_well_formed(self):
        places = generate_mock_places(3, seed=7)
        output = run_itinerary_pipeline(places, TRIP_START, 3, config=_config())

        assert [d.day_number for d in output.daily_itineraries] == [1, 2, 3]
        assert [d.date for d in output.daily_itineraries] == [
            date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)
        ]
        for day in output.daily_itineraries:
            blocks = [p.time_block for p in day.places]
            ids = [p.id for p in day.places]
            assert len(blocks) == len(set(blocks)) <= 7
            assert len(ids) == len(set(ids))

        summary = output.summary
        assert summary.total_days == 3
        assert summary.total_places == sum(len(d.places) for d in output.daily_itineraries)
        assert sum(summary.category_distribution.values()) == summary.total_places

    def test_fixed_seed_is_reproducible(self):
        places = generate_mock_places(2, seed=3)
        first = run_itinerary_pipeline(places, TRIP_START, 2, config=_config(seed=3))
        second = run_itinerary_pipeline(places, TRIP_START, 2, config=_config(seed=3))

        assert first.model_dump() == second.model_dump()

    def test_empty_places_give_empty_days_without_review(self):
        reviewer = FakeReviewer()
        output = run_itinerary_pipeline([], TRIP_START, 2, reviewer=reviewer, config=_config())

        assert [d.day_number for d in output.daily_itineraries] == [1, 2]
        assert all(d.places == [] for d in output.daily_itineraries)
        assert output.summary.total_places == 0
        assert output.summary.llm_review_applied is False
        assert reviewer.requests == []

    def test_zero_trip_days(self):
        output = run_itinerary_pipeline(_make_lunch_only_places(), TRIP_START, 0, config=_config())

        assert output.daily_itineraries == []
        assert output.summary.total_days == 0
        assert output.summary.average_regions_per_day == 0.0

    def test_confirmed_flight_takes_lunch_slot(self):
        places = [
            _make_place("lunch", TimeBlock.LUNCH, rating=4.9),
            _make_place("dinner", TimeBlock.DINNER, rating=4.1, lat=37.5650),
        ]
        flight = ConfirmedEntry(
            title="Flight CX700",
            start_time=datetime(2025, 6, 1, 12, 30),
            end_time=datetime(2025, 6, 1, 13, 30),
            location="김포공항",
            document_type=DocumentType.FLIGHT,
        )

        output = run_itinerary_pipeline(
            places, TRIP_START, 1, confirmed_entries=[flight], config=_config()
        )

        day = output.daily_itineraries[0]
        assert [p.name for p in day.places] == ["Flight CX700", "Place dinner"]
        assert day.places[0].time_block == "LUNCH"
        assert day.places[0].confirmed is True
        assert day.places[1].confirmed is False

    def test_review_suggestion_is_applied(self):
        verdict = ReviewVerdict(
            needs_adjustment=True,
            reason="too little on day 1",
            suggestions=[Suggestion(day=1, type="REMOVE", place="Place b")],
        )
        reviewer = FakeReviewer(verdict)

        output = run_itinerary_pipeline(
            _make_lunch_only_places(), TRIP_START, 1,
            reviewer=reviewer, destinations=["서울"], travel_styles=["미식"], config=_config(),
        )

        assert output.daily_itineraries[0].places == []
        assert output.summary.llm_review_applied is True
        assert reviewer.requests[0].travel_styles == ["미식"]

    def test_review_failure_keeps_itinerary(self):
        reviewer = FakeReviewer(error=TimeoutError("timed out"))

        output = run_itinerary_pipeline(
            _make_lunch_only_places(), TRIP_START, 1, reviewer=reviewer, config=_config()
        )

        assert [p.id for p in output.daily_itineraries[0].places] == ["b"]
        assert output.summary.llm_review_applied is False

    def test_passing_day_skips_reviewer(self):
        reviewer = FakeReviewer()
        output = run_itinerary_pipeline(
            _make_full_day_places(), TRIP_START, 1, reviewer=reviewer, config=_config()
        )

        assert len(output.daily_itineraries[0].places) == 7
        assert reviewer.requests == []
        assert output.summary.llm_review_applied is False

    def test_output_serialises_with_camel_case(self):
        output = run_itinerary_pipeline(_make_full_day_places(), TRIP_START, 1, config=_config())
        data = output.model_dump(by_alias=True)

        assert "dailyItineraries" in data
        assert "llmReviewApplied" in data["summary"]
        assert "totalDistanceKm" in data["dailyItineraries"][0]


# ============================================================================
# TestPipelineConfig
# ============================================================================


class TestPipelineConfig:
    """Tests for configuration helpers."""

    def test_get_config_overrides(self):
        config = get_config(seed=5, recursion_limit=30)

        assert config.seed == 5
        assert config.recursion_limit == 30
        assert DEFAULT_CONFIG.seed is None

    def test_defaults(self):
        config = PipelineConfig()
        assert config.review.max_daily_distance_km == 20.0
        assert config.clustering.max_iterations == 100
        assert config.distribution.merge_distance_km == 5.0


# ============================================================================
# TestMockData
# ============================================================================


class TestMockData:
    """Tests for the mock candidate generator."""

    def test_counts_per_day_and_block(self):
        places = generate_mock_places(2, seed=1)

        assert 2 * 7 * 10 <= len(places) <= 2 * 7 * 15
        assert {p.time_block for p in places} == set(SCHEDULE_TIME_BLOCKS)
        assert len({p.id for p in places}) == len(places)

    def test_ratings_and_locations(self):
        places = generate_mock_places(1, seed=2)

        assert all(3.5 <= p.rating <= 5.0 for p in places)
        assert all(p.address.split()[0] in SEOUL_DISTRICTS for p in places)
        assert all(p.has_coordinates for p in places)

    def test_seed_is_reproducible(self):
        assert generate_mock_places(1, seed=4) == generate_mock_places(1, seed=4)

    def test_zero_days(self):
        assert generate_mock_places(0, seed=1) == []
