"""
Tests for region clustering.

Covers K-means partitioning, the elbow search for k, K-means++ seeding
reproducibility and region naming/ordering.
"""

from itinerary.clustering.config import ClusteringConfig
from itinerary.clustering.kmeans import RegionClusterer, within_cluster_sum_of_squares
from itinerary.clustering.schemas import Cluster
from itinerary.shared.schemas.places import Place, TimeBlock


# ============================================================================
# Test Fixtures
# ============================================================================


def _make_place(pid, lat, lon, address=None, rating=4.0, block=TimeBlock.LUNCH):
    return Place(
        id=pid,
        name=f"Place {pid}",
        category="맛집",
        latitude=lat,
        longitude=lon,
        time_block=block,
        rating=rating,
        address=address,
    )


def _make_group(prefix, lat, lon, count, address=None):
    """Tight group of places (~100m apart) around a point."""
    return [
        _make_place(f"{prefix}{i}", lat + (i % 5) * 0.001, lon + (i // 5) * 0.001, address)
        for i in range(count)
    ]


def _make_three_districts():
    return (
        _make_group("h", 37.5563, 126.9220, 10, "마포구 홍익로")
        + _make_group("g", 37.4979, 127.0276, 10, "강남구 테헤란로")
        + _make_group("j", 37.5113, 127.0980, 10, "송파구 올림픽로")
    )


# ============================================================================
# TestCluster
# ============================================================================


class TestCluster:
    """Tests for the mutable Cluster working structure."""

    def test_recalculate_center_uses_member_mean(self):
        cluster = Cluster(latitude=0.0, longitude=0.0)
        cluster.add(_make_place("a", 37.0, 127.0))
        cluster.add(_make_place("b", 38.0, 128.0))

        cluster.recalculate_center()

        assert cluster.latitude == 37.5
        assert cluster.longitude == 127.5

    def test_empty_cluster_keeps_centroid(self):
        """A cluster that lost all members keeps its previous centroid."""
        cluster = Cluster(latitude=37.1, longitude=127.1)
        cluster.recalculate_center()

        assert (cluster.latitude, cluster.longitude) == (37.1, 127.1)

    def test_wcss_zero_when_members_on_centroid(self):
        cluster = Cluster(latitude=37.0, longitude=127.0, places=[_make_place("a", 37.0, 127.0)])
        assert within_cluster_sum_of_squares([cluster]) == 0.0


# ============================================================================
# TestRegionClustererCluster
# ============================================================================


class TestRegionClustererCluster:
    """Tests for RegionClusterer.cluster."""

    def test_members_partition_input(self):
        """Every input place lands in exactly one cluster."""
        places = _make_three_districts()
        clusters = RegionClusterer(seed=42).cluster(places, 3)

        member_ids = [p.id for c in clusters for p in c.places]
        assert sorted(member_ids) == sorted(p.id for p in places)
        assert len(member_ids) == len(set(member_ids))

    def test_separated_groups_are_recovered(self):
        """Well separated districts end up in separate clusters."""
        places = _make_three_districts()
        clusters = RegionClusterer(seed=1).cluster(places, 3)

        groups = {frozenset(p.id[0] for p in c.places) for c in clusters if c.places}
        assert groups == {frozenset("h"), frozenset("g"), frozenset("j")}

    def test_empty_input_returns_no_clusters(self):
        assert RegionClusterer(seed=1).cluster([], 3) == []

    def test_k_above_distinct_points_yields_empty_clusters(self):
        """Duplicate coordinates leave the surplus clusters empty."""
        places = [_make_place(f"d{i}", 37.5, 127.0) for i in range(3)]
        clusters = RegionClusterer(seed=3).cluster(places, 3)

        assert len(clusters) == 3
        assert sum(len(c.places) for c in clusters) == 3
        assert any(not c.places for c in clusters)

        regions = RegionClusterer.to_regions(clusters)
        assert len(regions) == 1
        assert regions[0].place_count == 3

    def test_places_without_coordinates_are_skipped(self):
        places = _make_group("a", 37.5, 127.0, 4) + [
            Place(id="nowhere", name="Nowhere", time_block=TimeBlock.CAFE)
        ]
        clusters = RegionClusterer(seed=5).cluster(places, 2)

        member_ids = {p.id for c in clusters for p in c.places}
        assert "nowhere" not in member_ids
        assert len(member_ids) == 4

    def test_same_seed_same_clusters(self):
        places = _make_three_districts()
        first = RegionClusterer(seed=11).cluster(places, 4)
        second = RegionClusterer(seed=11).cluster(places, 4)

        assert [[p.id for p in c.places] for c in first] == [
            [p.id for p in c.places] for c in second
        ]


# ============================================================================
# TestDetermineOptimalK
# ============================================================================


class TestDetermineOptimalK:
    """Tests for the elbow search."""

    def test_single_day_three_places_returns_one(self):
        """Three lunch places over one day cluster into a single region."""
        places = [
            _make_place("a", 37.5000, 127.0000),
            _make_place("b", 37.5010, 127.0010),
            _make_place("c", 37.5020, 127.0005),
        ]
        assert RegionClusterer(seed=1).determine_optimal_k(places, 1) == 1

    def test_result_within_bounds(self):
        places = _make_three_districts()
        for trip_days in (1, 2, 3, 4):
            k = RegionClusterer(seed=7).determine_optimal_k(places, trip_days)
            assert trip_days <= k <= int(trip_days * 1.5)

    def test_deterministic_for_fixed_seed(self):
        places = _make_three_districts()
        results = {RegionClusterer(seed=99).determine_optimal_k(places, 2) for _ in range(3)}
        assert len(results) == 1

    def test_empty_places_returns_trip_days(self):
        assert RegionClusterer(seed=1).determine_optimal_k([], 3) == 3

    def test_zero_trip_days_returns_zero(self):
        assert RegionClusterer(seed=1).determine_optimal_k(_make_three_districts(), 0) == 0

    def test_respects_custom_threshold(self):
        """A threshold of 1 flattens at the first step, so k stays at trip_days."""
        config = ClusteringConfig(elbow_threshold=1.0)
        k = RegionClusterer(config, seed=2).determine_optimal_k(_make_three_districts(), 2)
        assert k == 2


# ============================================================================
# TestToRegions
# ============================================================================


class TestToRegions:
    """Tests for converting clusters into named regions."""

    def test_sorted_by_size_descending(self):
        clusters = [
            Cluster(37.5, 127.0, places=_make_group("s", 37.5, 127.0, 2, "종로구 세종대로")),
            Cluster(37.6, 127.1, places=_make_group("l", 37.6, 127.1, 5, "성동구 성수이로")),
        ]
        regions = RegionClusterer.to_regions(clusters)

        assert [r.place_count for r in regions] == [5, 2]
        assert [r.name for r in regions] == ["성동구", "종로구"]

    def test_name_is_most_common_address_token(self):
        places = [
            _make_place("a", 37.5, 127.0, "마포구 홍익로 1"),
            _make_place("b", 37.5, 127.0, "마포구 와우산로 2"),
            _make_place("c", 37.5, 127.0, "서대문구 연세로 3"),
        ]
        regions = RegionClusterer.to_regions([Cluster(37.5, 127.0, places=places)])
        assert regions[0].name == "마포구"

    def test_synthetic_name_without_addresses(self):
        regions = RegionClusterer.to_regions(
            [Cluster(37.5, 127.0, places=_make_group("x", 37.5, 127.0, 3))]
        )
        assert regions[0].name == "지역1"

    def test_average_rating(self):
        places = [
            _make_place("a", 37.5, 127.0, rating=4.0),
            _make_place("b", 37.5, 127.0, rating=5.0),
        ]
        regions = RegionClusterer.to_regions([Cluster(37.5, 127.0, places=places)])
        assert regions[0].average_rating == 4.5
