"""
K-means region clustering.

Partitions candidate places into geographic clusters. The number of clusters
is chosen with the elbow method over ``[trip_days, 2 * trip_days]`` and
centroids are seeded with K-means++. Every ``k`` trial draws from its own RNG
derived from the clusterer seed, so a fixed seed gives reproducible results.
"""

import logging
import random
from collections import Counter
from typing import List, Optional, Sequence

from itinerary.clustering.config import ClusteringConfig, DEFAULT_CONFIG
from itinerary.clustering.schemas import Cluster, RegionCluster
from itinerary.shared.geo import haversine_km
from itinerary.shared.schemas.places import Place


logger = logging.getLogger(__name__)


def within_cluster_sum_of_squares(clusters: Sequence[Cluster]) -> float:
    """Sum over clusters of squared member-to-centroid distances (km^2)."""
    total = 0.0
    for cluster in clusters:
        for place in cluster.places:
            distance = haversine_km(
                place.latitude, place.longitude, cluster.latitude, cluster.longitude
            )
            total += distance * distance
    return total


def _nearest_cluster_index(place: Place, clusters: Sequence[Cluster]) -> int:
    return min(
        range(len(clusters)),
        key=lambda i: haversine_km(
            place.latitude, place.longitude, clusters[i].latitude, clusters[i].longitude
        ),
    )


def _region_name(places: Sequence[Place], index: int) -> str:
    """Most frequent first address token, or a synthetic ``지역N`` name."""
    tokens = [
        p.address.split()[0]
        for p in places
        if p.address and p.address.split()
    ]
    if not tokens:
        return f"지역{index}"
    # most_common keeps first-seen order among equal counts
    return Counter(tokens).most_common(1)[0][0]


class RegionClusterer:
    """
    Groups places into geographic regions.

    Args:
        config: Clustering parameters. Uses DEFAULT_CONFIG if not provided.
        seed: RNG seed for K-means++ seeding. ``None`` draws fresh entropy.
    """

    def __init__(
        self,
        config: Optional[ClusteringConfig] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.seed = seed

    def _rng_for(self, k: int) -> random.Random:
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{k}")

    @staticmethod
    def _clusterable(places: Sequence[Place]) -> List[Place]:
        usable = [p for p in places if p.has_coordinates]
        skipped = len(places) - len(usable)
        if skipped:
            logger.warning(f"Skipping {skipped} place(s) without coordinates")
        return usable

    def determine_optimal_k(self, places: Sequence[Place], trip_days: int) -> int:
        """
        Choose the cluster count with the elbow method.

        Runs clustering for every k in ``[trip_days, trip_days * 2]`` and picks
        the smallest k after which WCSS improves by less than the threshold.
        The result is capped at ``floor(trip_days * 1.5)`` and floored at
        ``trip_days``.

        Args:
            places: Candidate places
            trip_days: Number of trip days

        Returns:
            Number of clusters to use (0 when trip_days is not positive)
        """
        if trip_days <= 0:
            return 0

        usable = self._clusterable(places)
        if not usable:
            return trip_days

        logger.info(
            f"Determining optimal k | trip_days={trip_days}, places={len(usable)}"
        )

        max_k = trip_days * self.config.search_k_factor
        wcss = []
        for k in range(trip_days, max_k + 1):
            score = within_cluster_sum_of_squares(self._run(usable, k))
            wcss.append(score)
            logger.debug(f"k={k}: WCSS={score:.4f}")

        optimal_k = trip_days
        for i in range(1, len(wcss)):
            previous = wcss[i - 1]
            decrease_rate = (previous - wcss[i]) / previous if previous > 0 else 0.0
            logger.debug(f"k={trip_days + i}: decrease_rate={decrease_rate:.4f}")
            if decrease_rate < self.config.elbow_threshold:
                optimal_k = trip_days + i - 1
                break

        cap = int(trip_days * self.config.max_k_factor)
        optimal_k = max(trip_days, min(optimal_k, cap))
        logger.info(f"Optimal k determined: {optimal_k}")
        return optimal_k

    def cluster(self, places: Sequence[Place], k: int) -> List[Cluster]:
        """
        Run K-means with K-means++ seeding.

        Members of the returned clusters partition the coordinate-bearing
        input places. Clusters may be empty when k exceeds the number of
        distinct points.
        """
        usable = self._clusterable(places)
        if not usable or k <= 0:
            return []
        return self._run(usable, k)

    def _run(self, places: List[Place], k: int) -> List[Cluster]:
        rng = self._rng_for(k)
        clusters = [
            Cluster(latitude=p.latitude, longitude=p.longitude)
            for p in self._seed_centroids(places, k, rng)
        ]

        assignments = None
        iteration = 0
        while iteration < self.config.max_iterations:
            iteration += 1
            new_assignments = [_nearest_cluster_index(p, clusters) for p in places]

            for cluster in clusters:
                cluster.clear()
            for place, index in zip(places, new_assignments):
                clusters[index].add(place)
            for cluster in clusters:
                cluster.recalculate_center()

            if new_assignments == assignments:
                break
            assignments = new_assignments

        logger.debug(f"K-means finished | k={k}, iterations={iteration}")
        return clusters

    @staticmethod
    def _seed_centroids(places: List[Place], k: int, rng: random.Random) -> List[Place]:
        """K-means++: sample each next centroid proportionally to squared distance."""
        centroids = [places[rng.randrange(len(places))]]

        while len(centroids) < k:
            weights = []
            for place in places:
                nearest = min(
                    haversine_km(place.latitude, place.longitude, c.latitude, c.longitude)
                    for c in centroids
                )
                weights.append(nearest * nearest)

            threshold = rng.random() * sum(weights)
            chosen = places[-1]
            cumulative = 0.0
            for place, weight in zip(places, weights):
                cumulative += weight
                if cumulative >= threshold:
                    chosen = place
                    break
            centroids.append(chosen)

        return centroids

    @staticmethod
    def to_regions(clusters: Sequence[Cluster]) -> List[RegionCluster]:
        """
        Convert non-empty clusters into named regions, largest first.

        Empty clusters are dropped.
        """
        regions = []
        index = 1
        for cluster in clusters:
            if not cluster.places:
                continue

            ratings = [p.rating for p in cluster.places if p.rating is not None]
            average_rating = sum(ratings) / len(ratings) if ratings else 0.0

            regions.append(
                RegionCluster(
                    name=_region_name(cluster.places, index),
                    latitude=cluster.latitude,
                    longitude=cluster.longitude,
                    average_rating=average_rating,
                    places=tuple(cluster.places),
                )
            )
            index += 1

        regions.sort(key=lambda r: r.place_count, reverse=True)
        return regions
