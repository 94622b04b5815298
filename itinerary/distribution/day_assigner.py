"""
Greedy assignment of region clusters to trip days.

Regions are handled largest first:
1. Large regions (>= 20 places) go to the least-loaded day.
2. Medium regions (10-19 places) go to the least-loaded day as well.
3. Small regions (< 10 places) join the day holding the nearest already
   assigned region if its centroid is within the merge threshold, otherwise
   they fall back to the least-loaded day.

Ties between equally loaded days are broken round-robin: the search starts
at a cursor that advances past each day receiving a large region.
"""

import logging
from typing import Dict, List, Optional, Sequence

from itinerary.clustering.schemas import RegionCluster
from itinerary.distribution.config import DistributionConfig, DEFAULT_CONFIG
from itinerary.shared.geo import haversine_km


logger = logging.getLogger(__name__)


def day_load(regions: Sequence[RegionCluster]) -> int:
    """Total number of places across a day's regions."""
    return sum(r.place_count for r in regions)


class DayAssigner:
    """Maps regions onto trip days."""

    def __init__(self, config: Optional[DistributionConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def assign(
        self,
        regions: Sequence[RegionCluster],
        trip_days: int,
    ) -> Dict[int, List[RegionCluster]]:
        """
        Assign every region to exactly one day.

        Args:
            regions: Region clusters to distribute
            trip_days: Number of trip days

        Returns:
            Mapping of day number (1-based) to the regions assigned to it.
            Every day appears, possibly with an empty list.
        """
        if trip_days <= 0:
            return {}

        assignment: Dict[int, List[RegionCluster]] = {
            day: [] for day in range(1, trip_days + 1)
        }
        cursor = 1

        for region in sorted(regions, key=lambda r: r.place_count, reverse=True):
            size = region.place_count

            if size >= self.config.large_region_min_places:
                day = self._least_loaded_day(assignment, cursor)
                cursor = day % trip_days + 1
            elif size >= self.config.medium_region_min_places:
                day = self._least_loaded_day(assignment, cursor)
            else:
                day = self._nearest_region_day(assignment, region)
                if day is None:
                    day = self._least_loaded_day(assignment, cursor)

            assignment[day].append(region)

        for day, day_regions in assignment.items():
            logger.info(
                f"Day {day} regions: {[r.name for r in day_regions]} "
                f"(places={day_load(day_regions)})"
            )

        return assignment

    @staticmethod
    def _least_loaded_day(
        assignment: Dict[int, List[RegionCluster]],
        start: int,
    ) -> int:
        """Day with the fewest places; ties go to the first day at or after ``start``."""
        days = sorted(assignment)
        if start in assignment:
            pivot = days.index(start)
            days = days[pivot:] + days[:pivot]
        return min(days, key=lambda d: day_load(assignment[d]))

    def _nearest_region_day(
        self,
        assignment: Dict[int, List[RegionCluster]],
        region: RegionCluster,
    ) -> Optional[int]:
        """Day holding the closest assigned region within the merge threshold."""
        best_day = None
        best_distance = float("inf")

        for day in sorted(assignment):
            for existing in assignment[day]:
                distance = haversine_km(
                    region.latitude, region.longitude,
                    existing.latitude, existing.longitude,
                )
                if distance < best_distance:
                    best_distance = distance
                    best_day = day

        if best_day is not None and best_distance < self.config.merge_distance_km:
            logger.debug(
                f"Region '{region.name}' joins day {best_day} "
                f"(nearest region {best_distance:.2f}km)"
            )
            return best_day
        return None
