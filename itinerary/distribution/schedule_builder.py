"""
Daily schedule construction.

For each day, picks at most one place per time block from the day's regions,
walking the blocks in order and scoring candidates against the previously
selected place.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from itinerary.clustering.schemas import RegionCluster
from itinerary.distribution.scoring import ScoreFn, score_candidate
from itinerary.shared.geo import total_distance_km
from itinerary.shared.schemas.places import (
    SCHEDULE_TIME_BLOCKS,
    DailyItinerary,
    Place,
)


logger = logging.getLogger(__name__)


def day_date(trip_start_date: date, day: int) -> date:
    """Calendar date of a 1-based trip day."""
    return trip_start_date + timedelta(days=day - 1)


def empty_itineraries(trip_days: int, trip_start_date: date) -> Dict[int, DailyItinerary]:
    """Well-formed itinerary with no places for every trip day."""
    return {
        day: DailyItinerary(day_number=day, date=day_date(trip_start_date, day))
        for day in range(1, max(trip_days, 0) + 1)
    }


class DailyScheduleBuilder:
    """
    Builds one DailyItinerary per day from its assigned regions.

    Args:
        score_fn: Candidate scoring function ``(candidate, previous) -> score``.
    """

    def __init__(self, score_fn: ScoreFn = score_candidate):
        self.score_fn = score_fn

    def select_places(self, candidates: Sequence[Place]) -> List[Place]:
        """
        Pick at most one place per time block, in block order.

        Ties keep the earliest candidate. Blocks without candidates are
        skipped. A place id is never selected twice.
        """
        selected: List[Place] = []
        used_ids = set()

        for block in SCHEDULE_TIME_BLOCKS:
            block_candidates = [
                p for p in candidates
                if p.time_block == block and p.id not in used_ids
            ]
            if not block_candidates:
                continue

            previous = selected[-1] if selected else None
            best = self._best_candidate(block_candidates, previous)
            selected.append(best)
            used_ids.add(best.id)

        return selected

    def _best_candidate(self, candidates: Sequence[Place], previous: Optional[Place]) -> Place:
        best = candidates[0]
        best_score = self.score_fn(best, previous)
        for candidate in candidates[1:]:
            score = self.score_fn(candidate, previous)
            if score > best_score:
                best, best_score = candidate, score
        return best

    def build(
        self,
        day: int,
        regions: Sequence[RegionCluster],
        trip_start_date: date,
    ) -> DailyItinerary:
        """
        Build the itinerary for one day.

        Args:
            day: 1-based day number
            regions: Regions assigned to the day
            trip_start_date: First day of the trip

        Returns:
            DailyItinerary with the selected places (tagged with ``day``) and
            the travel distance across them
        """
        candidates = [place for region in regions for place in region.places]
        selected = [p.model_copy(update={"day": day}) for p in self.select_places(candidates)]
        distance = total_distance_km(selected)

        itinerary = DailyItinerary(
            day_number=day,
            date=day_date(trip_start_date, day),
            regions=[r.name for r in regions],
            places=selected,
            total_distance_km=distance,
        )

        logger.info(
            f"Day {day} built | regions={itinerary.regions}, "
            f"places={len(selected)}, distance={distance:.1f}km"
        )
        return itinerary

    def build_all(
        self,
        assignment: Dict[int, List[RegionCluster]],
        trip_start_date: date,
    ) -> Dict[int, DailyItinerary]:
        """Build every day of a region assignment."""
        return {
            day: self.build(day, assignment[day], trip_start_date)
            for day in sorted(assignment)
        }
