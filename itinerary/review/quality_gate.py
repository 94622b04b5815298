"""
Rule-based schedule quality gate.

Decides whether a day is unwalkable, hungry, sparse or overstuffed enough to
be worth an LLM review.
"""

import logging
from typing import Dict, List, Optional

from itinerary.review.config import ReviewConfig, DEFAULT_CONFIG
from itinerary.shared.schemas.places import MEAL_TIME_BLOCKS, DailyItinerary


logger = logging.getLogger(__name__)


class ScheduleQualityGate:
    """Cheap per-day checks guarding the LLM review call."""

    def __init__(self, config: Optional[ReviewConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def review_reasons(self, itinerary: DailyItinerary) -> List[str]:
        """
        List every rule the day breaks (empty when the day passes).

        Rules: distance above the ceiling, a missing lunch or dinner block,
        too few or too many places.
        """
        reasons = []

        if itinerary.total_distance_km > self.config.max_daily_distance_km:
            reasons.append(
                f"distance {itinerary.total_distance_km:.1f}km exceeds "
                f"{self.config.max_daily_distance_km:.0f}km"
            )

        blocks = itinerary.time_blocks
        missing_meals = [b.value for b in MEAL_TIME_BLOCKS if b not in blocks]
        if missing_meals:
            reasons.append(f"missing meal blocks: {', '.join(missing_meals)}")

        count = len(itinerary.places)
        if count < self.config.min_places or count > self.config.max_places:
            reasons.append(
                f"place count {count} outside "
                f"[{self.config.min_places}, {self.config.max_places}]"
            )

        return reasons

    def needs_review(self, itinerary: DailyItinerary) -> bool:
        reasons = self.review_reasons(itinerary)
        if reasons:
            logger.warning(f"Day {itinerary.day_number} needs review: {'; '.join(reasons)}")
        return bool(reasons)

    def days_needing_review(self, itineraries: Dict[int, DailyItinerary]) -> Dict[int, List[str]]:
        """Day number -> reasons, for days failing the gate."""
        flagged = {}
        for day in sorted(itineraries):
            reasons = self.review_reasons(itineraries[day])
            if reasons:
                flagged[day] = reasons
        return flagged
