"""
Day distribution.

Assigns regions to trip days and builds each day's schedule.
"""

from itinerary.distribution.config import DistributionConfig
from itinerary.distribution.day_assigner import DayAssigner
from itinerary.distribution.schedule_builder import DailyScheduleBuilder, empty_itineraries
from itinerary.distribution.scoring import score_candidate
from itinerary.distribution.summary import build_output, build_summary

__all__ = [
    "DistributionConfig",
    "DayAssigner",
    "DailyScheduleBuilder",
    "empty_itineraries",
    "score_candidate",
    "build_output",
    "build_summary",
]
