"""
Configuration for day assignment and schedule building.
"""

from dataclasses import dataclass


@dataclass
class DistributionConfig:
    """
    Configuration for distributing regions onto trip days.

    Attributes:
        large_region_min_places: Regions at or above this size go to the least-loaded day
        medium_region_min_places: Regions at or above this size (and below large) also
            go to the least-loaded day; smaller regions try to join a nearby region first
        merge_distance_km: Centroid distance under which a small region joins a neighbour's day
        distance_cap_km: Distance beyond which the proximity score no longer decreases
        diversity_bonus: Score added when a candidate's category differs from the previous place
        trendy_bonus: Score added for trendy candidates
    """

    large_region_min_places: int = 20
    medium_region_min_places: int = 10
    merge_distance_km: float = 5.0

    distance_cap_km: float = 10.0
    diversity_bonus: float = 3.0
    trendy_bonus: float = 2.0


# Default configuration instance
DEFAULT_CONFIG = DistributionConfig()
