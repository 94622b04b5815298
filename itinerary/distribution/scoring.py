"""
Candidate scoring for daily schedule selection.

A single linear score keeps selection explainable:

    first place of the day:  rating
    later places:            (cap - min(distance_km, cap))
                             + diversity bonus if the category changes
                             + rating
                             + trendy bonus

Missing ratings count as 0. A candidate whose distance cannot be computed
(no coordinates) gets no proximity reward.
"""

from typing import Callable, Optional

from itinerary.distribution.config import DistributionConfig, DEFAULT_CONFIG
from itinerary.shared.geo import place_distance_km
from itinerary.shared.schemas.places import Place


ScoreFn = Callable[[Place, Optional[Place]], float]


def score_candidate(
    candidate: Place,
    previous: Optional[Place],
    config: DistributionConfig = DEFAULT_CONFIG,
) -> float:
    """
    Score a candidate against the place scheduled right before it.

    Args:
        candidate: Place being considered
        previous: Last place already scheduled that day, or None for the first slot
        config: Bonus and distance-cap settings

    Returns:
        Composite score (higher is better)
    """
    rating = candidate.rating or 0.0

    if previous is None:
        return rating

    score = 0.0

    distance = place_distance_km(previous, candidate)
    if distance is not None:
        score += config.distance_cap_km - min(distance, config.distance_cap_km)

    if candidate.category != previous.category:
        score += config.diversity_bonus

    score += rating

    if candidate.is_trendy:
        score += config.trendy_bonus

    return score
