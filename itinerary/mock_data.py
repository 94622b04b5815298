"""
Mock candidate generator.

Produces a plausible pool of candidate places around central Seoul for
demos and for exercising the pipeline without an upstream discovery stage.
"""

import random
from typing import Dict, List, Optional, Tuple

from itinerary.shared.schemas.places import SCHEDULE_TIME_BLOCKS, Place, TimeBlock


# District name -> (latitude, longitude)
SEOUL_DISTRICTS: Dict[str, Tuple[float, float]] = {
    "홍대": (37.5563, 126.9220),
    "강남": (37.4979, 127.0276),
    "명동": (37.5636, 126.9869),
    "성수": (37.5446, 127.0565),
    "종로": (37.5729, 126.9793),
    "이태원": (37.5346, 126.9945),
    "잠실": (37.5113, 127.0980),
    "신촌": (37.5585, 126.9390),
}

_NAME_TEMPLATES: Dict[str, List[str]] = {
    "맛집": ["맛집", "한식당", "레스토랑"],
    "카페": ["카페", "커피숍", "베이커리"],
    "관광지": ["명소", "거리", "타워"],
    "쇼핑": ["백화점", "몰", "시장"],
    "문화시설": ["박물관", "미술관", "극장"],
    "액티비티": ["체험관", "놀이공원", "스포츠센터"],
    "공원": ["공원", "산책로", "광장"],
}

CATEGORIES = list(_NAME_TEMPLATES)

_RECOMMEND_TIMES = {
    TimeBlock.BREAKFAST: "08:00-10:00",
    TimeBlock.MORNING_ACTIVITY: "10:00-12:00",
    TimeBlock.LUNCH: "12:00-14:00",
    TimeBlock.CAFE: "14:00-16:00",
    TimeBlock.AFTERNOON_ACTIVITY: "16:00-18:00",
    TimeBlock.DINNER: "18:00-20:00",
    TimeBlock.EVENING_ACTIVITY: "20:00-22:00",
}

_PRICE_LEVELS = ["$", "$$", "$$$", "$$$$"]

# Roughly 2km of jitter around a district centre
_JITTER_DEGREES = 0.02


def _operating_hours(block: TimeBlock) -> str:
    if block is TimeBlock.BREAKFAST:
        return "07:00-15:00"
    if block in (TimeBlock.DINNER, TimeBlock.EVENING_ACTIVITY):
        return "11:00-23:00"
    return "09:00-21:00"


def _mock_place(rng: random.Random, day: int, block: TimeBlock, index: int) -> Place:
    district = rng.choice(list(SEOUL_DISTRICTS))
    base_lat, base_lon = SEOUL_DISTRICTS[district]
    category = rng.choice(CATEGORIES)
    name = f"{district} {rng.choice(_NAME_TEMPLATES[category])} {index}"

    return Place(
        id=f"mock_{day}_{block.value}_{index}",
        name=name,
        category=category,
        latitude=base_lat + (rng.random() - 0.5) * _JITTER_DEGREES,
        longitude=base_lon + (rng.random() - 0.5) * _JITTER_DEGREES,
        time_block=block,
        rating=round(3.5 + rng.random() * 1.5, 2),
        is_trendy=rng.random() > 0.7,
        address=f"{district} {rng.randint(100, 999)}번지",
        recommend_time=_RECOMMEND_TIMES[block],
        operating_hours=_operating_hours(block),
        price_level=rng.choice(_PRICE_LEVELS),
    )


def generate_mock_places(trip_days: int, seed: Optional[int] = None) -> List[Place]:
    """
    Generate candidate places for a trip.

    For every day and every schedulable time block, 10-15 candidates are
    scattered around randomly chosen Seoul districts. Ratings fall in
    [3.5, 5.0] and about 30% of candidates are trendy.

    Args:
        trip_days: Number of trip days
        seed: Optional RNG seed for reproducible output

    Returns:
        Flat list of candidate places (empty when trip_days is not positive)
    """
    rng = random.Random(seed)
    places = []
    for day in range(1, trip_days + 1):
        for block in SCHEDULE_TIME_BLOCKS:
            for index in range(1, rng.randint(10, 15) + 1):
                places.append(_mock_place(rng, day, block, index))
    return places
