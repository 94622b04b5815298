"""
Review collaborator contract.

Shapes exchanged with the external reviewer: the request describing the
generated days, and the verdict it answers with. Verdicts are consumed once
by the adjustment step and never persisted.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


REVIEW_CRITERIA = (
    "하루 이동거리가 20km를 넘지 않는가?",
    "점심(12-14시)/저녁(18-20시) 시간에 식당이 있는가?",
    "같은 카테고리가 연속으로 나오지 않는가?",
    "실제 동선이 자연스러운가?",
    "지역 간 이동이 효율적인가?",
)

SUGGESTION_TYPES = ("MOVE", "REMOVE", "SWAP")


class RenderedPlace(BaseModel):
    """One time-block/place/category line of a rendered day."""

    time_block: str
    place: str
    category: str
    recommend_time: Optional[str] = None


class RenderedDay(BaseModel):
    """A day as the reviewer sees it."""

    day: int
    total_distance_km: float
    places: List[RenderedPlace] = Field(default_factory=list)


class ReviewRequest(BaseModel):
    """Everything the reviewer is told about the trip."""

    destinations: List[str] = Field(default_factory=list)
    day_count: int = Field(ge=0)
    travel_styles: List[str] = Field(default_factory=list)
    days: List[RenderedDay] = Field(default_factory=list)
    criteria: List[str] = Field(default_factory=lambda: list(REVIEW_CRITERIA))


class Suggestion(BaseModel):
    """A single adjustment proposed by the reviewer."""

    model_config = ConfigDict(populate_by_name=True)

    day: int
    type: str
    place: str
    target_day: Optional[int] = Field(default=None, alias="targetDay")
    swap_with: Optional[str] = Field(default=None, alias="swapWith")
    action: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _normalise_type(cls, value: str) -> str:
        return value.strip().upper()


class ReviewVerdict(BaseModel):
    """The reviewer's answer."""

    model_config = ConfigDict(populate_by_name=True)

    needs_adjustment: bool = Field(default=False, alias="needsAdjustment")
    reason: str = ""
    suggestions: List[Suggestion] = Field(default_factory=list)

    @classmethod
    def no_adjustment(cls, reason: str = "") -> "ReviewVerdict":
        return cls(needs_adjustment=False, reason=reason, suggestions=[])
