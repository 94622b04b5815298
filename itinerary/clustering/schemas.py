"""
Working and result structures for region clustering.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from itinerary.shared.geo import mean_point
from itinerary.shared.schemas.places import Place


@dataclass
class Cluster:
    """Mutable K-means cluster: a centroid and the places currently assigned to it."""

    latitude: float
    longitude: float
    places: List[Place] = field(default_factory=list)

    def clear(self) -> None:
        self.places = []

    def add(self, place: Place) -> None:
        self.places.append(place)

    def recalculate_center(self) -> None:
        """Move the centroid to the members' mean; an empty cluster keeps its centroid."""
        center = mean_point((p.latitude, p.longitude) for p in self.places)
        if center is not None:
            self.latitude, self.longitude = center


class RegionCluster(BaseModel):
    """Named, non-empty geographic grouping of candidate places."""

    model_config = ConfigDict(frozen=True)

    name: str
    latitude: float
    longitude: float
    average_rating: float = Field(ge=0)
    places: Tuple[Place, ...]

    @property
    def place_count(self) -> int:
        return len(self.places)
