"""
Graph configuration for the itinerary pipeline.

Bundles the per-stage configurations used when the graph is built.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from itinerary.clustering.config import ClusteringConfig
from itinerary.distribution.config import DistributionConfig
from itinerary.review.config import ReviewConfig


@dataclass
class PipelineConfig:
    """
    Configuration for the itinerary graph.

    Attributes:
        clustering: Region clustering settings
        distribution: Day assignment and scoring settings
        review: Quality gate and LLM review settings
        seed: RNG seed for K-means++ seeding (None for fresh entropy)
        recursion_limit: Maximum number of graph steps
    """

    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    seed: Optional[int] = None
    recursion_limit: int = 20


# Default configuration instance
DEFAULT_CONFIG = PipelineConfig()


def get_config(**overrides) -> PipelineConfig:
    """Default configuration with the given fields replaced."""
    return replace(DEFAULT_CONFIG, **overrides)
