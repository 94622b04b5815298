"""
Configuration for region clustering.
"""

from dataclasses import dataclass


@dataclass
class ClusteringConfig:
    """
    Configuration for the region clusterer.

    Attributes:
        max_iterations: Upper bound on Lloyd iterations per clustering run
        elbow_threshold: WCSS improvement ratio below which k stops growing
        max_k_factor: Multiplier of trip days that caps the chosen k
        search_k_factor: Multiplier of trip days giving the largest k tried
    """

    max_iterations: int = 100
    elbow_threshold: float = 0.2
    max_k_factor: float = 1.5
    search_k_factor: int = 2


# Default configuration instance
DEFAULT_CONFIG = ClusteringConfig()
