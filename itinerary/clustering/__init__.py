"""
Region clustering.

Groups candidate places into geographic regions with K-means (elbow-chosen k,
K-means++ seeding).
"""

from itinerary.clustering.config import ClusteringConfig
from itinerary.clustering.kmeans import RegionClusterer, within_cluster_sum_of_squares
from itinerary.clustering.schemas import Cluster, RegionCluster

__all__ = [
    "ClusteringConfig",
    "RegionClusterer",
    "within_cluster_sum_of_squares",
    "Cluster",
    "RegionCluster",
]
