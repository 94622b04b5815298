"""
Itinerary pipeline graph.

Sequences clustering -> assignment -> building -> merging -> gate
(-> review) -> finalize as a LangGraph workflow.
"""

from itinerary.graph.build import create_itinerary_graph, run_itinerary_pipeline
from itinerary.graph.config import PipelineConfig, DEFAULT_CONFIG, get_config
from itinerary.graph.state import ItineraryState

__all__ = [
    "create_itinerary_graph",
    "run_itinerary_pipeline",
    "PipelineConfig",
    "DEFAULT_CONFIG",
    "get_config",
    "ItineraryState",
]
