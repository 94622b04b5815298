"""
Itinerary planning pipeline.

Packages:
- clustering: K-means region clustering
- distribution: Day assignment and daily schedule building
- confirmed: Merging of fixed appointments
- review: Quality gate, LLM review and adjustments
- graph: LangGraph pipeline and HTTP endpoints
- shared: Domain models, contracts, LLM client, logging
"""

from itinerary.graph.build import create_itinerary_graph, run_itinerary_pipeline

__all__ = ["create_itinerary_graph", "run_itinerary_pipeline"]
