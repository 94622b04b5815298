"""LLM client utilities."""

from itinerary.shared.llm.client import get_cached_client, call_llm_with_usage

__all__ = ["get_cached_client", "call_llm_with_usage"]
