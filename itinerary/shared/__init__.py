"""
Shared infrastructure for all pipeline stages.

Modules:
- geo: Great-circle distance helpers
- schemas: Place / itinerary domain models
- contracts: Output and review contracts
- llm: OpenAI client with retry logic
- logging: Structured JSON logging
"""

from itinerary.shared.llm.client import get_cached_client, call_llm_with_usage
from itinerary.shared.logging.config import setup_logging, log_stage_transition

__all__ = [
    "get_cached_client",
    "call_llm_with_usage",
    "setup_logging",
    "log_stage_transition",
]
