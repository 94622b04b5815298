"""Logging configuration and utilities."""

from itinerary.shared.logging.config import setup_logging, log_stage_transition, StructuredFormatter
from itinerary.shared.logging.debug_logger import (
    DebugLogger,
    get_or_create_logger,
    remove_logger,
    calculate_cost,
)

__all__ = [
    "setup_logging",
    "log_stage_transition",
    "StructuredFormatter",
    "DebugLogger",
    "get_or_create_logger",
    "remove_logger",
    "calculate_cost",
]
