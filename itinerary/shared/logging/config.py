"""
Structured logging configuration.

JSON-lines output for pipeline stage transitions. Stage records carry a
compact summary of the itinerary state under ``extra``.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


PACKAGE_LOGGER = "itinerary"


class StructuredFormatter(logging.Formatter):
    """Formats each record as one JSON object (timestamp, level, logger, message, extra)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = getattr(record, "extra", None)
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Route a logger's output through StructuredFormatter.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file to write to in addition to stderr
        logger_name: Logger to configure (default: the package logger)

    Returns:
        The configured logger. Existing handlers are replaced.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = StructuredFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
    logger.handlers = handlers

    return logger


def stage_summary(state: Dict[str, Any]) -> Dict[str, Any]:
    """Key counters of an itinerary state, for stage logs."""
    itineraries = state.get("itineraries") or {}
    return {
        "session_id": state.get("session_id"),
        "trip_days": state.get("trip_days"),
        "optimal_k": state.get("optimal_k"),
        "regions": len(state.get("regions") or []),
        "days_built": len(itineraries),
        "places_scheduled": sum(len(d.places) for d in itineraries.values()),
    }


def log_stage_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a pipeline stage transition.

    Args:
        event: Stage reached (e.g., "Clustered", "Gated-Reviewed")
        state: Pipeline state after the stage's update
        extra: Additional context to include in the log
        logger: Logger instance to use (default: the package logger)
    """
    logger = logger or logging.getLogger(PACKAGE_LOGGER)

    payload: Dict[str, Any] = {"event": event, "state_summary": stage_summary(state)}
    if extra:
        payload["extra"] = extra

    logger.info(f"Stage transition: {event}", extra={"extra": payload})
