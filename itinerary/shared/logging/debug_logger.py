"""
Debug logger for tracking review LLM calls, timing, and costs.

Writes per-session JSON Lines log files to the logs/ directory.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


# Token pricing per 1M tokens
MODEL_COSTS = {
    "gpt-4.1-mini": {"input": 0.40, "output": 1.60},
    "gpt-5-mini": {"input": 0.25, "output": 2.00},
}

# Session-based logger registry to ensure same instance is reused
_logger_registry: Dict[str, "DebugLogger"] = {}


def get_or_create_logger(session_id: str, logs_dir: str = "logs") -> "DebugLogger":
    """
    Get an existing logger for the session or create a new one.

    Args:
        session_id: Unique session identifier
        logs_dir: Directory to store log files (default: "logs")

    Returns:
        DebugLogger instance for this session
    """
    if session_id not in _logger_registry:
        _logger_registry[session_id] = DebugLogger(session_id, logs_dir)
    return _logger_registry[session_id]


def remove_logger(session_id: str) -> None:
    """Remove a logger from the registry (e.g., after the run ends)."""
    _logger_registry.pop(session_id, None)


def calculate_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    """
    Calculate the cost of an LLM call based on token usage.

    Unknown models are priced at zero.
    """
    costs = MODEL_COSTS.get(model, {"input": 0.0, "output": 0.0})
    input_cost = (input_tokens / 1_000_000) * costs["input"]
    output_cost = (output_tokens / 1_000_000) * costs["output"]
    return input_cost + output_cost


class DebugLogger:
    """
    Debug logger that writes per-session JSON log files.

    Each session gets its own folder containing ``session_logs.json``
    (one JSON object per line).
    """

    def __init__(self, session_id: str, logs_dir: str = "logs"):
        self.session_id = session_id
        self.base_logs_dir = Path(logs_dir)
        self.session_dir = self.base_logs_dir / session_id
        self.log_file = self.session_dir / "session_logs.json"

        self.session_dir.mkdir(parents=True, exist_ok=True)

        self._total_input_tokens = 0
        self._total_output_tokens = 0
        self._total_cost = 0.0
        self._total_llm_duration_ms = 0.0
        self._llm_call_count = 0

    def _get_timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _append_to_log(self, entry: Dict[str, Any]) -> None:
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def log_llm_call(
        self,
        prompt: str,
        response: str,
        duration_ms: float,
        input_tokens: int,
        output_tokens: int,
        model: str,
    ) -> None:
        """
        Log a review LLM call with prompt, response, timing, and token usage.

        Args:
            prompt: Prompt sent to the model
            response: Model's raw response
            duration_ms: Time taken for the call in milliseconds
            input_tokens: Number of input tokens
            output_tokens: Number of output tokens
            model: Model identifier
        """
        cost = calculate_cost(model, input_tokens, output_tokens)

        self._total_input_tokens += input_tokens
        self._total_output_tokens += output_tokens
        self._total_cost += cost
        self._total_llm_duration_ms += duration_ms
        self._llm_call_count += 1

        self._append_to_log({
            "type": "llm_call",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            "model": model,
            "prompt": prompt,
            "response": response,
            "duration_ms": round(duration_ms, 2),
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
            "cost_usd": round(cost, 6),
        })

    def log_review_failure(self, error: str, duration_ms: Optional[float] = None) -> None:
        """Record a review call that was abandoned (timeout, network, parse)."""
        entry = {
            "type": "review_failure",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            "error": error,
        }
        if duration_ms is not None:
            entry["duration_ms"] = round(duration_ms, 2)
        self._append_to_log(entry)

    def log_session_summary(self, total_days: int, review_applied: bool) -> Dict[str, Any]:
        """
        Log and return a session summary with totals.

        Args:
            total_days: Number of itinerary days produced
            review_applied: Whether an LLM review verdict was obtained

        Returns:
            Summary dictionary with all totals
        """
        summary = {
            "type": "session_summary",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            "total_days": total_days,
            "review_applied": review_applied,
            **self.get_accumulated_stats(),
        }
        self._append_to_log(summary)
        return summary

    def get_accumulated_stats(self) -> Dict[str, Any]:
        """Current accumulated statistics without logging."""
        return {
            "total_input_tokens": self._total_input_tokens,
            "total_output_tokens": self._total_output_tokens,
            "total_tokens": self._total_input_tokens + self._total_output_tokens,
            "total_cost_usd": round(self._total_cost, 6),
            "total_llm_duration_ms": round(self._total_llm_duration_ms, 2),
            "llm_call_count": self._llm_call_count,
        }
