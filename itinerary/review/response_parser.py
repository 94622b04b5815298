"""
Response parser for the itinerary review call.

The reviewer is asked for a JSON object; whatever surrounds it (prose,
markdown fences) is ignored by taking the text between the first ``{`` and
the last ``}``.
"""

import json
import logging
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError

from itinerary.shared.contracts.review_contract import ReviewVerdict, Suggestion


logger = logging.getLogger(__name__)

_BOOL = TypeAdapter(bool)


class ParseError(Exception):
    """Raised when a review response cannot be parsed."""

    pass


def extract_json_object(raw_response: str) -> str:
    """
    Cut out the JSON object delimited by the first '{' and the last '}'.

    Raises:
        ParseError: If the response has no such delimiters
    """
    start = raw_response.find("{")
    end = raw_response.rfind("}")
    if start < 0 or end <= start:
        raise ParseError("No JSON object found in review response")
    return raw_response[start:end + 1]


def _parse_needs_adjustment(raw_value: Any) -> bool:
    """Lax boolean ("false", "0", "no" are False); anything unreadable is False."""
    try:
        return _BOOL.validate_python(raw_value)
    except ValidationError:
        logger.warning(f"Unreadable needsAdjustment {raw_value!r}, treating as false")
        return False


def _parse_suggestions(raw_suggestions: Any) -> List[Suggestion]:
    """Validate suggestions one by one, dropping (and logging) invalid ones."""
    if not isinstance(raw_suggestions, list):
        if raw_suggestions is not None:
            logger.warning(f"Ignoring non-list suggestions: {raw_suggestions!r}")
        return []

    suggestions = []
    for index, item in enumerate(raw_suggestions):
        try:
            suggestions.append(Suggestion.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping invalid suggestion #{index}: {e.errors()}")
    return suggestions


def parse_review_response(raw_response: str) -> ReviewVerdict:
    """
    Parse the reviewer's raw text into a ReviewVerdict.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Parsed ReviewVerdict

    Raises:
        ParseError: If no JSON object is present or it does not decode
    """
    json_str = extract_json_object(raw_response)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse review response JSON: {e}")

    payload: Dict[str, Any] = {
        "needsAdjustment": _parse_needs_adjustment(data.get("needsAdjustment", False)),
        "reason": str(data.get("reason") or ""),
        "suggestions": _parse_suggestions(data.get("suggestions")),
    }
    return ReviewVerdict.model_validate(payload)
