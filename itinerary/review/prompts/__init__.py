"""Prompt templates and builders for the itinerary review call."""

from itinerary.review.prompts.templates import (
    REVIEW_PROMPT_TEMPLATE,
    REVIEW_SYSTEM_PROMPT,
)
from itinerary.review.prompts.builders import (
    build_review_request,
    render_day,
    render_itinerary,
    render_review_prompt,
)

__all__ = [
    "REVIEW_PROMPT_TEMPLATE",
    "REVIEW_SYSTEM_PROMPT",
    "build_review_request",
    "render_day",
    "render_itinerary",
    "render_review_prompt",
]
