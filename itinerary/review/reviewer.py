"""
Itinerary reviewers.

A reviewer is anything with ``review(request) -> ReviewVerdict``. Failures are
raised as exceptions; the review service decides what to do with them.
"""

import logging
import time
from typing import Optional, Protocol, runtime_checkable

from openai import OpenAI

from itinerary.review.config import ReviewConfig, DEFAULT_CONFIG
from itinerary.review.prompts.builders import render_review_prompt
from itinerary.review.prompts.templates import REVIEW_SYSTEM_PROMPT
from itinerary.review.response_parser import parse_review_response
from itinerary.shared.contracts.review_contract import ReviewRequest, ReviewVerdict
from itinerary.shared.llm.client import call_llm_with_usage
from itinerary.shared.logging.debug_logger import DebugLogger


logger = logging.getLogger(__name__)


class ReviewError(Exception):
    """Raised when the reviewer cannot produce a verdict."""

    pass


@runtime_checkable
class ItineraryReviewer(Protocol):
    """Capability that judges a rendered itinerary."""

    def review(self, request: ReviewRequest) -> ReviewVerdict:
        ...


class LLMItineraryReviewer:
    """
    Reviewer backed by an OpenAI chat model.

    Args:
        config: Model and timeout settings. Uses DEFAULT_CONFIG if not provided.
        client: Optional OpenAI client. If not provided, the cached client is used.
        debug_logger: Optional per-session debug logger for call records.
    """

    def __init__(
        self,
        config: Optional[ReviewConfig] = None,
        client: Optional[OpenAI] = None,
        debug_logger: Optional[DebugLogger] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.client = client
        self.debug_logger = debug_logger

    def review(self, request: ReviewRequest) -> ReviewVerdict:
        """
        Ask the model to review the itinerary.

        Raises:
            ReviewError: If the call fails or times out
            ParseError: If the response cannot be parsed
        """
        prompt = render_review_prompt(request)
        messages = [
            {"role": "system", "content": REVIEW_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

        logger.info(
            f"Calling reviewer | model={self.config.model}, days={request.day_count}, "
            f"timeout={self.config.timeout_seconds}s"
        )

        start_time = time.perf_counter()
        try:
            content, usage = call_llm_with_usage(
                messages,
                model=self.config.model,
                timeout=self.config.timeout_seconds,
                client=self.client,
            )
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            if self.debug_logger:
                self.debug_logger.log_review_failure(str(e), duration_ms)
            raise ReviewError(f"Review call failed: {e}") from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Reviewer responded | duration={duration_ms:.0f}ms, "
            f"tokens_in={usage['input_tokens']}, tokens_out={usage['output_tokens']}"
        )

        if self.debug_logger:
            self.debug_logger.log_llm_call(
                prompt=prompt,
                response=content,
                duration_ms=duration_ms,
                input_tokens=usage["input_tokens"],
                output_tokens=usage["output_tokens"],
                model=self.config.model,
            )

        return parse_review_response(content)
