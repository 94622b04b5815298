"""
OpenAI client with retry logic.

Provides a cached client instance and a wrapper for LLM calls with
automatic retries using tenacity. Every call carries a bounded timeout.
"""

import os
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

load_dotenv()

DEFAULT_MODEL = os.environ.get("ITINERARY_REVIEW_MODEL", "gpt-4.1-mini")
DEFAULT_TIMEOUT = float(os.environ.get("ITINERARY_REVIEW_TIMEOUT", "30"))

# Module-level cache for OpenAI client
_client: Optional[OpenAI] = None


def get_cached_client() -> OpenAI:
    """
    Returns a cached instance of the OpenAI client.

    Uses the OPENAI_API_KEY environment variable for authentication.
    The client is created once and reused for all subsequent calls.
    """
    global _client
    if _client is None:
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it to your OpenAI API key."
            )
        _client = OpenAI(api_key=api_key)
    return _client


@retry(
    stop=stop_after_attempt(2),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    retry=retry_if_exception_type((Exception,)),
    reraise=True,
)
def call_llm_with_usage(
    messages: List[Dict[str, str]],
    model: str = DEFAULT_MODEL,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[OpenAI] = None,
) -> Tuple[str, Dict[str, int]]:
    """
    Call the OpenAI Chat Completion API and return content with token usage.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        timeout: Per-request timeout in seconds
        client: Optional OpenAI client instance. If not provided, uses cached client.

    Returns:
        Tuple of (response content, usage dict with input/output/total tokens)

    Raises:
        Exception: If all retry attempts fail.
    """
    if client is None:
        client = get_cached_client()

    response = client.chat.completions.create(
        model=model,
        messages=messages,
        timeout=timeout,
    )

    content = (response.choices[0].message.content or "").strip()
    usage = {"input_tokens": 0, "output_tokens": 0, "total_tokens": 0}
    if response.usage is not None:
        usage = {
            "input_tokens": response.usage.prompt_tokens,
            "output_tokens": response.usage.completion_tokens,
            "total_tokens": response.usage.total_tokens,
        }

    return content, usage
