"""Recover JSON values from free-text LLM completions.

Completions may be pure JSON, JSON wrapped in prose, or JSON inside a fenced
block. The search is greedy: it runs from the first opener to the *last*
matching closer so nested structure is never truncated. If the matched span
does not parse, the whole completion is tried as JSON before giving up.

This module is pure. It performs no schema validation and no retries.
"""

import json
import logging
import re
from typing import Any, Literal

from backend.app.errors import EmptyCompletionError, UnparsableCompletionError

logger = logging.getLogger(__name__)

Expect = Literal["object", "array", "any"]

_PATTERNS: dict[str, re.Pattern[str]] = {
    "object": re.compile(r"\{[\s\S]*\}"),
    "array": re.compile(r"\[[\s\S]*\]"),
    "any": re.compile(r"\{[\s\S]*\}|\[[\s\S]*\]"),
}


def find_json_span(content: str, expect: Expect = "any") -> str | None:
    """Return the greedy JSON-looking span of ``content``, or None."""
    match = _PATTERNS[expect].search(content)
    return match.group(0) if match else None


def extract_json(content: str | None, expect: Expect = "any") -> Any:
    """Parse the JSON payload embedded in a completion.

    Args:
        content: Raw completion text
        expect: Which opener to search for ("object", "array" or "any")

    Returns:
        The parsed JSON object or array, unchanged

    Raises:
        EmptyCompletionError: If content is None or blank
        UnparsableCompletionError: If neither the span nor the whole string parses
            to an object or array
    """
    if content is None or not content.strip():
        raise EmptyCompletionError("No content received from the model", raw=content)

    span = find_json_span(content, expect)
    if span is not None:
        try:
            return json.loads(span)
        except json.JSONDecodeError:
            pass

    try:
        value = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse completion as JSON (%s): %s", e.msg, content)
        raise UnparsableCompletionError("Completion did not contain valid JSON", raw=content) from e

    # Bare scalars ("0", "true", "null") are not structured responses
    if not isinstance(value, (dict, list)):
        logger.error("Completion is JSON but not an object or array: %s", content)
        raise UnparsableCompletionError("Completion did not contain valid JSON", raw=content)
    return value
