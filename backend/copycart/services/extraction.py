"""
CopyCart Backend — Model Output Extraction
============================================

What:  Recovers structured values from free-form text-generation output.
How:   Pure functions, no I/O:
       - first_generated_text(): pulls `generated_text` out of the API payload
       - upstream_error_message(): reads the payload's `error` field
       - extract_json_object(): first non-greedy `{...}` group, parsed as JSON
       - extract_chat_reply(): text after the last marker phrase

Known limitation:
    extract_json_object() takes the FIRST brace group with a non-greedy
    match. Nested objects are cut at the first closing brace, and when the
    model emits two objects the first one wins even if it has the wrong keys.
"""

import json
import re
from typing import Any, Optional

from copycart.exceptions import EmptyReplyError, ExtractionError

JSON_OBJECT_PATTERN = re.compile(r"\{.*?\}", re.DOTALL)


def first_generated_text(payload: Any) -> str:
    """
    Returns `payload[0]["generated_text"]`, or "" when the payload has
    another shape.
    """
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        text = payload[0].get("generated_text") or ""
        return text if isinstance(text, str) else str(text)
    return ""


def upstream_error_message(payload: Any) -> Optional[str]:
    """Returns the `error` field of an error payload, or None."""
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return None


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are Python extensions, not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def extract_json_object(text: str) -> Any:
    """
    Parse the first brace-delimited group found in `text`.

    >>> extract_json_object('Sure! {"title": "A", "description": "B"}')
    {'title': 'A', 'description': 'B'}

    Raises:
        ExtractionError: no `{...}` group, or the group is not valid JSON
    """
    match = JSON_OBJECT_PATTERN.search(text)
    if match is None:
        raise ExtractionError(details="No JSON object found in the generated text.")

    try:
        return json.loads(match.group(0), parse_constant=_reject_constant)
    except ValueError as e:
        reason = e.msg if isinstance(e, json.JSONDecodeError) else str(e)
        raise ExtractionError(
            details=f"Failed to parse extracted JSON: {reason}",
            context={"candidate": match.group(0)},
        )


def extract_chat_reply(text: str, marker: str) -> str:
    """
    Strip the echoed prompt from a chat completion.

    Everything after the LAST occurrence of `marker` is returned, stripped.
    Without any occurrence the whole text is kept.

    Raises:
        EmptyReplyError: nothing remains
    """
    reply = text.rpartition(marker)[2].strip()
    if not reply:
        raise EmptyReplyError(context={"generated_chars": len(text)})
    return reply
