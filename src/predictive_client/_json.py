"""JSON object parsing capability used by classification."""

from __future__ import annotations

import json
from typing import Any

from predictive_client.result import Failure, Success

JSONObject = dict[str, Any]


class JSONParseError(ValueError):
    """The body is not a single well-formed JSON object."""


def parse_json_object(text: str) -> Success[JSONObject] | Failure[JSONParseError]:
    """Parse *text* as exactly one JSON object.

    Arrays, scalars and ``null`` are rejected even when they are valid JSON.
    """
    try:
        value = json.loads(text)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the interpreter stack allows.
        return Failure(JSONParseError(str(e) or type(e).__name__))
    if not isinstance(value, dict):
        return Failure(
            JSONParseError(f"expected a JSON object, got {type(value).__name__}")
        )
    return Success(value)
