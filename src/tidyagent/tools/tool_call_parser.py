"""
Decoder for the argument payload of a tool call.

Chat APIs deliver tool arguments as a JSON-encoded string, e.g.
    {"source": "/tmp/x/a.png", "destination": "/tmp/x/Images/a.png"}
A payload that does not decode to a JSON object is a fatal error for that invocation.
"""

import json
import re
from typing import (
    Any,
    Dict,
)

from tidyagent.core.errors import ToolCallParseError

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def _strip_fences(text: str) -> str:
    """Some models wrap the payload in a markdown code block."""
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def parse_arguments(text: str | None) -> Dict[str, Any]:
    """
    Decode a tool argument payload into keyword arguments.

    An empty payload means "no arguments".

    Raises
    ------
    ToolCallParseError
        If the payload is not valid JSON or does not decode to an object.
    """
    if text is None or not text.strip():
        return {}

    payload = _strip_fences(text.strip())
    try:
        args = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ToolCallParseError(f"Invalid tool arguments {text!r}: {exc}") from exc

    if not isinstance(args, dict):
        raise ToolCallParseError(
            f"Tool arguments must be a JSON object, got {type(args).__name__}: {text!r}"
        )
    return args
