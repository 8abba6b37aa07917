"""Decoding of tool argument payloads."""

import pytest

from tidyagent.core.errors import ToolCallParseError
from tidyagent.tools.tool_call_parser import parse_arguments


def test_parse_json_object() -> None:
    assert parse_arguments('{"source": "/x/a.png", "destination": "/x/Images/a.png"}') == {
        "source": "/x/a.png",
        "destination": "/x/Images/a.png",
    }


@pytest.mark.parametrize("payload", [None, "", "   "])
def test_empty_payload_means_no_arguments(payload) -> None:
    assert parse_arguments(payload) == {}


def test_code_fence_is_stripped() -> None:
    assert parse_arguments('```json\n{"directory": "/tmp"}\n```') == {"directory": "/tmp"}


def test_invalid_json() -> None:
    with pytest.raises(ToolCallParseError) as info:
        parse_arguments("{directory: /tmp")
    assert "Invalid tool arguments" in str(info.value)


def test_non_object_payload() -> None:
    with pytest.raises(ToolCallParseError) as info:
        parse_arguments('["/tmp"]')
    assert "JSON object" in str(info.value)
