"""Closed tool set and the descriptors offered to the model."""

import pytest

from tidyagent.core.errors import UnknownToolError
from tidyagent.tools import (
    TOOL_REGISTRY,
    ToolName,
    get_tool,
    get_tool_descriptors,
    register_tool,
    verify_registry,
)


def test_every_tool_name_has_a_handler() -> None:
    verify_registry()
    assert set(TOOL_REGISTRY) == set(ToolName)


def test_get_tool_rejects_unknown_names() -> None:
    with pytest.raises(UnknownToolError):
        get_tool("rm_rf")


def test_duplicate_registration_fails() -> None:
    with pytest.raises(ValueError):
        register_tool(ToolName.LIST_FILES, "again")


def test_move_file_descriptor() -> None:
    descriptor = get_tool(ToolName.MOVE_FILE.value).descriptor
    assert descriptor.to_openai() == {
        "type": "function",
        "function": {
            "name": "move_file",
            "description": "Move a file from source to destination",
            "parameters": {
                "type": "object",
                "properties": {
                    "source": {"type": "string", "description": "Current full path of the file"},
                    "destination": {"type": "string", "description": "Destination full path"},
                },
                "required": ["source", "destination"],
            },
        },
    }


def test_descriptors_are_frozen() -> None:
    descriptor = get_tool_descriptors()[0]
    with pytest.raises(Exception):
        descriptor.name = "other"


def test_anthropic_rendering_uses_input_schema() -> None:
    rendered = [d.to_anthropic() for d in get_tool_descriptors()]
    assert [r["name"] for r in rendered] == [m.value for m in ToolName]
    assert rendered[3]["input_schema"]["required"] == ["report_path", "content"]
