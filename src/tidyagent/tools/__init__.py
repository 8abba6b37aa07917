"""
Tool registry for tidyagent.

The model may only request tools from a closed set of names (:class:`ToolName`).  Each member is
bound to exactly one handler through the :func:`register_tool` decorator, which also derives the
immutable :class:`~tidyagent.core.schema.ToolDescriptor` offered to the model.  Names outside the
closed set are rejected with :class:`~tidyagent.core.errors.UnknownToolError` rather than treated
as a lookup miss.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Callable,
    Dict,
    List,
    Mapping,
    get_type_hints,
)

from tidyagent.core.errors import UnknownToolError
from tidyagent.core.schema import (
    ParameterInfo,
    ToolDescriptor,
)

logger = logging.getLogger(__name__)

_JSON_TYPES = {str: "string", int: "integer", float: "number", bool: "boolean"}


class ToolName(str, Enum):
    """Closed set of operations the model can request."""

    LIST_FILES = "list_files"
    CREATE_FOLDER = "create_folder"
    MOVE_FILE = "move_file"
    WRITE_REPORT = "write_report"


@dataclass(frozen=True)
class RegisteredTool:
    """A handler bound to its descriptor."""

    name: ToolName
    fn: Callable[..., str]
    descriptor: ToolDescriptor


TOOL_REGISTRY: Dict[ToolName, RegisteredTool] = {}
"""Global registry of tool handlers."""


def _describe(
    name: ToolName, fn: Callable, description: str, params: Mapping[str, str]
) -> ToolDescriptor:
    sig = inspect.signature(fn)
    type_hints = get_type_hints(fn)
    parameters = {}
    for param_name, param in sig.parameters.items():
        param_type = type_hints.get(param_name, str)
        parameters[param_name] = ParameterInfo(
            type=_JSON_TYPES.get(param_type, "string"),
            description=params.get(param_name, ""),
            required=param.default == inspect.Parameter.empty,
        )
    return ToolDescriptor(name=name.value, description=description, parameters=parameters)


def register_tool(
    name: ToolName, description: str, params: Mapping[str, str] | None = None
) -> Callable:
    """
    Register a tool handler for a member of :class:`ToolName`.

    The function is registered as a decorator:
        @register_tool(ToolName.LIST_FILES, "List all files in a directory",
                       params={"directory": "Path to the directory"})
        def list_files(directory: str) -> str:
            ...

    Parameter names, types and required-ness come from the function signature; *params* supplies
    the human-readable description of each parameter.

    Parameters
    ----------
    name: ToolName
        The closed-set member this handler implements.
    description: str
        Human-readable description offered to the model.
    params: Mapping[str, str] | None
        Description of each parameter, keyed by parameter name.
    Returns
    -------
    Callable
        A decorator that registers the function and returns it unchanged.
    Raises
    ------
    ValueError
        If a handler for *name* is already registered.
    """
    if name in TOOL_REGISTRY:
        raise ValueError(f"Tool '{name.value}' is already registered.")
    logger.debug("Registering tool '%s'", name.value)

    def wrapper(fn: Callable[..., str]) -> Callable[..., str]:
        descriptor = _describe(name, fn, description, params or {})
        TOOL_REGISTRY[name] = RegisteredTool(name=name, fn=fn, descriptor=descriptor)
        return fn

    return wrapper


def get_tool(name: str) -> RegisteredTool:
    """
    Resolve a tool name requested by the model.

    Raises
    ------
    UnknownToolError
        If *name* is not a member of :class:`ToolName` or has no registered handler.
    """
    try:
        member = ToolName(name)
    except ValueError as exc:
        raise UnknownToolError(f"Tool '{name}' is not registered.") from exc
    tool = TOOL_REGISTRY.get(member)
    if tool is None:
        raise UnknownToolError(f"Tool '{name}' has no registered handler.")
    return tool


def verify_registry() -> None:
    """Fail fast if any member of the closed tool set lacks a handler."""
    missing = [member.value for member in ToolName if member not in TOOL_REGISTRY]
    if missing:
        raise RuntimeError(f"Tools without a registered handler: {', '.join(missing)}")


def get_tool_descriptors() -> List[ToolDescriptor]:
    """Return the descriptors of every registered tool, in :class:`ToolName` order."""
    return [TOOL_REGISTRY[member].descriptor for member in ToolName if member in TOOL_REGISTRY]


# Handlers register themselves on import.
from tidyagent.tools import filesystem  # noqa: E402,F401  pylint: disable=wrong-import-position
