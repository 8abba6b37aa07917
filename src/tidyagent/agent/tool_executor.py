"""Dispatches tool calls registered in ``tidyagent.tools`` and wraps errors."""

import logging
from typing import (
    Any,
    Dict,
)

from tidyagent.core.errors import ToolExecutionError
from tidyagent.tools import get_tool

logger = logging.getLogger(__name__)


def execute_tool(name: str, args: Dict[str, Any] | None = None) -> str:
    """
    Look up *name* in the registry and invoke it with *args*.

    Parameters
    ----------
    name:
        The requested tool name.
    args:
        Keyword arguments for the tool function.  Keys the tool does not declare are
        dropped; if *None*, an empty dict is assumed.

    Returns
    -------
    str
        The tool's status text, or a note naming missing required arguments.

    Raises
    ------
    UnknownToolError
        If *name* is outside the registered tool set.
    ToolExecutionError
        If the tool invocation raises an exception.
    """

    if args is None:
        args = {}

    tool = get_tool(name)
    parameters = tool.descriptor.parameters

    ignored = sorted(set(args) - set(parameters))
    if ignored:
        logger.warning("Ignoring unknown arguments for tool '%s': %s", name, ignored)
    kwargs = {key: value for key, value in args.items() if key in parameters}

    missing = [param for param in tool.descriptor.required if param not in kwargs]
    if missing:
        # Reported to the model as text so it can retry with complete arguments.
        return f"Missing required argument(s) for {name}: {', '.join(missing)}"

    try:
        logger.debug("Executing tool '%s' with args=%s", name, kwargs)
        return str(tool.fn(**kwargs))
    except TypeError as exc:
        # Argument mismatch — give the caller a clean exception.
        logger.exception("Argument error while executing tool '%s'", name)
        raise ToolExecutionError(f"Invalid arguments for tool '{name}': {exc}") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error in tool '%s'", name)
        raise ToolExecutionError(f"Tool '{name}' raised an error: {exc}") from exc
