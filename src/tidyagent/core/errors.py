"""Exceptions raised by the agent.

Expected filesystem conditions (missing source, existing folder, ...) are *not* errors: the tools
report them as text so the model can adapt.  Everything here aborts the run.
"""


class AgentError(RuntimeError):
    """Base class for failures that abort an organizing run."""


class ConfigurationError(AgentError):
    """Raised when the agent cannot be configured (missing credential, unknown backend)."""


class UnknownToolError(AgentError):
    """Raised when the model requests a tool outside the registered set."""


class ToolCallParseError(AgentError):
    """Raised when a tool argument payload cannot be decoded into keyword arguments."""


class ToolExecutionError(AgentError):
    """Raised when a requested tool cannot run or fails."""


class IterationLimitError(AgentError):
    """Raised when the model keeps requesting tools past ``MAX_ITERATIONS``."""
