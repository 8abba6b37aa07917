"""Main orchestration loop for tidyagent."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path

from tidyagent.agent.backends import (
    BaseBackend,
    load_backend,
)
from tidyagent.agent.tool_executor import execute_tool
from tidyagent.common import (
    AnsiColors,
    colored_print,
)
from tidyagent.config import settings
from tidyagent.core.errors import (
    AgentError,
    IterationLimitError,
)
from tidyagent.core.schema import (
    AgentRun,
    Conversation,
    Message,
    ToolInvocation,
)
from tidyagent.tools import (
    get_tool,
    get_tool_descriptors,
    verify_registry,
)
from tidyagent.tools.tool_call_parser import parse_arguments

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a file organization agent. When given a folder to organize:
1. First list the files to see what's there
2. Group similar file types and create appropriate subfolders (e.g. Images, Documents, Videos, \
Audio, Code, Archives, Spreadsheets, Other)
3. Move each file into the right subfolder
4. Only create folders that are actually needed based on what files exist
5. Never move or delete folders, only files
6. Finally write a report called {report_name} in the target folder summarizing what you did
Be systematic. Think before acting."""


class AgentState(Enum):
    """States of the orchestration loop."""

    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"


def build_conversation(target_directory: Path, report_name: str | None = None) -> Conversation:
    """Seed the transcript with the system instructions and the user request."""
    conversation = Conversation()
    conversation.append(
        Message.system(SYSTEM_PROMPT.format(report_name=report_name or settings.REPORT_NAME))
    )
    conversation.append(
        Message.user(f"Please organize the files in this folder: {target_directory}")
    )
    return conversation


def _run_invocation(call: ToolInvocation) -> Message:
    """Execute one requested tool and return the tool-result message for it."""
    # Resolve before parsing so an unknown name is reported as such.
    get_tool(call.name)
    args = parse_arguments(call.arguments)

    colored_print(f"\n🔧 {call.name}", AnsiColors.CYAN)
    colored_print(f"   → {json.dumps(args, ensure_ascii=False)}", AnsiColors.BLUE)

    result = execute_tool(call.name, args)
    logger.info("Tool '%s' returned: %s", call.name, result)
    colored_print(f"   ✓ {result}", AnsiColors.GREEN)

    return Message.tool_result(call.id, result)


class OrganizerAgent:
    """
    Two-state machine driving the conversation with the model.

    ``AWAITING_MODEL`` sends the whole transcript and appends the assistant reply.  A reply without
    tool calls ends the run (``DONE``); otherwise ``EXECUTING_TOOLS`` runs every requested tool in
    the order given and appends one result per invocation before the next model request.

    The loop ends only when the model stops requesting tools.  ``max_iterations`` caps the number
    of model requests; ``0`` leaves it unbounded.
    """

    def __init__(
        self,
        backend: BaseBackend | None = None,
        max_iterations: int | None = None,
    ) -> None:
        verify_registry()
        self.backend = backend or load_backend()
        self.max_iterations = settings.MAX_ITERATIONS if max_iterations is None else max_iterations
        self.tools = get_tool_descriptors()

    def run(self, target_directory: Path) -> AgentRun:
        """Organize *target_directory* and return the model's closing summary."""
        colored_print(f"\n🤖 Starting agent on: {target_directory}\n", AnsiColors.YELLOW)
        logger.info("Starting run on %s with backend '%s'", target_directory, self.backend.name)

        conversation = build_conversation(target_directory)
        state = AgentState.AWAITING_MODEL
        requests = 0

        while state is not AgentState.DONE:
            if state is AgentState.AWAITING_MODEL:
                pending = conversation.pending_tool_calls()
                if pending:
                    raise AgentError(
                        f"Unanswered tool calls before next request: {[c.id for c in pending]}"
                    )
                if self.max_iterations and requests >= self.max_iterations:
                    raise IterationLimitError(
                        f"Model still requesting tools after {requests} requests."
                    )
                reply = self.backend.complete(conversation.messages, self.tools)
                requests += 1
                conversation.append(reply)
                logger.debug(
                    "Request %d returned %d tool call(s)", requests, len(reply.tool_calls)
                )
                state = AgentState.EXECUTING_TOOLS if reply.tool_calls else AgentState.DONE

            elif state is AgentState.EXECUTING_TOOLS:
                for call in reply.tool_calls:
                    conversation.append(_run_invocation(call))
                state = AgentState.AWAITING_MODEL

        summary = reply.content or ""

        colored_print("\n✅ Done!\n", AnsiColors.GREEN)
        colored_print(summary, AnsiColors.YELLOW)
        logger.info("Run finished after %d model request(s)", requests)

        return AgentRun(summary=summary, conversation=conversation, model_requests=requests)


def run_agent(target_directory: Path, backend: BaseBackend | None = None) -> AgentRun:
    """Convenience wrapper: organize *target_directory* with the configured backend."""
    return OrganizerAgent(backend=backend).run(target_directory)
