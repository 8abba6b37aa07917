"""Shared fixtures: a scripted backend standing in for the chat API."""

import json
from typing import (
    Any,
    Dict,
    List,
    Sequence,
)

import pytest

from tidyagent.agent.backends import BaseBackend
from tidyagent.core.schema import (
    Message,
    Role,
    ToolDescriptor,
    ToolInvocation,
)


def assistant(content: str | None = None, *calls: ToolInvocation) -> Message:
    """Build an assistant reply."""
    return Message(role=Role.ASSISTANT, content=content, tool_calls=list(calls))


def call(call_id: str, name: str, **args: Any) -> ToolInvocation:
    """Build a tool invocation with JSON-encoded arguments."""
    return ToolInvocation(id=call_id, name=name, arguments=json.dumps(args))


class ScriptedBackend(BaseBackend):
    """Returns pre-recorded replies and keeps a snapshot of every transcript it was sent."""

    name = "scripted"

    def __init__(self, replies: Sequence[Message]) -> None:
        super().__init__(client=object())
        self.replies: List[Message] = list(replies)
        self.requests: List[List[Message]] = []
        self.tools_seen: List[List[Dict[str, Any]]] = []

    def _build_client(self) -> Any:  # pragma: no cover
        raise AssertionError("scripted backend has no client")

    def complete(self, messages: Sequence[Message], tools: Sequence[ToolDescriptor]) -> Message:
        self.requests.append([message.model_copy(deep=True) for message in messages])
        self.tools_seen.append([tool.to_openai() for tool in tools])
        if not self.replies:
            raise AssertionError("backend called more often than scripted")
        return self.replies.pop(0)


@pytest.fixture
def scripted():
    """Factory for :class:`ScriptedBackend`."""
    return ScriptedBackend
