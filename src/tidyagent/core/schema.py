"""
Schema definitions for the messages exchanged between the agent loop, the model backends and the
tools.

These data models serve as the contract between the chat API, the orchestration loop, and
individual tools.  We keep them separate from runtime logic so they can be imported anywhere without
side-effects.
"""

from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class Role(str, Enum):
    """Author of a message in the transcript."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ToolInvocation(BaseModel):
    """A call that the model wants the agent to execute."""

    id: str = Field(..., description="Opaque identifier, unique within the conversation")
    name: str = Field(..., description="Requested tool name")
    arguments: str = Field("{}", description="Argument payload exactly as the model encoded it")

    def to_openai(self) -> Dict[str, Any]:
        """Render as an entry of an OpenAI ``tool_calls`` list."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


class Message(BaseModel):
    """One entry of the transcript."""

    role: Role
    content: Optional[str] = None  # None when the message only carries tool calls
    tool_calls: List[ToolInvocation] = Field(default_factory=list)
    tool_call_id: Optional[str] = None  # Links a tool result to its invocation

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> "Message":
        return cls(role=Role.TOOL, content=content, tool_call_id=tool_call_id)

    def to_openai(self) -> Dict[str, Any]:
        """Render in the OpenAI chat-completions message format."""
        payload: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            payload["tool_calls"] = [call.to_openai() for call in self.tool_calls]
        if self.tool_call_id is not None:
            payload["tool_call_id"] = self.tool_call_id
        return payload


class ParameterInfo(BaseModel):
    """Description of a single tool parameter."""

    model_config = ConfigDict(frozen=True)

    type: str = "string"
    description: str = ""
    required: bool = True


class ToolDescriptor(BaseModel):
    """Static description of a tool, as offered to the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, ParameterInfo] = Field(default_factory=dict)

    @property
    def required(self) -> List[str]:
        """Names of the mandatory parameters, in declaration order."""
        return [name for name, info in self.parameters.items() if info.required]

    def json_schema(self) -> Dict[str, Any]:
        """Return the JSON-schema object describing the parameters."""
        return {
            "type": "object",
            "properties": {
                name: {"type": info.type, "description": info.description}
                for name, info in self.parameters.items()
            },
            "required": self.required,
        }

    def to_openai(self) -> Dict[str, Any]:
        """Render in the OpenAI function-tool format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema(),
            },
        }

    def to_anthropic(self) -> Dict[str, Any]:
        """Render in the Anthropic tool format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.json_schema(),
        }


class Conversation(BaseModel):
    """Ordered, append-only transcript of a single run."""

    messages: List[Message] = Field(default_factory=list)

    def append(self, message: Message) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)

    def pending_tool_calls(self) -> List[ToolInvocation]:
        """Return invocations of the last assistant message that have no result yet."""
        answered = set()
        for message in reversed(self.messages):
            if message.role is Role.TOOL and message.tool_call_id is not None:
                answered.add(message.tool_call_id)
            elif message.role is Role.ASSISTANT:
                return [call for call in message.tool_calls if call.id not in answered]
        return []


class AgentRun(BaseModel):
    """Outcome of one organizing run."""

    summary: str
    conversation: Conversation
    model_requests: int = 0
