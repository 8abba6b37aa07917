"""
Chat backends for tidyagent.

This module is the only place that *directly* calls an LLM.  Everything else (agent loop, tools)
stays provider-agnostic and speaks :class:`~tidyagent.core.schema.Message`.

We support three back-ends out of the box:

1. **Groq** via its OpenAI-compatible endpoint (the default).
2. **OpenAI** via the chat-completions API.
3. **Anthropic** via the messages API.

Additional providers can be added by subclassing :class:`BaseBackend` and registering via
:func:`register_backend`.
"""

import json
import logging
from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    List,
    Sequence,
    Tuple,
    Type,
)

import httpx

from tidyagent.config import settings
from tidyagent.core.errors import ConfigurationError
from tidyagent.core.schema import (
    Message,
    Role,
    ToolDescriptor,
    ToolInvocation,
)
from tidyagent.tools.tool_call_parser import parse_arguments

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Registry helpers
# ---------------------------------------------------------------------------
_BACKEND_REGISTRY: dict[str, Type["BaseBackend"]] = {}


def register_backend(name: str) -> Callable:
    """Decorator to register a backend class under *name*."""

    def wrapper(cls: Type["BaseBackend"]) -> Type["BaseBackend"]:
        cls.name = name
        _BACKEND_REGISTRY[name] = cls
        return cls

    return wrapper


def available_backends() -> List[str]:
    """Names accepted by :func:`load_backend`."""
    return sorted(_BACKEND_REGISTRY)


def load_backend(name: str | None = None, **kwargs: Any) -> "BaseBackend":
    """
    Factory that returns an instantiated backend.

    Fallback order:
    1. *name* arg
    2. ``settings.BACKEND`` env/.env option
    3. default: ``"groq"``
    """

    target = name or getattr(settings, "BACKEND", "groq")
    cls = _BACKEND_REGISTRY.get(target.lower())
    if cls is None:
        raise ConfigurationError(
            f"Backend '{target}' is not registered (choose from {', '.join(available_backends())})."
        )
    return cls(**kwargs)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------
class BaseBackend(ABC):
    """Abstract backend that turns a transcript + tool descriptors into one assistant message."""

    name: ClassVar[str] = ""

    def __init__(
        self,
        client: Any | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self.model = model or settings.model_for(self.name)
        self.max_tokens = max_tokens or settings.MAX_TOKENS
        self._client = client

    @property
    def client(self) -> Any:
        """The SDK client, built on first use."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def _api_key(self) -> str:
        api_key = settings.api_key_for(self.name)
        if not api_key:
            raise ConfigurationError(f"No API key configured for backend '{self.name}'.")
        return api_key

    @staticmethod
    def _http_client() -> httpx.Client:
        return httpx.Client(timeout=settings.REQUEST_TIMEOUT)

    @abstractmethod
    def _build_client(self) -> Any:
        """Create the provider SDK client."""

    @abstractmethod
    def complete(
        self, messages: Sequence[Message], tools: Sequence[ToolDescriptor]
    ) -> Message:
        """Send the transcript and return the assistant's reply."""


# ---------------------------------------------------------------------------
# Concrete backends
# ---------------------------------------------------------------------------
@register_backend("openai")
class OpenAIBackend(BaseBackend):
    """OpenAI chat-completions backend."""

    BASE_URL: ClassVar[str | None] = None

    def _build_client(self) -> Any:
        import openai  # pylint: disable=import-outside-toplevel

        return openai.OpenAI(
            api_key=self._api_key(), base_url=self.BASE_URL, http_client=self._http_client()
        )

    def complete(
        self, messages: Sequence[Message], tools: Sequence[ToolDescriptor]
    ) -> Message:
        resp = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            tools=[tool.to_openai() for tool in tools],
            messages=[message.to_openai() for message in messages],
        )

        reply = resp.choices[0].message
        tool_calls = [
            ToolInvocation(id=call.id, name=call.function.name, arguments=call.function.arguments)
            for call in reply.tool_calls or []
        ]
        logger.debug(
            "%s backend response: content=%r tool_calls=%s",
            self.name,
            reply.content,
            [call.name for call in tool_calls],
        )
        return Message(role=Role.ASSISTANT, content=reply.content, tool_calls=tool_calls)


@register_backend("groq")
class GroqBackend(OpenAIBackend):
    """Groq backend, reached through its OpenAI-compatible endpoint."""

    BASE_URL: ClassVar[str | None] = "https://api.groq.com/openai/v1"


def to_anthropic_messages(
    messages: Sequence[Message],
) -> Tuple[str | None, List[Dict[str, Any]]]:
    """
    Translate the transcript into Anthropic's ``(system, messages)`` pair.

    Tool results become ``tool_result`` blocks of a user message; consecutive results are merged
    into the same user message, as the API requires.
    """
    system_parts: List[str] = []
    out: List[Dict[str, Any]] = []

    for message in messages:
        if message.role is Role.SYSTEM:
            system_parts.append(message.content or "")
        elif message.role is Role.USER:
            out.append({"role": "user", "content": message.content or ""})
        elif message.role is Role.ASSISTANT:
            blocks: List[Dict[str, Any]] = []
            if message.content:
                blocks.append({"type": "text", "text": message.content})
            for call in message.tool_calls:
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": call.id,
                        "name": call.name,
                        "input": parse_arguments(call.arguments),
                    }
                )
            out.append({"role": "assistant", "content": blocks})
        else:
            block = {
                "type": "tool_result",
                "tool_use_id": message.tool_call_id,
                "content": message.content or "",
            }
            previous = out[-1] if out else None
            if (
                previous is not None
                and previous["role"] == "user"
                and isinstance(previous["content"], list)
            ):
                previous["content"].append(block)
            else:
                out.append({"role": "user", "content": [block]})

    system = "\n\n".join(system_parts) if system_parts else None
    return system, out


@register_backend("anthropic")
class AnthropicBackend(BaseBackend):
    """Anthropic Claude messages backend."""

    def _build_client(self) -> Any:
        import anthropic  # pylint: disable=import-outside-toplevel

        return anthropic.Anthropic(api_key=self._api_key(), http_client=self._http_client())

    def complete(
        self, messages: Sequence[Message], tools: Sequence[ToolDescriptor]
    ) -> Message:
        system, payload = to_anthropic_messages(messages)
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "tools": [tool.to_anthropic() for tool in tools],
            "messages": payload,
        }
        if system:
            kwargs["system"] = system

        response = self.client.messages.create(**kwargs)

        texts: List[str] = []
        tool_calls: List[ToolInvocation] = []
        for block in response.content:
            if block.type == "text":
                texts.append(block.text)
            elif block.type == "tool_use":
                tool_calls.append(
                    ToolInvocation(id=block.id, name=block.name, arguments=json.dumps(block.input))
                )

        logger.debug(
            "Anthropic backend response: text=%r tool_calls=%s",
            texts,
            [call.name for call in tool_calls],
        )
        return Message(
            role=Role.ASSISTANT, content="\n".join(texts) if texts else None, tool_calls=tool_calls
        )
