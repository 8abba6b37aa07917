"""Backends, exercised against fake SDK clients."""

import json
from types import SimpleNamespace

import pytest

from tidyagent.agent.backends import (
    AnthropicBackend,
    GroqBackend,
    OpenAIBackend,
    load_backend,
    to_anthropic_messages,
)
from tidyagent.config import settings
from tidyagent.core.errors import ConfigurationError
from tidyagent.core.schema import (
    Message,
    Role,
    ToolInvocation,
)
from tidyagent.tools import get_tool_descriptors


class _Recorder:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


def _openai_client(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    recorder = _Recorder(SimpleNamespace(choices=[SimpleNamespace(message=message)]))
    return SimpleNamespace(chat=SimpleNamespace(completions=recorder)), recorder


def _transcript():
    return [
        Message.system("be tidy"),
        Message.user("Please organize the files in this folder: /x"),
        Message(
            role=Role.ASSISTANT,
            content=None,
            tool_calls=[
                ToolInvocation(id="c1", name="list_files", arguments='{"directory": "/x"}'),
                ToolInvocation(id="c2", name="create_folder", arguments='{"folder_path": "/x/Images"}'),
            ],
        ),
        Message.tool_result("c1", "a.png"),
        Message.tool_result("c2", "Created folder: /x/Images"),
    ]


def test_load_backend_by_name() -> None:
    assert isinstance(load_backend("groq", client=object()), GroqBackend)
    assert isinstance(load_backend("OpenAI", client=object()), OpenAIBackend)
    assert isinstance(load_backend("anthropic", client=object()), AnthropicBackend)


def test_load_backend_unknown() -> None:
    with pytest.raises(ConfigurationError):
        load_backend("llamacpp")


def test_backend_models_default_per_provider(monkeypatch) -> None:
    monkeypatch.setattr(settings, "MODEL", None)
    assert load_backend("groq", client=object()).model == "meta-llama/llama-4-scout-17b-16e-instruct"
    assert load_backend("anthropic", client=object()).model == "claude-3-5-haiku-latest"
    monkeypatch.setattr(settings, "MODEL", "custom-model")
    assert load_backend("openai", client=object()).model == "custom-model"


def test_missing_credential_raises(monkeypatch) -> None:
    monkeypatch.setattr(settings, "GROQ_API_KEY", None)
    backend = GroqBackend()
    with pytest.raises(ConfigurationError):
        _ = backend.client


def test_groq_client_targets_groq_endpoint(monkeypatch) -> None:
    monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk-test")
    backend = GroqBackend()
    assert "api.groq.com" in str(backend.client.base_url)


def test_openai_request_and_tool_calls() -> None:
    tool_call = SimpleNamespace(
        id="c9", function=SimpleNamespace(name="list_files", arguments='{"directory": "/x"}')
    )
    client, recorder = _openai_client(tool_calls=[tool_call])
    backend = OpenAIBackend(client=client, model="m", max_tokens=123)

    reply = backend.complete(_transcript(), get_tool_descriptors())

    sent = recorder.calls[0]
    assert sent["model"] == "m"
    assert sent["max_tokens"] == 123
    assert len(sent["tools"]) == 4
    assert sent["messages"][2]["tool_calls"][1]["function"]["name"] == "create_folder"
    assert sent["messages"][3] == {"role": "tool", "content": "a.png", "tool_call_id": "c1"}
    assert "tool_calls" not in sent["messages"][1]
    assert reply.role is Role.ASSISTANT
    assert reply.content is None
    assert reply.tool_calls == [
        ToolInvocation(id="c9", name="list_files", arguments='{"directory": "/x"}')
    ]


def test_openai_final_answer() -> None:
    client, _ = _openai_client(content="All done.", tool_calls=None)
    reply = OpenAIBackend(client=client).complete(_transcript(), get_tool_descriptors())
    assert reply.content == "All done."
    assert reply.tool_calls == []


def test_anthropic_translation_merges_tool_results() -> None:
    system, messages = to_anthropic_messages(_transcript())

    assert system == "be tidy"
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[1]["content"][0] == {
        "type": "tool_use",
        "id": "c1",
        "name": "list_files",
        "input": {"directory": "/x"},
    }
    assert [b["tool_use_id"] for b in messages[2]["content"]] == ["c1", "c2"]


def test_anthropic_response_conversion() -> None:
    response = SimpleNamespace(
        content=[
            SimpleNamespace(type="text", text="Listing first."),
            SimpleNamespace(type="tool_use", id="tu1", name="list_files", input={"directory": "/x"}),
        ]
    )
    recorder = _Recorder(response)
    backend = AnthropicBackend(client=SimpleNamespace(messages=recorder), model="claude")

    reply = backend.complete(_transcript(), get_tool_descriptors())

    sent = recorder.calls[0]
    assert sent["system"] == "be tidy"
    assert sent["tools"][0]["name"] == "list_files"
    assert reply.content == "Listing first."
    assert reply.tool_calls[0].id == "tu1"
    assert json.loads(reply.tool_calls[0].arguments) == {"directory": "/x"}
