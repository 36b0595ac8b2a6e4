from unittest.mock import patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from orchestrator.errors import EmptyResponse
from orchestrator.llm_provider import (
    DEFAULT_GEMINI_MODEL,
    LLMClient,
    _content_text,
    build_gemini,
    build_mistral,
    default_model,
    normalize_provider,
)


def test_complete_sends_system_and_user_messages(client, provider):
    provider.queue("Dear Hiring Manager")
    text = client.complete(None, "be brief", "write a letter")
    assert text == "Dear Hiring Manager"
    messages = provider.calls[0]["messages"]
    assert isinstance(messages[0], SystemMessage) and messages[0].content == "be brief"
    assert isinstance(messages[1], HumanMessage) and messages[1].content == "write a letter"
    assert provider.calls[0]["schema"] is None
    assert provider.models == ["test-model"]


def test_complete_passes_schema_and_model_override(client, provider):
    schema = {"type": "object"}
    provider.queue("{}")
    client.complete("other-model", "sys", "query", schema=schema)
    assert provider.calls[0]["schema"] is schema
    assert provider.models == ["other-model"]


@pytest.mark.parametrize("reply", ["", "   \n", []])
def test_complete_raises_on_empty_text(client, provider, reply):
    provider.queue(reply)
    with pytest.raises(EmptyResponse):
        client.complete(None, "sys", "query")


def test_complete_propagates_provider_errors(client, provider):
    provider.queue(ConnectionError("network down"))
    with pytest.raises(ConnectionError):
        client.complete(None, "sys", "query")
    assert len(provider.calls) == 1


def test_content_text_joins_text_parts():
    msg = AIMessage(content=[{"type": "text", "text": "Hello "}, "world", {"type": "thinking", "thinking": "x"}])
    assert _content_text(msg) == "Hello world"


def test_normalize_provider(monkeypatch):
    assert normalize_provider(None) == "gemini"
    assert normalize_provider(" Mistral ") == "mistral"
    assert normalize_provider("openai") == "gemini"
    monkeypatch.setenv("LLM_PROVIDER", "mistral")
    assert normalize_provider(None) == "mistral"


def test_default_model_reads_environment(monkeypatch):
    assert default_model("gemini") == DEFAULT_GEMINI_MODEL
    monkeypatch.setenv("GEMINI_MODEL", "gemini-custom")
    assert default_model("gemini") == "gemini-custom"
    assert LLMClient(provider="gemini").model == "gemini-custom"


def test_build_gemini_requires_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY")
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        build_gemini("gemini-2.5-flash")


def test_build_gemini_structured_mode_settings():
    with patch("orchestrator.llm_provider.ChatGoogleGenerativeAI") as chat:
        build_gemini("gemini-2.5-flash", 0.2, {"type": "object"})
    kwargs = chat.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["google_api_key"] == "test-gemini-key"
    assert kwargs["response_mime_type"] == "application/json"
    assert kwargs["response_schema"] == {"type": "object"}


def test_build_gemini_free_text_mode_has_no_schema():
    with patch("orchestrator.llm_provider.ChatGoogleGenerativeAI") as chat:
        build_gemini("gemini-2.5-flash")
    assert "response_schema" not in chat.call_args.kwargs


def test_build_mistral_binds_json_schema_response_format():
    with patch("orchestrator.llm_provider.ChatMistralAI") as chat:
        build_mistral("mistral-large-latest", 0.2, {"type": "object"})
    response_format = chat.return_value.bind.call_args.kwargs["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["schema"] == {"type": "object"}


def test_build_mistral_requires_key(monkeypatch):
    monkeypatch.delenv("MISTRAL_API_KEY")
    with pytest.raises(RuntimeError, match="MISTRAL_API_KEY"):
        build_mistral("mistral-large-latest")
