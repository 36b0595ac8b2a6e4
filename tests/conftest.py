"""
Shared fixtures.

No test talks to a real provider: API keys are replaced with mock values and
the chat model is swapped for a scripted fake that records every call.
"""

import json

import pytest
from langchain_core.messages import AIMessage

from orchestrator.llm_provider import LLMClient


ACME_JD = (
    "Acme Corp is hiring a Platform Engineer. You will need Python, Kubernetes, "
    "RAG systems, CI/CD pipelines and strong communication skills."
)
ACME_RESUME = "5 years Python, Kubernetes, RAG systems"
ACME_EXTRACTION = {
    "company": "Acme Corp",
    "requirements": ["Python", "Kubernetes", "RAG systems", "CI/CD pipelines", "Communication"],
}


class FakeChatModel:
    def __init__(self, owner, schema):
        self.owner = owner
        self.schema = schema

    def invoke(self, messages):
        self.owner.calls.append({"messages": messages, "schema": self.schema})
        reply = self.owner.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return AIMessage(content=reply)


class FakeProvider:
    """Stands in for a provider builder; replies are consumed in order."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []
        self.models = []

    def __call__(self, model, temperature=0.2, schema=None):
        self.models.append(model)
        return FakeChatModel(self, schema)

    def queue(self, *replies):
        self.replies.extend(replies)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("MISTRAL_API_KEY", "test-mistral-key")
    for name in ("GOOGLE_API_KEY", "API_KEY", "GEMINI_MODEL", "MISTRAL_MODEL", "LLM_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("orchestrator.llm_provider._read_secrets", lambda: {})


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def client(provider):
    return LLMClient(provider="gemini", model="test-model", builder=provider)


@pytest.fixture
def acme_json():
    return json.dumps(ACME_EXTRACTION)
