from __future__ import annotations
import logging
import os
from typing import Any, Callable, Dict, Optional
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_mistralai import ChatMistralAI

from .errors import EmptyResponse

logger = logging.getLogger(__name__)

PROVIDERS = {"gemini", "mistral"}
DEFAULT_PROVIDER = "gemini"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_MISTRAL_MODEL = "mistral-large-latest"


def _read_secrets() -> dict[str, str]:
    try:
        import streamlit as st  # type: ignore
        if hasattr(st, "secrets"):
            return dict(st.secrets)
    except Exception:
        # No secrets.toml outside a Streamlit deployment.
        pass
    return {}


def _get_secret(name: str) -> Optional[str]:
    secrets = _read_secrets()
    return secrets.get(name) or os.getenv(name)


def normalize_provider(p: str | None) -> str:
    if not p:
        p = _get_secret("LLM_PROVIDER")
    if not p:
        return DEFAULT_PROVIDER
    p = p.strip().lower()
    if p in PROVIDERS:
        return p
    return DEFAULT_PROVIDER


def default_model(provider: str) -> str:
    if normalize_provider(provider) == "mistral":
        return _get_secret("MISTRAL_MODEL") or DEFAULT_MISTRAL_MODEL
    return _get_secret("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL


def build_gemini(model: str, temperature: float = 0.2,
                 schema: Dict[str, Any] | None = None) -> ChatGoogleGenerativeAI:
    # Prefer GEMINI_API_KEY, fallback to GOOGLE_API_KEY, then the bare API_KEY
    key = _get_secret("GEMINI_API_KEY") or _get_secret("GOOGLE_API_KEY") or _get_secret("API_KEY")
    if not key:
        raise RuntimeError("GEMINI_API_KEY (or GOOGLE_API_KEY) is missing. Set it in .env or Streamlit secrets.")
    kwargs: Dict[str, Any] = {}
    if schema is not None:
        kwargs["response_mime_type"] = "application/json"
        kwargs["response_schema"] = schema
    return ChatGoogleGenerativeAI(model=model, temperature=temperature, google_api_key=key, **kwargs)


def build_mistral(model: str, temperature: float = 0.2,
                  schema: Dict[str, Any] | None = None) -> Any:
    key = _get_secret("MISTRAL_API_KEY")
    if not key:
        raise RuntimeError("MISTRAL_API_KEY is missing. Set it in .env or Streamlit secrets.")
    llm = ChatMistralAI(model=model, temperature=temperature, api_key=key)
    if schema is None:
        return llm
    return llm.bind(response_format={
        "type": "json_schema",
        "json_schema": {"name": "job_extraction", "schema": schema, "strict": True},
    })


BUILDERS: Dict[str, Callable[..., Any]] = {
    "gemini": build_gemini,
    "mistral": build_mistral,
}


def _content_text(resp: Any) -> str:
    content = getattr(resp, "content", "")
    if isinstance(content, list):
        # Gemini may split a reply into typed parts
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        content = "".join(parts)
    return content or ""


class LLMClient:
    """Single entry point to the hosted model.

    One blocking call per ``complete``; no retry, no timeout, no streaming.
    A chat model is built per call so structured and free-text requests can
    carry different generation settings.
    """

    def __init__(self, provider: str | None = None, model: str | None = None,
                 temperature: float = 0.2, builder: Callable[..., Any] | None = None):
        self.provider = normalize_provider(provider)
        self.model = model or default_model(self.provider)
        self.temperature = temperature
        self._builder = builder or BUILDERS[self.provider]

    def complete(self, model: str | None, system_instruction: str, user_query: str,
                 schema: Dict[str, Any] | None = None) -> str:
        model = model or self.model
        llm = self._builder(model, self.temperature, schema)
        logger.info("Calling %s/%s (structured=%s, query chars=%d)",
                    self.provider, model, schema is not None, len(user_query))
        resp = llm.invoke([
            SystemMessage(content=system_instruction),
            HumanMessage(content=user_query),
        ])
        text = _content_text(resp)
        if not text.strip():
            raise EmptyResponse()
        return text


def get_llm(provider: str | None = None, model: str | None = None, temperature: float = 0.2) -> LLMClient:
    return LLMClient(provider=provider, model=model, temperature=temperature)
