"""
LLM client abstraction layer for the optional structuring draft.

Both providers are asked for a JSON object and return its text; transport
and provider errors come out as ``LLMError`` so callers have a single thing
to catch.  Configuration problems (unknown provider, missing key) raise
``ValueError`` when a client is built, never at import.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import ollama
import openai

from . import config

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """The provider was reachable in principle but the call failed."""


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat(self, messages: List[Dict[str, str]], model: str) -> str:
        """Send a chat request and return the reply text."""


class OllamaClient(LLMClient):
    def __init__(self, host: Optional[str] = None):
        self.client = ollama.Client(host=host or config.OLLAMA_BASE_URL)

    def chat(self, messages: List[Dict[str, str]], model: str) -> str:
        try:
            response = self.client.chat(model=model, messages=messages, format="json")
        except (ollama.ResponseError, ConnectionError) as exc:
            raise LLMError(f"ollama request failed: {exc}") from exc
        return response["message"]["content"] or ""


class OpenAIClient(LLMClient):
    def __init__(self, api_key: Optional[str] = None):
        api_key = api_key or config.OPENAI_API_KEY
        if not api_key:
            raise ValueError(
                "OpenAI API key is required. Set OPENAI_API_KEY environment variable or pass api_key parameter."
            )
        self.client = openai.OpenAI(api_key=api_key)

    def chat(self, messages: List[Dict[str, str]], model: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                response_format={"type": "json_object"},
                **config.OPENAI_MODEL_PARAMS,
            )
        except openai.OpenAIError as exc:
            raise LLMError(f"openai request failed: {exc}") from exc
        return response.choices[0].message.content or ""


def get_llm_client(provider: Optional[str] = None) -> LLMClient:
    """Factory function to get the client for the configured provider."""
    provider = (provider or config.LLM_PROVIDER).lower()
    if provider == "openai":
        return OpenAIClient()
    if provider == "ollama":
        return OllamaClient()
    raise ValueError(f"Unsupported LLM provider: {provider}")


# Created on first use
_llm_client: Optional[LLMClient] = None


def chat(messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
    """Chat through the configured provider, building the client on first use."""
    global _llm_client
    if _llm_client is None:
        _llm_client = get_llm_client()
    model = model or config.get_model_for_provider()
    logger.debug("LLM request to %s (%d messages)", model, len(messages))
    return _llm_client.chat(messages, model)
