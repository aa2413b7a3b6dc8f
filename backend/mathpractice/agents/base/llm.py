"""LLM backends for question generation and grading.

Two named backends are configured against an OpenAI-compatible API (Ollama,
LM Studio, cloud providers): a ``fast`` model for routine generation and a
``high-capacity`` model for complex generation and grading.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Optional

import openai
from langchain_openai import ChatOpenAI

from ...core.config import Settings, get_settings
from ...core.exceptions import BackendError, BackendTimeoutError
from .interfaces import TextGenerator
from .state import DifficultyLevel

logger = logging.getLogger(__name__)


class BackendVariant(str, Enum):
    """Names of the two generation backends."""

    FAST = "fast"
    HIGH_CAPACITY = "high-capacity"


def _resolve_api_key(base_url: str, api_key: str) -> str:
    """Provide a placeholder API key for local OpenAI-compatible servers."""
    if api_key:
        return api_key
    base = (base_url or "").lower()
    if "127.0.0.1" in base or "localhost" in base:
        return "ollama"
    return ""


def get_llm(
    model: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> ChatOpenAI:
    """
    Get a configured chat model client.

    Args:
        model: Model name served by the backend
        temperature: Override default temperature (0.0-1.0)
        max_tokens: Override default max tokens
        settings: Settings to read connection details from

    Returns:
        Configured ChatOpenAI instance
    """
    settings = settings or get_settings()

    return ChatOpenAI(
        base_url=settings.LLM_BASE_URL,
        api_key=_resolve_api_key(settings.LLM_BASE_URL, settings.LLM_API_KEY),
        model=model,
        temperature=temperature if temperature is not None else settings.LLM_TEMPERATURE,
        max_tokens=max_tokens or settings.LLM_MAX_TOKENS,
        max_retries=0,
    )


def _content_text(content: Any) -> str:
    """Flatten LangChain message content into plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return str(content) if content is not None else ""


class ChatBackend:
    """A ``TextGenerator`` backed by a LangChain chat model."""

    def __init__(self, name: str, llm: ChatOpenAI, default_timeout: float):
        self.name = name
        self.llm = llm
        self.default_timeout = default_timeout

    @property
    def model(self) -> str:
        return self.llm.model_name

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Send ``prompt`` and return the completion text.

        Raises:
            BackendTimeoutError: the call exceeded its deadline
            BackendError: transport failure or non-2xx response
        """
        deadline = timeout if timeout is not None else self.default_timeout
        runnable = self.llm if temperature is None else self.llm.bind(temperature=temperature)

        try:
            response = await asyncio.wait_for(runnable.ainvoke(prompt), timeout=deadline)
        except asyncio.TimeoutError as e:
            raise BackendTimeoutError(self.name, deadline) from e
        except openai.APITimeoutError as e:
            raise BackendTimeoutError(self.name, deadline) from e
        except openai.APIStatusError as e:
            raise BackendError(
                f"{self.model} returned HTTP {e.status_code}: {e.message}",
                backend=self.name,
                status_code=e.status_code,
            ) from e
        except openai.APIConnectionError as e:
            raise BackendError(f"Could not reach {self.name} backend: {e}", backend=self.name) from e

        return _content_text(response.content)


class BackendRegistry:
    """Holds the fast and high-capacity backends and routes between them."""

    def __init__(self, fast: TextGenerator, high_capacity: TextGenerator):
        self._backends = {
            BackendVariant.FAST: fast,
            BackendVariant.HIGH_CAPACITY: high_capacity,
        }

    @property
    def fast(self) -> TextGenerator:
        return self._backends[BackendVariant.FAST]

    @property
    def high_capacity(self) -> TextGenerator:
        return self._backends[BackendVariant.HIGH_CAPACITY]

    def get(self, variant: BackendVariant) -> TextGenerator:
        return self._backends[BackendVariant(variant)]

    def route(self, complexity: Optional[str], difficulty: DifficultyLevel) -> TextGenerator:
        """Complex or hard work goes to the high-capacity backend."""
        if complexity == "complex" or difficulty == DifficultyLevel.HARD:
            return self.high_capacity
        return self.fast


def build_backends(settings: Optional[Settings] = None) -> BackendRegistry:
    """Create the production fast / high-capacity backends from settings."""
    settings = settings or get_settings()
    timeout = settings.GENERATION_TIMEOUT_SECONDS

    fast = ChatBackend(
        BackendVariant.FAST.value,
        get_llm(settings.LLM_FAST_MODEL, settings=settings),
        default_timeout=timeout,
    )
    high_capacity = ChatBackend(
        BackendVariant.HIGH_CAPACITY.value,
        get_llm(settings.LLM_HIGH_CAPACITY_MODEL, settings=settings),
        default_timeout=timeout,
    )
    logger.info(
        "Configured backends: fast=%s high-capacity=%s",
        settings.LLM_FAST_MODEL,
        settings.LLM_HIGH_CAPACITY_MODEL,
    )
    return BackendRegistry(fast=fast, high_capacity=high_capacity)
