"""
Tests for backend construction, routing and error mapping.
"""

import asyncio

import httpx
import openai
import pytest

from mathpractice.agents.base.llm import (
    BackendRegistry,
    BackendVariant,
    ChatBackend,
    _resolve_api_key,
    build_backends,
    get_llm,
)
from mathpractice.agents.base.state import DifficultyLevel
from mathpractice.core.config import Settings
from mathpractice.core.exceptions import BackendError, BackendTimeoutError

from conftest import ScriptedBackend


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeChatModel:
    """Minimal stand-in for a LangChain chat model."""

    model_name = "fake-chat"

    def __init__(self, content="Question: What is 1 + 1?", delay: float = 0.0, error=None):
        self.content = content
        self.delay = delay
        self.error = error
        self.bound = []

    def bind(self, **kwargs):
        self.bound.append(kwargs)
        return self

    async def ainvoke(self, prompt):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return FakeMessage(self.content)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


class TestBackendRegistry:
    """Routing between fast and high-capacity backends."""

    def setup_method(self):
        self.fast = ScriptedBackend("fast", ["ok"])
        self.high = ScriptedBackend("high-capacity", ["ok"])
        self.registry = BackendRegistry(fast=self.fast, high_capacity=self.high)

    @pytest.mark.parametrize("complexity,difficulty,expected", [
        ("simple", DifficultyLevel.EASY, "fast"),
        ("moderate", DifficultyLevel.MEDIUM, "fast"),
        ("complex", DifficultyLevel.EASY, "high-capacity"),
        ("simple", DifficultyLevel.HARD, "high-capacity"),
        (None, DifficultyLevel.MEDIUM, "fast"),
    ])
    def test_route(self, complexity, difficulty, expected):
        assert self.registry.route(complexity, difficulty).name == expected

    def test_get_by_variant(self):
        assert self.registry.get(BackendVariant.FAST) is self.fast
        assert self.registry.get("high-capacity") is self.high


@pytest.mark.asyncio
class TestChatBackend:
    """Completion text and deadline handling."""

    async def test_returns_content_text(self):
        backend = ChatBackend("fast", FakeChatModel(), default_timeout=1.0)
        assert await backend.generate("prompt") == "Question: What is 1 + 1?"
        assert backend.model == "fake-chat"

    async def test_flattens_content_parts(self):
        llm = FakeChatModel(content=[{"type": "text", "text": "Answer: "}, {"type": "text", "text": "2"}])
        backend = ChatBackend("fast", llm, default_timeout=1.0)
        assert await backend.generate("prompt") == "Answer: 2"

    async def test_temperature_override_is_bound(self):
        llm = FakeChatModel()
        await ChatBackend("high-capacity", llm, default_timeout=1.0).generate("prompt", temperature=0.3)
        assert llm.bound == [{"temperature": 0.3}]

    async def test_deadline_raises_backend_timeout(self):
        backend = ChatBackend("fast", FakeChatModel(delay=1.0), default_timeout=5.0)

        with pytest.raises(BackendTimeoutError) as excinfo:
            await backend.generate("prompt", timeout=0.01)

        assert excinfo.value.backend == "fast"
        assert excinfo.value.timeout == 0.01

    async def test_error_status_raises_backend_error(self):
        request = httpx.Request("POST", "http://127.0.0.1:11434/v1/chat/completions")
        error = openai.InternalServerError(
            "down",
            response=httpx.Response(503, request=request),
            body=None,
        )
        backend = ChatBackend("fast", FakeChatModel(error=error), default_timeout=1.0)

        with pytest.raises(BackendError) as excinfo:
            await backend.generate("prompt")

        assert excinfo.value.status_code == 503
        assert excinfo.value.backend == "fast"
        assert "503" in str(excinfo.value)

    async def test_connection_failure_raises_backend_error(self):
        request = httpx.Request("POST", "http://127.0.0.1:11434/v1/chat/completions")
        error = openai.APIConnectionError(request=request)
        backend = ChatBackend("fast", FakeChatModel(error=error), default_timeout=1.0)

        with pytest.raises(BackendError) as excinfo:
            await backend.generate("prompt")

        assert not isinstance(excinfo.value, BackendTimeoutError)
        assert excinfo.value.status_code is None
        assert "Could not reach fast backend" in str(excinfo.value)


class TestBackendFactory:
    """Production wiring from settings."""

    def test_local_servers_get_placeholder_key(self):
        assert _resolve_api_key("http://127.0.0.1:11434/v1", "") == "ollama"
        assert _resolve_api_key("https://api.example.com/v1", "") == ""
        assert _resolve_api_key("http://localhost:1234/v1", "secret") == "secret"

    def test_get_llm(self, settings):
        llm = get_llm(settings.LLM_FAST_MODEL, settings=settings)
        assert llm.model_name == "llama3.1:latest"
        assert llm.max_retries == 0

    def test_build_backends(self, settings):
        registry = build_backends(settings)
        assert registry.fast.name == "fast"
        assert registry.fast.model == settings.LLM_FAST_MODEL
        assert registry.high_capacity.name == "high-capacity"
        assert registry.high_capacity.model == settings.LLM_HIGH_CAPACITY_MODEL
