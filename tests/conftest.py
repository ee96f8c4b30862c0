"""Shared pytest fixtures for PromptForge tests."""

import pytest
import sys
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from promptforge.core.exceptions import ProviderError
from promptforge.library import TemplateLibrary, MemoryTemplateStore, JsonFileTemplateStore
from promptforge.providers.base import LLMConfig, LLMProvider, LLMResponse
from promptforge.session import EditingSession
from promptforge.variables import VariableCache


# Sample template text
@pytest.fixture
def greeting_template():
    """A template with a repeated placeholder."""
    return "Hi {{name}}, your {{name}} is due {{ due }}"


@pytest.fixture
def review_template():
    """A template sharing one variable with the greeting."""
    return "Review this for {{name}}:\n{{code}}"


# Mock LLM Provider
class MockLLMProvider(LLMProvider):
    """LLM provider that records calls and replies from a script."""

    def __init__(self, responses=None, default="This is a mock LLM response for testing purposes."):
        super().__init__(LLMConfig(model="mock-model"))
        self.responses = responses or {}
        self.default = default
        self.calls = []
        self.closed = False

    def _validate(self) -> None:
        pass

    async def complete(self, messages, **kwargs):
        self.calls.append({"messages": list(messages), **kwargs})

        user_content = messages[-1].get("content", "") if messages else ""
        for key, value in self.responses.items():
            if key in user_content:
                return LLMResponse(content=value, model=kwargs.get("model") or "mock-model", usage={})

        return LLMResponse(
            content=self.default,
            model=kwargs.get("model") or "mock-model",
            usage={"prompt_tokens": 3, "completion_tokens": 7, "total_tokens": 10}
        )

    async def complete_stream(self, messages, **kwargs):
        response = await self.complete(messages, **kwargs)
        for word in response.content.split(" "):
            yield word

    @property
    def provider_name(self) -> str:
        return "mock"

    async def close(self) -> None:
        self.closed = True


class FailingLLMProvider(MockLLMProvider):
    """LLM provider whose every call fails."""

    async def complete(self, messages, **kwargs):
        self.calls.append({"messages": list(messages), **kwargs})
        raise ProviderError("Service unavailable", provider="mock", status_code=503)


@pytest.fixture
def mock_llm_provider():
    """Create a mock LLM provider."""
    return MockLLMProvider()


@pytest.fixture
def failing_llm_provider():
    """Create a provider that always raises ProviderError."""
    return FailingLLMProvider()


# Library and session
@pytest.fixture
def memory_library():
    """Library with the built-in templates and an in-memory store."""
    return TemplateLibrary(store=MemoryTemplateStore())


@pytest.fixture
def file_store(tmp_path):
    """JSON file store in a temporary directory."""
    return JsonFileTemplateStore(str(tmp_path))


@pytest.fixture
def cache():
    return VariableCache()


@pytest.fixture
def session(memory_library, mock_llm_provider, cache):
    """Editing session wired to the mock provider."""
    return EditingSession(memory_library, provider=mock_llm_provider, cache=cache)


# Settings
@pytest.fixture
def env(monkeypatch):
    """Set environment variables and reload settings; restored afterwards."""
    from promptforge.core.config import reload_settings

    for key in ("GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(key, raising=False)

    def _set(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, value)
        return reload_settings()

    yield _set

    monkeypatch.undo()
    reload_settings()


@pytest.fixture(autouse=True)
def detach_log_handler():
    """Drop the handler hosts install, since it points at a captured stream."""
    yield
    logger = logging.getLogger("promptforge")
    for handler in list(logger.handlers):
        if handler.get_name() == "promptforge":
            logger.removeHandler(handler)
