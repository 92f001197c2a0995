from __future__ import annotations

import pytest

from tool_router.agent.registry import ToolRegistry
from tool_router.agent.tools import register_builtin_tools
from tool_router.types import ConversationMessage

from fakes import FakeRetrieval, FakeSearch


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_search() -> FakeSearch:
    return FakeSearch(
        results={
            "query": "ancient temples",
            "results": [{"title": "Temples", "url": "https://example.org", "content": "Stone."}],
        }
    )


@pytest.fixture
def fake_retrieval() -> FakeRetrieval:
    return FakeRetrieval(texts=["Yoga is skill in action.", "The self is eternal."])


@pytest.fixture
def registry(fake_search: FakeSearch, fake_retrieval: FakeRetrieval) -> ToolRegistry:
    tool_registry = ToolRegistry()
    register_builtin_tools(
        tool_registry, search_client=fake_search, retrieval_client=fake_retrieval
    )
    return tool_registry


@pytest.fixture
def history() -> list[ConversationMessage]:
    return [ConversationMessage(role="user", content="Tell me about ancient temples.")]
