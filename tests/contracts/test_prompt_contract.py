from datetime import date

from tool_router.agent.orchestrator import build_system_prompt
from tool_router.agent.registry import ToolRegistry
from tool_router.agent.schema import SEARCH_PARAMETER_SCHEMA, render_parameter_schema
from tool_router.agent.tools import register_builtin_tools

from fakes import FakeRetrieval, FakeSearch


def _prompt(default_max_results: int = 20) -> str:
    registry = ToolRegistry()
    register_builtin_tools(registry, search_client=FakeSearch(), retrieval_client=FakeRetrieval())
    return build_system_prompt(
        registry.specs(),
        SEARCH_PARAMETER_SCHEMA,
        current_date=date(2024, 3, 1),
        default_max_results=default_max_results,
    )


def test_schema_renders_as_bulleted_list() -> None:
    rendered = render_parameter_schema(SEARCH_PARAMETER_SCHEMA).splitlines()

    assert rendered[0] == "- query: The query to search for"
    assert rendered[1] == "- max_results (optional): The maximum number of results to return"
    assert len(rendered) == 5
    assert all(line.startswith("- ") for line in rendered)


def test_prompt_lists_tools_schema_and_reply_format() -> None:
    prompt = _prompt(default_max_results=5)

    assert "Current date: 2024-03-01" in prompt
    assert "<max_results>number - 5 by default</max_results>" in prompt
    assert "Available tools: search (" in prompt
    assert "vedic_rag (use for any questions related to the Vedas and the Bhagavad Gita)" in prompt
    assert prompt.count(render_parameter_schema(SEARCH_PARAMETER_SCHEMA)) == 2
    assert "Search parameters:" in prompt
    assert "Vedic RAG parameters:" in prompt
    assert prompt.endswith("respond with <tool_call><tool></tool></tool_call>")
