"""Built-in tool implementations for the router."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from tool_router.agent.registry import ToolOutput, ToolRegistry, ToolSpec
from tool_router.agent.schema import ParameterBag
from tool_router.config import OrchestratorConfig

logger = logging.getLogger(__name__)


class SearchAdapter(Protocol):
    async def search(
        self,
        query: str,
        max_results: int | None = None,
        depth: str = "basic",
        include_domains: list[str] | None = None,
        exclude_domains: list[str] | None = None,
    ) -> Any: ...


class RetrievalAdapter(Protocol):
    async def retrieve(self, query: str) -> list[str]: ...


def register_builtin_tools(
    registry: ToolRegistry,
    *,
    search_client: SearchAdapter,
    retrieval_client: RetrievalAdapter,
    config: OrchestratorConfig | None = None,
) -> None:
    """Register the default tool set offered to the selection model.

    Tools:
    - `search`: web search; announces the call before it runs.
    - `vedic_rag`: passage retrieval over the Vedas and the Gita; only
      reports its final result.
    """

    config = config or OrchestratorConfig()

    async def _search(parameters: ParameterBag, model: str) -> ToolOutput:
        max_results = parameters.max_results
        if max_results is None:
            max_results = config.max_results_for(model)
        logger.info("Executing search query=%r max_results=%d", parameters.query, max_results)
        results = await search_client.search(
            parameters.query or "",
            max_results,
            "basic",
            parameters.include_domains or [],
            parameters.exclude_domains or [],
        )
        return ToolOutput(
            payload=results,
            message=f"Search tool result: {json.dumps(results, ensure_ascii=False)}",
        )

    async def _vedic_rag(parameters: ParameterBag, model: str) -> ToolOutput:
        del model  # retrieval size is fixed by the service.
        logger.info("Executing vedic_rag query=%r", parameters.query)
        texts = await retrieval_client.retrieve(parameters.query or "")
        return ToolOutput(
            payload=texts,
            message=f"Vedic RAG result:\n{format_chunks(texts)}",
        )

    registry.register(
        ToolSpec(
            name="search",
            label="Search",
            description="Search the web for current or general information.",
            handler=_search,
            announce_call=True,
            tags=["web"],
        )
    )
    registry.register(
        ToolSpec(
            name="vedic_rag",
            label="Vedic RAG",
            description="use for any questions related to the Vedas and the Bhagavad Gita",
            handler=_vedic_rag,
            tags=["retrieval", "rag"],
        )
    )


def format_chunks(texts: list[str]) -> str:
    return "\n\n".join(f"Chunk {i}:\n{text}" for i, text in enumerate(texts, start=1))
