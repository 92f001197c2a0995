"""Web search client for a Tavily-compatible search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from tool_router.config import SearchServiceConfig
from tool_router.errors import MissingCredentialsError, SearchServiceError

logger = logging.getLogger(__name__)


class SearchClient:
    """Client for the web search provider."""

    def __init__(
        self,
        config: SearchServiceConfig | None = None,
        *,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or SearchServiceConfig()
        self._http = http

    async def search(
        self,
        query: str,
        max_results: int | None = None,
        depth: str = "basic",
        include_domains: list[str] | None = None,
        exclude_domains: list[str] | None = None,
    ) -> dict[str, Any]:
        """Perform a web search.

        Args:
            query: Search query string
            max_results: Maximum number of results, provider default when None
            depth: "basic" or "advanced"
            include_domains: Only return results from these domains
            exclude_domains: Never return results from these domains

        Returns:
            Dict with the query and a list of results with title, url, content, score
        """
        if self.config.api_key is None:
            raise MissingCredentialsError("Search service API key is not configured")

        body: dict[str, Any] = {
            "api_key": self.config.api_key.get_secret_value(),
            "query": query,
            "search_depth": depth,
            "include_domains": include_domains or [],
            "exclude_domains": exclude_domains or [],
        }
        if max_results is not None:
            body["max_results"] = max_results

        if self._http is not None:
            response = await self._http.post(self.config.endpoint, json=body)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as http:
                response = await http.post(self.config.endpoint, json=body)

        if not response.is_success:
            logger.warning(
                "Search request failed: %d %s", response.status_code, response.reason_phrase
            )
            raise SearchServiceError(
                f"Search API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        data = response.json()
        return {
            "query": query,
            "results": [
                {
                    "title": r.get("title", ""),
                    "url": r.get("url", ""),
                    "content": r.get("content", ""),
                    "score": r.get("score"),
                }
                for r in data.get("results", [])
            ],
        }
