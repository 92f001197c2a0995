"""Client for the passage retrieval service."""

from __future__ import annotations

import logging

import httpx

from tool_router.config import RetrievalServiceConfig
from tool_router.errors import MissingCredentialsError, RetrievalServiceError

logger = logging.getLogger(__name__)


class RetrievalClient:
    """Fetches scored text chunks for a query.

    Credentials come from the config object; nothing is read from the
    environment here. A missing key only fails when a retrieval is attempted.
    """

    def __init__(
        self,
        config: RetrievalServiceConfig | None = None,
        *,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or RetrievalServiceConfig()
        self._http = http

    async def retrieve(self, query: str) -> list[str]:
        """Return the text of every scored chunk, in ranking order.

        Raises:
            MissingCredentialsError: no API key is configured.
            RetrievalServiceError: the service answered with a non-2xx status.
        """
        if self.config.api_key is None:
            raise MissingCredentialsError("Retrieval service API key is not configured")

        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "authorization": f"Bearer {self.config.api_key.get_secret_value()}",
        }
        if self._http is not None:
            response = await self._http.post(
                self.config.endpoint, headers=headers, json={"query": query}
            )
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as http:
                response = await http.post(
                    self.config.endpoint, headers=headers, json={"query": query}
                )

        if not response.is_success:
            logger.warning(
                "Retrieval request failed: %d %s", response.status_code, response.reason_phrase
            )
            raise RetrievalServiceError(response.status_code, response.reason_phrase)

        data = response.json()
        if not isinstance(data, dict):
            raise RetrievalServiceError(response.status_code, "unexpected response body")
        return [str(chunk.get("text", "")) for chunk in data.get("scored_chunks", [])]
