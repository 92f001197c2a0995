"""HTTP adapters for external tool services."""

from tool_router.clients.retrieval import RetrievalClient
from tool_router.clients.search import SearchClient

__all__ = ["RetrievalClient", "SearchClient"]
