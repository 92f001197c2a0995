"""Tool router package."""

from .config import OrchestratorConfig, RetrievalServiceConfig, SearchServiceConfig

__all__ = ["OrchestratorConfig", "RetrievalServiceConfig", "SearchServiceConfig"]
