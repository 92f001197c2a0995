"""Configuration models for the tool router."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class OrchestratorConfig(BaseModel):
    """Configures tool selection defaults."""

    default_max_results: int = Field(default=20, ge=1)
    local_max_results: int = Field(default=5, ge=1)
    local_model_markers: tuple[str, ...] = ("ollama",)

    def max_results_for(self, model: str) -> int:
        """Smaller result sets for local models with short context windows."""
        if any(marker in (model or "") for marker in self.local_model_markers):
            return self.local_max_results
        return self.default_max_results


class SearchServiceConfig(BaseModel):
    """Configures the web search provider."""

    endpoint: str = "https://api.tavily.com/search"
    api_key: SecretStr | None = None
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class RetrievalServiceConfig(BaseModel):
    """Configures the passage retrieval provider."""

    endpoint: str = "https://api.ragie.ai/retrievals"
    api_key: SecretStr | None = None
    timeout_seconds: float = Field(default=30.0, gt=0.0)
