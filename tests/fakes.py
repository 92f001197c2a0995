from __future__ import annotations

from typing import Any


class FakeCompletion:
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[dict[str, Any]] = []

    async def complete(self, *, model: str, system: str, messages: Any) -> str:
        self.calls.append({"model": model, "system": system, "messages": list(messages)})
        return self.text


class FakeSearch:
    def __init__(self, results: Any = None, error: Exception | None = None) -> None:
        self.results = results if results is not None else {"query": "", "results": []}
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    async def search(
        self,
        query: str,
        max_results: int | None = None,
        depth: str = "basic",
        include_domains: list[str] | None = None,
        exclude_domains: list[str] | None = None,
    ) -> Any:
        self.calls.append((query, max_results, depth, include_domains, exclude_domains))
        if self.error is not None:
            raise self.error
        return self.results


class FakeRetrieval:
    def __init__(self, texts: list[str] | None = None, error: Exception | None = None) -> None:
        self.texts = texts or []
        self.error = error
        self.queries: list[str] = []

    async def retrieve(self, query: str) -> list[str]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.texts
