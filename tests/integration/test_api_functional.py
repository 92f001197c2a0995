from datetime import date

from fastapi.testclient import TestClient

from tool_router.agent.dispatcher import ToolDispatcher
from tool_router.agent.orchestrator import ToolCallOrchestrator
from tool_router.agent.registry import ToolRegistry
from tool_router.agent.tools import register_builtin_tools
from tool_router.errors import SearchServiceError

from fakes import FakeCompletion, FakeRetrieval, FakeSearch

_SEARCH_TEXT = (
    "<tool_call><tool>search</tool><parameters><query>ancient temples</query>"
    "</parameters></tool_call>"
)


def _install(monkeypatch, completion, search) -> None:
    from tool_router.api import main

    registry = ToolRegistry()
    register_builtin_tools(registry, search_client=search, retrieval_client=FakeRetrieval())
    orchestrator = ToolCallOrchestrator(
        completion_service=completion,
        dispatcher=ToolDispatcher(registry),
        trace_store=main._trace_store,
        today=lambda: date(2024, 3, 1),
    )
    monkeypatch.setattr(main, "_orchestrator", orchestrator)


def test_api_tool_call_trace_metrics(monkeypatch) -> None:
    from tool_router.api.main import app

    search = FakeSearch(results={"query": "ancient temples", "results": []})
    _install(monkeypatch, FakeCompletion(_SEARCH_TEXT), search)
    client = TestClient(app)

    assert client.get("/health").json()["tools"] == ["search", "vedic_rag"]

    resp = client.post(
        "/tool-call",
        json={
            "messages": [{"role": "user", "content": "Tell me about ancient temples"}],
            "model": "ollama:llama3.2",
            "search_mode": True,
        },
    )
    assert resp.status_code == 200
    payload = resp.json()
    assert search.calls == [("ancient temples", 5, "basic", [], [])]

    (live,) = payload["live_annotations"]
    (annotation,) = payload["annotations"]
    assert live["state"] == "call"
    assert "result" not in live
    assert annotation["role"] == "data"
    assert annotation["content"]["type"] == "tool_call"
    assert annotation["content"]["data"]["state"] == "result"
    assert annotation["content"]["data"]["toolCallId"] == live["toolCallId"]
    assert [m["role"] for m in payload["messages"]] == ["assistant", "user"]

    traces = client.get("/traces").json()["items"]
    assert traces[-1]["tool"] == "search"
    detail = client.get(f"/traces/{traces[-1]['trace_id']}")
    assert detail.status_code == 200
    assert client.get("/traces/missing").status_code == 404
    assert client.get("/traces", params={"limit": 0}).json()["items"] == []

    from tool_router.api import main

    assert client.get("/health").json()["trace_count"] == len(main._trace_store)

    metrics = client.get("/metrics").json()
    assert metrics["total_turns"] >= 1
    assert metrics["tool_usage"]["search"] >= 1


def test_api_search_mode_off_returns_null_annotations(monkeypatch) -> None:
    from tool_router.api.main import app

    completion = FakeCompletion(_SEARCH_TEXT)
    _install(monkeypatch, completion, FakeSearch())

    resp = TestClient(app).post(
        "/tool-call",
        json={
            "messages": [{"role": "user", "content": "hi"}],
            "model": "openai:gpt-4o-mini",
            "search_mode": False,
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {"annotations": None, "messages": [], "live_annotations": []}
    assert completion.calls == []


def test_api_maps_tool_service_failure_to_502(monkeypatch) -> None:
    from tool_router.api.main import app

    _install(
        monkeypatch,
        FakeCompletion(_SEARCH_TEXT),
        FakeSearch(error=SearchServiceError("Search API error: 503", status_code=503)),
    )

    resp = TestClient(app).post(
        "/tool-call",
        json={"messages": [{"role": "user", "content": "hi"}], "model": "openai:gpt-4o-mini"},
    )

    assert resp.status_code == 502
    assert "503" in resp.json()["detail"]
