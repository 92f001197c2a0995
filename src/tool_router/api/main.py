"""FastAPI entrypoint for tool-call and trace endpoints."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, SecretStr

from tool_router.agent.completion import LangChainCompletionService
from tool_router.agent.dispatcher import ToolDispatcher
from tool_router.agent.orchestrator import ToolCallOrchestrator
from tool_router.agent.registry import ToolRegistry
from tool_router.agent.tools import register_builtin_tools
from tool_router.clients import RetrievalClient, SearchClient
from tool_router.config import OrchestratorConfig, RetrievalServiceConfig, SearchServiceConfig
from tool_router.errors import ToolServiceError
from tool_router.obs.tracing import TraceStore
from tool_router.streaming.sink import CollectingAnnotationSink
from tool_router.types import ConversationMessage

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def _secret(name: str) -> SecretStr | None:
    value = os.getenv(name)
    return SecretStr(value) if value else None


def _search_config() -> SearchServiceConfig:
    config = SearchServiceConfig(api_key=_secret("TAVILY_API_KEY"))
    if endpoint := os.getenv("TAVILY_SEARCH_URL"):
        config = config.model_copy(update={"endpoint": endpoint})
    return config


def _retrieval_config() -> RetrievalServiceConfig:
    config = RetrievalServiceConfig(api_key=_secret("RAGIE_API_KEY"))
    if endpoint := os.getenv("RAGIE_RETRIEVAL_URL"):
        config = config.model_copy(update={"endpoint": endpoint})
    return config


class MessageIn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ToolCallRequest(BaseModel):
    messages: list[MessageIn] = Field(min_length=1)
    model: str = Field(min_length=1)
    search_mode: bool = True


app = FastAPI(title="Tool Router", version="0.1.0")

_search_settings = _search_config()
_retrieval_settings = _retrieval_config()
_orchestrator_config = OrchestratorConfig()

_registry = ToolRegistry()
register_builtin_tools(
    _registry,
    search_client=SearchClient(_search_settings),
    retrieval_client=RetrievalClient(_retrieval_settings),
    config=_orchestrator_config,
)

_trace_store = TraceStore()
_orchestrator = ToolCallOrchestrator(
    completion_service=LangChainCompletionService(),
    dispatcher=ToolDispatcher(_registry),
    config=_orchestrator_config,
    trace_store=_trace_store,
)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "search_configured": _search_settings.api_key is not None,
        "retrieval_configured": _retrieval_settings.api_key is not None,
        "tools": [spec.name for spec in _registry.specs()],
        "trace_count": len(_trace_store),
    }


@app.post("/tool-call")
async def tool_call(request: ToolCallRequest) -> dict[str, Any]:
    sink = CollectingAnnotationSink()
    history = [ConversationMessage(role=m.role, content=m.content) for m in request.messages]
    try:
        result = await _orchestrator.run(
            history,
            model=request.model,
            tool_mode=request.search_mode,
            sink=sink,
        )
    except ToolServiceError as exc:
        logger.warning("Tool service failure: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Tool call turn failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {
        "annotations": (
            [record.as_data_message() for record in result.annotations]
            if result.annotations is not None
            else None
        ),
        "messages": [message.to_dict() for message in result.messages],
        "live_annotations": [record.to_payload() for record in sink.live],
    }


@app.get("/traces")
def traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _trace_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/traces/{trace_id}")
def trace_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _trace_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _trace_store.summary()
