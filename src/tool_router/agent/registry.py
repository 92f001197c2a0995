"""Tool registry built on Pydantic v2 models."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tool_router.agent.schema import ParameterBag
from tool_router.obs.tracing import Timer
from tool_router.types import ToolTrace


@dataclass(slots=True, frozen=True)
class ToolOutput:
    """Raw adapter output plus the assistant-facing rendering of it."""

    payload: Any
    message: str

    def serialized(self) -> str:
        return json.dumps(self.payload, ensure_ascii=False)


ToolHandler = Callable[[ParameterBag, str], Awaitable[ToolOutput]]


class ToolSpec(BaseModel):
    """Declarative tool specification for registration and dispatch.

    `announce_call` tools get a `call`-state annotation before the handler
    runs; the others only report their final result.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    label: str
    description: str
    handler: ToolHandler
    announce_call: bool = False
    tags: list[str] = Field(default_factory=list)

    async def invoke(self, parameters: ParameterBag, *, model: str) -> ToolOutput:
        return await self.handler(parameters, model)


class ToolRegistry:
    """Stores tool specs by name."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    async def execute(
        self, name: str, parameters: ParameterBag, *, model: str
    ) -> tuple[ToolOutput, ToolTrace]:
        """Run a tool and time it. Handler exceptions propagate unchanged."""
        spec = self._tools.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")

        with Timer() as timer:
            output = await spec.invoke(parameters, model=model)

        trace = ToolTrace(
            name=spec.name,
            input_payload=parameters.model_dump(exclude_none=True),
            output_preview=output.message[:320],
            latency_ms=timer.elapsed_ms,
        )
        return output, trace
