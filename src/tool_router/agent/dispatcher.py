"""Runs the selected tool and normalizes its output."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from tool_router.agent.extractor import Extraction, ToolInvocation
from tool_router.agent.registry import ToolRegistry
from tool_router.streaming.sink import AnnotationSink
from tool_router.types import AnnotationRecord, ConversationMessage, ToolResult, ToolTrace

logger = logging.getLogger(__name__)


class DispatchState(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    CALLING = "calling"
    RESULTED = "resulted"
    SKIPPED = "skipped"


@dataclass(slots=True)
class DispatchOutcome:
    """Terminal state of one dispatch plus whatever it produced."""

    history: list[DispatchState] = field(default_factory=lambda: [DispatchState.IDLE])
    result: ToolResult | None = None
    trace: ToolTrace | None = None

    @property
    def state(self) -> DispatchState:
        return self.history[-1]

    def advance(self, state: DispatchState) -> None:
        self.history.append(state)


def new_tool_call_id() -> str:
    return f"call_{uuid.uuid4().hex[:16]}"


class ToolDispatcher:
    """Selects exactly one registered tool and runs it.

    State machine per invocation::

        IDLE -> SELECTED -> CALLING -> RESULTED
        IDLE -> SKIPPED

    Tool failures are not caught here; they abort the turn.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        id_factory: Callable[[], str] = new_tool_call_id,
    ) -> None:
        self.registry = registry
        self._id_factory = id_factory

    async def dispatch(
        self,
        extraction: Extraction,
        *,
        model: str,
        sink: AnnotationSink,
    ) -> DispatchOutcome:
        outcome = DispatchOutcome()
        if not isinstance(extraction, ToolInvocation):
            outcome.advance(DispatchState.SKIPPED)
            return outcome

        spec = self.registry.get(extraction.tool)
        if spec is None:
            # Models occasionally invent tool names.
            logger.warning("Ignoring unknown tool selected by model: %r", extraction.tool)
            outcome.advance(DispatchState.SKIPPED)
            return outcome

        outcome.advance(DispatchState.SELECTED)
        annotation = AnnotationRecord(
            state="call",
            tool_call_id=self._id_factory(),
            tool_name=spec.name,
            args=extraction.parameters.to_json(),
        )
        if spec.announce_call:
            sink.write_data(annotation)

        outcome.advance(DispatchState.CALLING)
        output, trace = await self.registry.execute(
            spec.name, extraction.parameters, model=model
        )
        logger.info("Tool %s finished in %.1f ms", spec.name, trace.latency_ms)

        resolved = annotation.resolve(output.serialized())
        sink.write_message_annotation(resolved)

        outcome.advance(DispatchState.RESULTED)
        outcome.result = ToolResult(
            annotation=resolved,
            message=ConversationMessage(role="assistant", content=output.message),
        )
        outcome.trace = trace
        return outcome
