"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Role = Literal["system", "user", "assistant"]


@dataclass(slots=True, frozen=True)
class ConversationMessage:
    """One chat message exchanged with the completion service."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class AnnotationRecord(BaseModel):
    """Side-channel record describing a tool call for progressive rendering.

    Serialized with the camelCase keys the chat transport expects
    (`toolCallId`, `toolName`). `result` only exists once `state` is
    `"result"`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["tool_call"] = "tool_call"
    state: Literal["call", "result"]
    tool_call_id: str = Field(alias="toolCallId")
    tool_name: str = Field(alias="toolName")
    args: str
    result: str | None = None

    @model_validator(mode="after")
    def _result_only_when_resolved(self) -> "AnnotationRecord":
        if self.state == "call" and self.result is not None:
            raise ValueError("call-state annotations cannot carry a result")
        return self

    def resolve(self, result: str) -> "AnnotationRecord":
        """Return the `result`-state successor sharing this record's id."""
        return AnnotationRecord(
            state="result",
            tool_call_id=self.tool_call_id,
            tool_name=self.tool_name,
            args=self.args,
            result=result,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def as_data_message(self) -> dict[str, Any]:
        data = self.to_payload()
        del data["type"]
        return {"role": "data", "content": {"type": self.type, "data": data}}


@dataclass(slots=True, frozen=True)
class ToolResult:
    """Normalized output of one executed tool."""

    annotation: AnnotationRecord
    message: ConversationMessage


@dataclass(slots=True)
class OrchestrationResult:
    """Externally visible outcome of one turn.

    `annotations` is None when nothing was recorded, which consumers treat
    differently from an empty list.
    """

    annotations: list[AnnotationRecord] | None = None
    messages: list[ConversationMessage] = field(default_factory=list)


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
