"""Interpret a tag map as a typed tool invocation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from tool_router.agent.schema import (
    SEARCH_PARAMETER_SCHEMA,
    FieldKind,
    ParameterBag,
    ParameterField,
    ParameterSchema,
)
from tool_router.agent.tag_parser import TagMap

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^[+-]?\d+")


@dataclass(slots=True, frozen=True)
class Skip:
    """The model explicitly chose no tool."""


@dataclass(slots=True, frozen=True)
class ParseFailure:
    """Nothing usable could be recovered from the model response."""

    reason: str


@dataclass(slots=True, frozen=True)
class ToolInvocation:
    """A request to run one named tool. `tool` is never empty."""

    tool: str
    parameters: ParameterBag


Extraction = Skip | ParseFailure | ToolInvocation


class ToolCallExtractor:
    """Coerces raw tag values according to a parameter schema.

    Coercion is lenient: a value that does not fit its declared kind is
    dropped rather than reported, so the tool falls back to its default.
    """

    def __init__(self, schema: ParameterSchema | None = None) -> None:
        self.schema = schema if schema is not None else SEARCH_PARAMETER_SCHEMA

    def extract(self, tags: TagMap) -> Extraction:
        if not tags:
            return ParseFailure(reason="no <tool_call> structure found")

        tool = tags.get("tool", "")
        if not tool:
            return Skip()

        values: dict[str, Any] = {}
        for name, spec in self.schema.items():
            if name not in tags:
                continue
            coerced = _coerce(tags[name], spec)
            if coerced is None:
                logger.debug("Dropping parameter %s with unusable value %r", name, tags[name])
                continue
            values[name] = coerced

        return ToolInvocation(tool=tool, parameters=ParameterBag(**values))


def _coerce(raw: str, spec: ParameterField) -> Any:
    if spec.kind is FieldKind.INTEGER:
        match = _LEADING_INT.match(raw.strip())
        if match is None:
            return None
        try:
            return int(match.group(0))
        except ValueError:
            # Past the interpreter's int-string digit limit.
            return None
    if spec.kind is FieldKind.STRING_LIST:
        return [part.strip() for part in raw.split(",") if part.strip()]
    if spec.kind is FieldKind.CHOICE:
        return raw if raw in spec.choices else None
    return raw
