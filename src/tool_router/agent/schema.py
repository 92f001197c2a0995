"""Parameter schema shared by the tool-selection prompt and the extractor."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    STRING_LIST = "string_list"
    CHOICE = "choice"


class ParameterField(BaseModel):
    """Declared shape of one `<parameters>` entry."""

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    description: str
    required: bool = False
    choices: tuple[str, ...] = ()


ParameterSchema = Mapping[str, ParameterField]


class ParameterBag(BaseModel):
    """Typed tool parameters. A missing field means "use the default"."""

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    max_results: int | None = None
    search_depth: Literal["basic", "advanced"] | None = None
    include_domains: list[str] | None = None
    exclude_domains: list[str] | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


SEARCH_PARAMETER_SCHEMA: dict[str, ParameterField] = {
    "query": ParameterField(
        kind=FieldKind.STRING,
        required=True,
        description="The query to search for",
    ),
    "max_results": ParameterField(
        kind=FieldKind.INTEGER,
        description="The maximum number of results to return",
    ),
    "search_depth": ParameterField(
        kind=FieldKind.CHOICE,
        choices=("basic", "advanced"),
        description='The depth of the search. Allowed values are "basic" or "advanced"',
    ),
    "include_domains": ParameterField(
        kind=FieldKind.STRING_LIST,
        description=(
            "A list of domains to specifically include in the search results. "
            "Default is None, which includes all domains."
        ),
    ),
    "exclude_domains": ParameterField(
        kind=FieldKind.STRING_LIST,
        description=(
            "A list of domains to specifically exclude from the search results. "
            "Default is None, which doesn't exclude any domains."
        ),
    ),
}


def render_parameter_schema(schema: ParameterSchema) -> str:
    """Render the schema as the bulleted list embedded in the system prompt."""
    lines = []
    for name, spec in schema.items():
        optional = "" if spec.required else " (optional)"
        lines.append(f"- {name}{optional}: {spec.description}")
    return "\n".join(lines)
