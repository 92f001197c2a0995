"""Recover a tag map from the tagged tool-call convention.

The model is asked to answer with::

    <tool_call>
      <tool>search</tool>
      <parameters>
        <query>...</query>
      </parameters>
    </tool_call>

Model output is unreliable, so the parser never raises: anything it cannot
make sense of simply does not show up in the returned mapping.
"""

from __future__ import annotations

import re
from typing import Protocol

TagMap = dict[str, str]

_TOOL_CALL_BLOCK = re.compile(r"<tool_call>(.*?)(?:</tool_call>|\Z)", re.DOTALL)
_PARAMETERS_BLOCK = re.compile(r"<parameters>(.*?)(?:</parameters>|\Z)", re.DOTALL)
# Tag bodies stop at the next "<", so unclosed tags cannot span the text.
_TOOL_TAG = re.compile(r"<tool>([^<]*)</tool>")
_ANY_TAG = re.compile(r"<([A-Za-z_][\w.-]*)>([^<]*)</\1>")

_STRUCTURAL_TAGS = frozenset({"tool_call", "tool", "parameters"})


class TagParser(Protocol):
    """Grammar-agnostic contract used by the orchestrator."""

    def parse(self, text: str) -> TagMap:
        """Return field name -> raw string for one model response."""


class XmlTagParser:
    """Parser for the `<tool_call>` XML-like convention.

    Tag names are case-sensitive, bodies are trimmed and the last occurrence
    of a repeated tag wins. Missing closing tags for `<tool_call>` and
    `<parameters>` extend the block to the end of the text.
    """

    def parse(self, text: str) -> TagMap:
        blocks = _TOOL_CALL_BLOCK.findall(text or "")
        if not blocks:
            return {}
        body = blocks[-1]

        tags: TagMap = {}
        tools = _TOOL_TAG.findall(body)
        if tools:
            tags["tool"] = tools[-1].strip()

        parameter_blocks = _PARAMETERS_BLOCK.findall(body)
        # Tolerate parameters written directly under <tool_call>.
        scope = parameter_blocks[-1] if parameter_blocks else body
        for name, value in _ANY_TAG.findall(scope):
            if name in _STRUCTURAL_TAGS:
                continue
            tags[name] = value.strip()
        return tags
