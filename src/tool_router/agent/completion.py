"""Completion service used to let the model choose a tool."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from langchain.chat_models import init_chat_model
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from tool_router.types import ConversationMessage

_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        MessagesPlaceholder(variable_name="messages", optional=True),
    ]
)


class CompletionService(Protocol):
    """Opaque text-completion contract."""

    async def complete(
        self,
        *,
        model: str,
        system: str,
        messages: Sequence[ConversationMessage],
    ) -> str:
        """Return the model's free-text reply."""


class LangChainCompletionService:
    """Runs one completion through a LangChain chat model.

    `model` identifiers use the `provider:model` form understood by
    `init_chat_model` (for example `openai:gpt-4o-mini`).
    """

    def __init__(self, model_factory: Callable[[str], Any] | None = None) -> None:
        self._model_factory = model_factory or init_chat_model

    async def complete(
        self,
        *,
        model: str,
        system: str,
        messages: Sequence[ConversationMessage],
    ) -> str:
        chain = _PROMPT | self._model_factory(model)
        response = await chain.ainvoke(
            {
                "system_prompt": system,
                "messages": [(message.role, message.content) for message in messages],
            }
        )
        return _message_text(response)


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                parts.append(str(item["text"]))
            elif isinstance(item, str):
                parts.append(item)
        return "".join(parts)
    return str(content)
