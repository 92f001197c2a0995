"""Per-turn tool selection and execution."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date

from tool_router.agent.completion import CompletionService
from tool_router.agent.dispatcher import ToolDispatcher
from tool_router.agent.extractor import ParseFailure, ToolCallExtractor, ToolInvocation
from tool_router.agent.registry import ToolSpec
from tool_router.agent.schema import ParameterSchema, render_parameter_schema
from tool_router.agent.tag_parser import TagParser, XmlTagParser
from tool_router.config import OrchestratorConfig
from tool_router.obs.tracing import Timer, TraceStore
from tool_router.streaming.sink import AnnotationSink, NullAnnotationSink
from tool_router.types import AnnotationRecord, ConversationMessage, OrchestrationResult

logger = logging.getLogger(__name__)

ANSWER_INSTRUCTION = "Now answer the user question using the retrieved knowledge."

_SYSTEM_PROMPT = """
You are an intelligent assistant that analyzes conversations to select the most appropriate tools and their parameters.
You excel at understanding context to determine when and how to use available tools, including crafting effective search queries.
Current date: {current_date}

Do not include any other text in your response.
Respond in XML format with the following structure:
<tool_call>
  <tool>tool_name</tool>
  <parameters>
    <query>search query text</query>
    <max_results>number - {default_max_results} by default</max_results>
    <search_depth>basic or advanced</search_depth>
    <include_domains>domain1,domain2</include_domains>
    <exclude_domains>domain1,domain2</exclude_domains>
  </parameters>
</tool_call>

Available tools: {tool_list}

{parameter_sections}

If you don't need a tool, respond with <tool_call><tool></tool></tool_call>
""".strip()


def build_system_prompt(
    tools: Sequence[ToolSpec],
    schema: ParameterSchema,
    *,
    current_date: date,
    default_max_results: int,
) -> str:
    """Render the tool-selection prompt.

    Every tool shares the same parameter schema, so it is listed once per
    tool under the tool's label.
    """
    rendered_schema = render_parameter_schema(schema)
    tool_list = ", ".join(f"{spec.name} ({spec.description})" for spec in tools)
    parameter_sections = "\n\n".join(
        f"{spec.label} parameters:\n{rendered_schema}" for spec in tools
    )
    return _SYSTEM_PROMPT.format(
        current_date=current_date.isoformat(),
        default_max_results=default_max_results,
        tool_list=tool_list,
        parameter_sections=parameter_sections,
    )


class ToolCallOrchestrator:
    """Entry point deciding whether, and which, tool runs for a turn."""

    def __init__(
        self,
        *,
        completion_service: CompletionService,
        dispatcher: ToolDispatcher,
        parser: TagParser | None = None,
        extractor: ToolCallExtractor | None = None,
        config: OrchestratorConfig | None = None,
        trace_store: TraceStore | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.completion_service = completion_service
        self.dispatcher = dispatcher
        self.parser = parser or XmlTagParser()
        self.extractor = extractor or ToolCallExtractor()
        self.config = config or OrchestratorConfig()
        self.trace_store = trace_store
        self._today = today

    def system_prompt(self, model: str) -> str:
        return build_system_prompt(
            self.dispatcher.registry.specs(),
            self.extractor.schema,
            current_date=self._today(),
            default_max_results=self.config.max_results_for(model),
        )

    async def run(
        self,
        messages: Sequence[ConversationMessage],
        *,
        model: str,
        tool_mode: bool,
        sink: AnnotationSink | None = None,
    ) -> OrchestrationResult:
        """Run one turn of tool selection.

        Returns an empty result without calling the model when tool mode is
        off. Tool adapter failures propagate to the caller.
        """
        if not tool_mode:
            return OrchestrationResult()

        with Timer() as timer:
            text = await self.completion_service.complete(
                model=model,
                system=self.system_prompt(model),
                messages=messages,
            )
            logger.debug("Tool selection response: %s", text)

            extraction = self.extractor.extract(self.parser.parse(text))
            if isinstance(extraction, ParseFailure):
                logger.info("No tool call recovered from model output: %s", extraction.reason)
            elif not isinstance(extraction, ToolInvocation):
                logger.info("Model selected no tool")

            outcome = await self.dispatcher.dispatch(
                extraction, model=model, sink=sink or NullAnnotationSink()
            )

        annotations: list[AnnotationRecord] = []
        follow_up: list[ConversationMessage] = []
        if outcome.result is not None:
            annotations.append(outcome.result.annotation)
            follow_up.append(outcome.result.message)
        if follow_up:
            follow_up.append(ConversationMessage(role="user", content=ANSWER_INSTRUCTION))

        if self.trace_store is not None:
            self.trace_store.create_record(
                model=model,
                tool=extraction.tool if isinstance(extraction, ToolInvocation) else None,
                tool_traces=[outcome.trace] if outcome.trace is not None else [],
                annotation_count=len(annotations),
                message_count=len(follow_up),
                latency_ms=timer.elapsed_ms,
            )

        return OrchestrationResult(annotations=annotations or None, messages=follow_up)
