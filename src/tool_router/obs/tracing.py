"""Per-turn tracing and latency accounting."""

from __future__ import annotations

import time
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone

from tool_router.types import ToolTrace


@dataclass(slots=True)
class TurnRecord:
    trace_id: str
    timestamp_utc: str
    model: str
    tool: str | None
    tool_traces: list[ToolTrace]
    annotation_count: int
    message_count: int
    latency_ms: float


class TraceStore:
    """In-memory trace storage for API-level observability."""

    def __init__(self) -> None:
        self._records: dict[str, TurnRecord] = {}

    def create_record(
        self,
        *,
        model: str,
        tool: str | None,
        tool_traces: list[ToolTrace],
        annotation_count: int,
        message_count: int,
        latency_ms: float,
    ) -> TurnRecord:
        trace_id = str(uuid.uuid4())
        record = TurnRecord(
            trace_id=trace_id,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            model=model,
            tool=tool,
            tool_traces=tool_traces,
            annotation_count=annotation_count,
            message_count=message_count,
            latency_ms=latency_ms,
        )
        self._records[trace_id] = record
        return record

    def get(self, trace_id: str) -> TurnRecord:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def __len__(self) -> int:
        return len(self._records)

    def list_recent(self, limit: int = 20) -> list[TurnRecord]:
        if limit <= 0:
            return []
        return list(self._records.values())[-limit:]

    def summary(self) -> dict[str, object]:
        """Aggregate turn metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_turns": 0,
                "tool_turns": 0,
                "tool_usage": {},
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        usage = Counter(trace.name for record in records for trace in record.tool_traces)

        return {
            "total_turns": total,
            "tool_turns": sum(1 for record in records if record.tool_traces),
            "tool_usage": dict(usage),
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
        }


class Timer:
    """Simple context timer used around completion and tool calls."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
