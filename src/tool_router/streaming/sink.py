"""Sinks receiving annotation records while a turn runs."""

from __future__ import annotations

from typing import Literal, Protocol

from tool_router.types import AnnotationRecord

Channel = Literal["data", "message"]


class AnnotationSink(Protocol):
    """Transport contract for tool-call annotations."""

    def write_data(self, record: AnnotationRecord) -> None:
        """Live, progressive annotation (in-flight indicators)."""

    def write_message_annotation(self, record: AnnotationRecord) -> None:
        """Durable annotation attached to the returned messages."""


class NullAnnotationSink:
    """Discards everything; used when the caller does not stream."""

    def write_data(self, record: AnnotationRecord) -> None:
        pass

    def write_message_annotation(self, record: AnnotationRecord) -> None:
        pass


class CollectingAnnotationSink:
    """Keeps every write in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple[Channel, AnnotationRecord]] = []

    def write_data(self, record: AnnotationRecord) -> None:
        self.events.append(("data", record))

    def write_message_annotation(self, record: AnnotationRecord) -> None:
        self.events.append(("message", record))

    @property
    def live(self) -> list[AnnotationRecord]:
        return [record for channel, record in self.events if channel == "data"]

    @property
    def durable(self) -> list[AnnotationRecord]:
        return [record for channel, record in self.events if channel == "message"]
