"""Annotation transport."""

from tool_router.streaming.sink import AnnotationSink, CollectingAnnotationSink, NullAnnotationSink

__all__ = ["AnnotationSink", "CollectingAnnotationSink", "NullAnnotationSink"]
