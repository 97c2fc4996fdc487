"""Observability module: structured logging, Prometheus metrics and tracing."""

from mcp_docs_search.observability.context import get_trace_context, update_trace_context
from mcp_docs_search.observability.logging import JsonFormatter, configure_logging
from mcp_docs_search.observability.metrics import (
    INDEX_DOC_COUNT,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    track_latency,
)
from mcp_docs_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_DOC_COUNT",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "track_latency",
    "update_trace_context",
]
