"""Trace context shared between spans and log records."""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def get_trace_context() -> dict:
    """Return the current context, creating fresh ids on first use."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


def update_trace_context(**values: object) -> None:
    """Merge values (span_id, tool, ...) into the current context."""
    trace_context.set({**get_trace_context(), **values})
