"""Per-request trace id shared by the middleware and the log filter."""

import contextvars
import uuid

trace_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trace_id", default=None
)


def new_trace_id() -> str:
    """Generate a trace id and bind it to the current context."""
    trace_id = uuid.uuid4().hex
    trace_id_context.set(trace_id)
    return trace_id
