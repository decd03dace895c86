"""
Middleware to add trace_id to each request.

The trace_id ties together every log line written while serving one HTTP
request, including the account notifications emitted by the member service.
"""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libraryman.core.logging import logger
from libraryman.core.trace_context import new_trace_id, trace_id_context


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique trace_id to each request.

    An incoming X-Trace-ID header is reused so that callers can correlate
    their own logs; otherwise a fresh id is generated. The id is returned
    in the X-Trace-ID response header.
    """

    header_name = "X-Trace-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Processes the request by adding trace_id.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            Response with X-Trace-ID header
        """
        incoming = request.headers.get(self.header_name)
        if incoming:
            trace_id_context.set(incoming)
            trace_id = incoming
        else:
            trace_id = new_trace_id()

        logger.info(f"Request started: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            response.headers[self.header_name] = trace_id
            logger.info(
                f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",  # noqa: E501
            )
            return response

        except Exception:
            logger.exception(f"Request failed: {request.method} {request.url.path}")
            raise

        finally:
            # Clean up context
            trace_id_context.set(None)


__all__ = ["TraceIDMiddleware"]
