"""Request tracing and crash recovery around handlers."""

from __future__ import annotations

import functools
import json
import logging
import time
import uuid
from collections.abc import Callable
from http import HTTPStatus

from werkzeug.exceptions import HTTPException
from werkzeug.wrappers import Request, Response

from scoreboard_api.errors import Problem

_log = logging.getLogger(__name__)

TRACE_ID_KEY = "scoreboard_api.trace_id"
"""WSGI environ key under which the request's trace id is stored."""

HandlerFunc = Callable[..., Response]
MiddlewareFunc = Callable[[HandlerFunc], HandlerFunc]


def chain(handler: HandlerFunc, *args: MiddlewareFunc) -> HandlerFunc:
    """Wrap a handler so that the first middleware given runs outermost."""
    for middleware in reversed(args):
        handler = middleware(handler)
    return handler


class Middleware:
    """Tracing and recovery middleware sharing one logger."""

    def __init__(self, logger: logging.Logger | None = None, debug: bool = False) -> None:
        self._logger = logger or _log
        self._debug = debug

    def trace(self, handler: HandlerFunc) -> HandlerFunc:
        """Tag the request with a trace id and log how it was served."""

        @functools.wraps(handler)
        def traced(request: Request, **kwargs: object) -> Response:
            trace_id = uuid.uuid4().hex
            request.environ[TRACE_ID_KEY] = trace_id
            started = time.perf_counter()
            try:
                response = handler(request, **kwargs)
            except Exception:
                elapsed = (time.perf_counter() - started) * 1000
                self._logger.warning(
                    "%s %s failed after %.1f ms trace_id=%s",
                    request.method, request.path, elapsed, trace_id,
                )
                raise
            elapsed = (time.perf_counter() - started) * 1000
            self._logger.info(
                "%s %s -> %d in %.1f ms trace_id=%s",
                request.method, request.path, response.status_code, elapsed, trace_id,
            )
            return response

        return traced

    def recover(self, handler: HandlerFunc) -> HandlerFunc:
        """Turn an unhandled exception into a 500 problem response."""

        @functools.wraps(handler)
        def recovered(request: Request, **kwargs: object) -> Response:
            try:
                return handler(request, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                self._logger.error(
                    "Recovered from unhandled error in %s %s", request.method, request.path,
                    exc_info=exc,
                )
                status = HTTPStatus.INTERNAL_SERVER_ERROR
                detail = f"{type(exc).__name__}: {exc}" if self._debug else "An unexpected error occurred"
                problem = Problem(title=status.phrase, status=int(status), detail=detail)
                return Response(
                    json.dumps(problem.to_dict()),
                    status=problem.status,
                    mimetype="application/problem+json",
                )

        return recovered