import json
import logging
from http import HTTPStatus

import pytest
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Request, Response

from scoreboard_api.middleware import TRACE_ID_KEY, Middleware, chain


def make_request(path="/api/scoreboards", method="GET"):
    return Request(EnvironBuilder(method=method, path=path).get_environ())


def ok_handler(request, **kwargs):
    return Response("ok")


def failing_handler(request, **kwargs):
    raise RuntimeError("boom")


def test_chain_runs_first_middleware_outermost():
    calls = []

    def tag(name):
        def middleware(handler):
            def wrapped(request, **kwargs):
                calls.append(name)
                return handler(request, **kwargs)

            return wrapped

        return middleware

    handler = chain(ok_handler, tag("outer"), tag("inner"))
    response = handler(make_request())
    assert calls == ["outer", "inner"]
    assert response.get_data(as_text=True) == "ok"


def test_chain_without_middleware_returns_handler():
    assert chain(ok_handler) is ok_handler


def test_recover_converts_exception_to_problem():
    handler = Middleware().recover(failing_handler)
    response = handler(make_request())
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.mimetype == "application/problem+json"
    payload = json.loads(response.get_data(as_text=True))
    assert payload["status"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert "boom" not in payload["detail"]


def test_recover_in_debug_exposes_detail():
    handler = Middleware(debug=True).recover(failing_handler)
    payload = json.loads(handler(make_request()).get_data(as_text=True))
    assert "boom" in payload["detail"]


def test_recover_passes_response_through():
    expected = Response("fine")

    def handler(request, **kwargs):
        return expected

    assert Middleware().recover(handler)(make_request()) is expected


def test_recover_forwards_keyword_arguments():
    def handler(request, id):
        return Response(id)

    response = Middleware().recover(handler)(make_request(), id="abc")
    assert response.get_data(as_text=True) == "abc"


def test_trace_records_trace_id():
    request = make_request()
    response = Middleware().trace(ok_handler)(request)
    trace_id = request.environ[TRACE_ID_KEY]
    assert response.get_data(as_text=True) == "ok"
    assert len(trace_id) == 32
    assert int(trace_id, 16) >= 0


def test_trace_ids_differ_between_requests():
    traced = Middleware().trace(ok_handler)
    first, second = make_request(), make_request()
    traced(first)
    traced(second)
    assert first.environ[TRACE_ID_KEY] != second.environ[TRACE_ID_KEY]
    assert len(second.environ[TRACE_ID_KEY]) == len(first.environ[TRACE_ID_KEY])


def test_trace_logs_request(caplog):
    logger = logging.getLogger("test.trace")
    with caplog.at_level(logging.INFO, logger="test.trace"):
        Middleware(logger).trace(ok_handler)(make_request("/api/scoreboards/x"))
    messages = [record.getMessage() for record in caplog.records]
    assert any("GET /api/scoreboards/x" in message for message in messages)


def test_trace_reraises():
    with pytest.raises(RuntimeError, match="boom"):
        Middleware().trace(failing_handler)(make_request())


def test_recover_around_trace():
    middleware = Middleware()
    handler = chain(failing_handler, middleware.recover, middleware.trace)
    assert handler(make_request()).status_code == HTTPStatus.INTERNAL_SERVER_ERROR