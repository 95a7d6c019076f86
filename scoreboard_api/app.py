"""WSGI application and server entry point."""

from __future__ import annotations

import argparse
import json
import logging
import os
import signal
import sqlite3
import sys
import threading
from collections.abc import Iterable
from datetime import datetime
from http import HTTPStatus

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Map, Rule
from werkzeug.serving import make_server
from werkzeug.wrappers import Request, Response

from scoreboard_api.errors import Problem
from scoreboard_api.handler import Handler
from scoreboard_api.middleware import Middleware, chain
from scoreboard_api.queries import create_schema
from scoreboard_api.service import Service

APP_NAME = "scoreboard-api"
VERSION = "no-version"
BUILD_TIME = "no-build-time"
COMMIT_HASH = "no-commit-hash"

_SHUTDOWN_TIMEOUT = 5.0

_FAILURE_TEMPLATE = """
-----------------------------------------
Application Failed to Start
-----------------------------------------

# What's wrong?
{title}

# How to fix it?
{action}

"""

_ROUTES = Map([
    Rule("/api/scoreboards", methods=["GET"], endpoint="get_all"),
    Rule("/api/scoreboards", methods=["POST"], endpoint="create"),
    Rule("/api/scoreboards/<id>", methods=["GET"], endpoint="get"),
    Rule("/api/scoreboards/<id>", methods=["PUT"], endpoint="update"),
    Rule("/api/scoreboards/<id>", methods=["DELETE"], endpoint="delete"),
])


def early_application_failed(title: str, action: str) -> str:
    """Format a start-up failure with what went wrong and how to fix it."""
    return _FAILURE_TEMPLATE.format(title=title, action=action)


def _routing_problem(exc: HTTPException) -> Response:
    status = HTTPStatus(exc.code)
    problem = Problem(title=status.phrase, status=int(status), detail=exc.description or status.phrase)
    response = Response(
        json.dumps(problem.to_dict()), status=problem.status, mimetype="application/problem+json"
    )
    allowed = getattr(exc, "valid_methods", None)
    if allowed:
        response.headers["Allow"] = ", ".join(allowed)
    return response


class Application:
    """Routes scoreboard requests to their handlers."""

    def __init__(self, handler: Handler, middleware: Middleware) -> None:
        self._views = {
            rule.endpoint: chain(getattr(handler, rule.endpoint), middleware.recover, middleware.trace)
            for rule in _ROUTES.iter_rules()
        }

    def __call__(self, environ: dict, start_response) -> Iterable[bytes]:
        adapter = _ROUTES.bind_to_environ(environ)
        try:
            endpoint, arguments = adapter.match()
        except HTTPException as exc:
            if exc.code is None or exc.code < 400:
                return exc(environ, start_response)
            return _routing_problem(exc)(environ, start_response)
        response = self._views[endpoint](Request(environ), **arguments)
        return response(environ, start_response)


def create_app(handler: Handler, middleware: Middleware) -> Application:
    """Build the WSGI application serving the scoreboard API."""
    return Application(handler, middleware)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="scoreboard-api", description="Serve the scoreboard API.")
    parser.add_argument("--host", default=os.environ.get("HOST", "localhost"))
    parser.add_argument("--port", type=int, default=os.environ.get("PORT", "8080"))
    parser.add_argument(
        "--database",
        default=os.environ.get("DATABASE_URL", ""),
        help="path of the SQLite database file",
    )
    parser.add_argument("--debug", action="store_true", default=_env_flag("DEBUG"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the HTTP server until interrupted; return the exit status."""
    args = _parse_args(argv)
    app_name = os.environ.get("APP_NAME") or APP_NAME
    build_time = BUILD_TIME
    if build_time == "no-build-time":
        now = datetime.now().astimezone().isoformat(timespec="seconds")
        build_time = f"not provided (now: {now})"

    if not args.database:
        sys.stderr.write(early_application_failed(
            "Database URL is required",
            "Please set the DATABASE_URL environment variable or pass the --database option.",
        ))
        return 1

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    logger = logging.getLogger("scoreboard_api")
    logger.info(
        "app_name=%s version=%s build_time=%s commit_hash=%s",
        app_name, VERSION, build_time, COMMIT_HASH,
    )
    logger.info("Application initialization: debug=%s host=%s port=%s", args.debug, args.host, args.port)

    logger.info("Starting database migration...")
    try:
        connection = sqlite3.connect(args.database, check_same_thread=False)
        create_schema(connection)
    except sqlite3.Error as exc:
        logger.critical("Failed to run database migration: %s", exc)
        return 1

    handler = Handler(Service(connection, logger), logger)
    app = create_app(handler, Middleware(logger, args.debug))

    try:
        server = make_server(args.host, args.port, app, threaded=True)
    except OSError as exc:
        logger.critical("Fail to start server with error: %s", exc)
        connection.close()
        return 1

    stop_requested = threading.Event()

    def request_stop(signum, frame) -> None:
        logger.debug("Received signal %s", signum)
        stop_requested.set()

    previous = {
        signum: signal.signal(signum, request_stop)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    serving = threading.Thread(target=server.serve_forever, name="scoreboard-api-server", daemon=True)
    try:
        logger.info("Starting listening request: host=%s port=%s", args.host, args.port)
        serving.start()
        stop_requested.wait()
        logger.info("Shutting down gracefully...")
        server.shutdown()
        serving.join(_SHUTDOWN_TIMEOUT)
        if serving.is_alive():
            logger.error("Server forced to shutdown")
    finally:
        for signum, handler_before in previous.items():
            signal.signal(signum, handler_before)
        server.server_close()
        connection.close()
    logger.info("Successfully shutdown")
    return 0


if __name__ == "__main__":
    sys.exit(main())