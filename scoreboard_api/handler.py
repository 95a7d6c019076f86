"""HTTP handlers for the scoreboard resource."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Protocol

from werkzeug.wrappers import Request, Response

from scoreboard_api.errors import Problem, error_handler
from scoreboard_api.identifiers import InvalidUUIDError, parse_uuid
from scoreboard_api.queries import Scoreboard
from scoreboard_api.service import NotFoundError
from scoreboard_api.validation import RULE_KEY, FieldRule, ValidationError, validate_struct

_log = logging.getLogger(__name__)

_NAME_RULE = {RULE_KEY: FieldRule(required=True, max=255)}

_JSON = "application/json"
_PROBLEM_JSON = "application/problem+json"


@dataclass(frozen=True)
class CreateRequest:
    name: str = field(default="", metadata=_NAME_RULE)


@dataclass(frozen=True)
class UpdateRequest:
    name: str = field(default="", metadata=_NAME_RULE)


@dataclass(frozen=True)
class ScoreboardResponse:
    id: str
    name: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


class Store(Protocol):
    def get_all(self) -> list[Scoreboard]: ...

    def get_by_id(self, scoreboard_id: uuid.UUID) -> Scoreboard: ...

    def create(self, request: CreateRequest) -> Scoreboard: ...

    def update(self, scoreboard_id: uuid.UUID, request: UpdateRequest) -> Scoreboard: ...

    def delete(self, scoreboard_id: uuid.UUID) -> None: ...


class _RequestBodyError(ValueError):
    """The request body could not be decoded."""


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    base = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    offset = moment.utcoffset()
    if not offset:
        return base + "Z"
    total = int(offset.total_seconds()) // 60
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total), 60)
    return f"{base}{sign}{hours:02d}:{minutes:02d}"


def generate_response(scoreboard: Scoreboard) -> ScoreboardResponse:
    """Build the public representation of a scoreboard."""
    return ScoreboardResponse(
        id=str(scoreboard.id),
        name=scoreboard.name,
        created_at=_rfc3339(scoreboard.created_at),
        updated_at=_rfc3339(scoreboard.updated_at),
    )


def _json_response(status: HTTPStatus, payload: object) -> Response:
    return Response(json.dumps(payload), status=int(status), mimetype=_JSON)


def _problem_response(problem: Problem) -> Response:
    return Response(json.dumps(problem.to_dict()), status=problem.status, mimetype=_PROBLEM_JSON)


def _to_problem(err: BaseException) -> Problem:
    mapped = error_handler(err)
    if mapped is not None:
        return mapped
    if isinstance(err, NotFoundError):
        status = HTTPStatus.NOT_FOUND
    elif isinstance(err, (ValidationError, InvalidUUIDError, _RequestBodyError)):
        status = HTTPStatus.BAD_REQUEST
    else:
        status = HTTPStatus.INTERNAL_SERVER_ERROR
        return Problem(title=status.phrase, status=int(status), detail="An unexpected error occurred")
    return Problem(title=status.phrase, status=int(status), detail=str(err))


def _parse_body(request: Request, model: type) -> object:
    try:
        payload = json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise _RequestBodyError(f"failed to decode request body: {exc}") from exc
    if not isinstance(payload, dict):
        raise _RequestBodyError("failed to decode request body: expected a JSON object")
    name = payload.get("name")
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise _RequestBodyError("failed to decode request body: 'name' must be a string")
    return validate_struct(model(name=name))


class Handler:
    """Scoreboard endpoints returning JSON responses."""

    def __init__(self, store: Store, logger: logging.Logger | None = None) -> None:
        self._store = store
        self._logger = logger or _log

    def _error(self, err: BaseException) -> Response:
        problem = _to_problem(err)
        if problem.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            self._logger.error("request failed: %s", err, exc_info=err)
        else:
            self._logger.warning("request rejected: %s", err)
        return _problem_response(problem)

    def get_all(self, request: Request) -> Response:
        try:
            scoreboards = self._store.get_all()
        except Exception as err:
            return self._error(err)
        payload = [generate_response(scoreboard).to_dict() for scoreboard in scoreboards]
        return _json_response(HTTPStatus.OK, payload)

    def get(self, request: Request, id: str) -> Response:
        try:
            scoreboard = self._store.get_by_id(parse_uuid(id))
        except Exception as err:
            return self._error(err)
        return _json_response(HTTPStatus.OK, generate_response(scoreboard).to_dict())

    def create(self, request: Request) -> Response:
        try:
            body = _parse_body(request, CreateRequest)
            scoreboard = self._store.create(body)
        except Exception as err:
            return self._error(err)
        self._logger.info("Scoreboard created: id=%s", scoreboard.id)
        return _json_response(HTTPStatus.OK, generate_response(scoreboard).to_dict())

    def update(self, request: Request, id: str) -> Response:
        try:
            scoreboard_id = parse_uuid(id)
            body = _parse_body(request, UpdateRequest)
            scoreboard = self._store.update(scoreboard_id, body)
        except Exception as err:
            return self._error(err)
        self._logger.info("Scoreboard updated: id=%s", scoreboard.id)
        return _json_response(HTTPStatus.OK, generate_response(scoreboard).to_dict())

    def delete(self, request: Request, id: str) -> Response:
        try:
            scoreboard_id = parse_uuid(id)
            self._store.delete(scoreboard_id)
        except Exception as err:
            return self._error(err)
        self._logger.info("Scoreboard deleted: id=%s", scoreboard_id)
        return Response(status=int(HTTPStatus.NO_CONTENT))