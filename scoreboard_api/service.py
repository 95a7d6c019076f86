"""Scoreboard operations with database errors translated."""

from __future__ import annotations

import logging
import sqlite3
import uuid

from scoreboard_api.queries import Queries, Scoreboard, UpdateParams

_log = logging.getLogger(__name__)

_DB_ERRORS = (sqlite3.Error, LookupError)


class DatabaseError(Exception):
    """A storage operation failed."""


class NotFoundError(DatabaseError):
    """The requested record does not exist."""


def wrap_db_error(err: BaseException, logger: logging.Logger, message: str) -> DatabaseError:
    """Log a storage error and return the application error describing it."""
    if isinstance(err, LookupError):
        wrapped: DatabaseError = NotFoundError(f"{message}: {err}")
        logger.warning("%s: %s", message, err)
    else:
        wrapped = DatabaseError(f"{message}: {err}")
        logger.error("%s: %s", message, err)
    wrapped.__cause__ = err
    return wrapped


class Service:
    """Scoreboard use cases backed by a database connection."""

    def __init__(self, connection: sqlite3.Connection, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _log
        self._queries = Queries(connection)

    def get_all(self) -> list[Scoreboard]:
        try:
            return self._queries.get_all()
        except _DB_ERRORS as err:
            raise wrap_db_error(err, self._logger, "failed to get all scoreboards") from err

    def get_by_id(self, scoreboard_id: uuid.UUID) -> Scoreboard:
        try:
            return self._queries.get_by_id(scoreboard_id)
        except _DB_ERRORS as err:
            raise wrap_db_error(err, self._logger, "failed to get scoreboard by id") from err

    def create(self, request) -> Scoreboard:
        try:
            return self._queries.create(request.name)
        except _DB_ERRORS as err:
            raise wrap_db_error(err, self._logger, "failed to create scoreboard") from err

    def update(self, scoreboard_id: uuid.UUID, request) -> Scoreboard:
        try:
            return self._queries.update(UpdateParams(id=scoreboard_id, name=request.name))
        except _DB_ERRORS as err:
            raise wrap_db_error(err, self._logger, "failed to update scoreboard") from err

    def delete(self, scoreboard_id: uuid.UUID) -> None:
        try:
            self._queries.delete(scoreboard_id)
        except _DB_ERRORS as err:
            raise wrap_db_error(err, self._logger, "failed to delete scoreboard") from err