"""Storage of scoreboards in a SQLite database."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

_SCHEMA = """
CREATE TABLE IF NOT EXISTS scoreboards (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_COLUMNS = "id, name, created_at, updated_at"
_GET_ALL = f"SELECT {_COLUMNS} FROM scoreboards ORDER BY rowid"
_GET_BY_ID = f"SELECT {_COLUMNS} FROM scoreboards WHERE id = ?"
_CREATE = "INSERT INTO scoreboards (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)"
_UPDATE = "UPDATE scoreboards SET name = ?, updated_at = ? WHERE id = ?"
_DELETE = "DELETE FROM scoreboards WHERE id = ?"

_NO_ROWS = "no rows in result set"


@dataclass(frozen=True)
class Scoreboard:
    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UpdateParams:
    id: uuid.UUID
    name: str


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the scoreboards table if it does not exist yet."""
    connection.execute(_SCHEMA)
    connection.commit()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _to_scoreboard(row: tuple) -> Scoreboard:
    scoreboard_id, name, created_at, updated_at = row
    return Scoreboard(
        id=uuid.UUID(scoreboard_id),
        name=name,
        created_at=datetime.fromisoformat(created_at),
        updated_at=datetime.fromisoformat(updated_at),
    )


class Queries:
    """Scoreboard queries over a DB-API connection.

    With ``autocommit`` every write is committed at once; otherwise the
    caller owns the transaction.
    """

    def __init__(self, connection: sqlite3.Connection, *, autocommit: bool = True) -> None:
        self._connection = connection
        self._autocommit = autocommit

    def with_tx(self, connection: sqlite3.Connection) -> Queries:
        """Return queries that run inside the caller's transaction."""
        return Queries(connection, autocommit=False)

    def _commit(self) -> None:
        if self._autocommit:
            self._connection.commit()

    def _fetch_one(self, sql: str, params: tuple) -> Scoreboard:
        row = self._connection.execute(sql, params).fetchone()
        if row is None:
            raise LookupError(_NO_ROWS)
        return _to_scoreboard(row)

    def get_all(self) -> list[Scoreboard]:
        return [_to_scoreboard(row) for row in self._connection.execute(_GET_ALL)]

    def get_by_id(self, scoreboard_id: uuid.UUID) -> Scoreboard:
        return self._fetch_one(_GET_BY_ID, (str(scoreboard_id),))

    def create(self, name: str) -> Scoreboard:
        scoreboard_id = uuid.uuid4()
        stamp = _now().isoformat()
        self._connection.execute(_CREATE, (str(scoreboard_id), name, stamp, stamp))
        scoreboard = self._fetch_one(_GET_BY_ID, (str(scoreboard_id),))
        self._commit()
        return scoreboard

    def update(self, params: UpdateParams) -> Scoreboard:
        cursor = self._connection.execute(
            _UPDATE, (params.name, _now().isoformat(), str(params.id))
        )
        if cursor.rowcount == 0:
            raise LookupError(_NO_ROWS)
        scoreboard = self._fetch_one(_GET_BY_ID, (str(params.id),))
        self._commit()
        return scoreboard

    def delete(self, scoreboard_id: uuid.UUID) -> None:
        self._connection.execute(_DELETE, (str(scoreboard_id),))
        self._commit()