import sqlite3
import uuid

import pytest

from scoreboard_api.queries import Queries, Scoreboard, UpdateParams, create_schema


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def queries(connection):
    return Queries(connection)


def test_empty_table_gives_empty_list(queries):
    assert queries.get_all() == []


def test_create_then_get(queries):
    created = queries.create("finals")
    assert created.name == "finals"
    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None
    assert queries.get_by_id(created.id) == created


def test_get_all_keeps_insertion_order(queries):
    first = queries.create("one")
    second = queries.create("two")
    assert queries.get_all() == [first, second]


def test_get_missing_raises_lookup_error(queries):
    with pytest.raises(LookupError):
        queries.get_by_id(uuid.uuid4())


def test_update_changes_name_and_timestamp(queries):
    created = queries.create("old")
    updated = queries.update(UpdateParams(id=created.id, name="new"))
    assert updated.id == created.id
    assert updated.name == "new"
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert queries.get_by_id(created.id) == updated


def test_update_missing_raises_lookup_error(queries):
    with pytest.raises(LookupError):
        queries.update(UpdateParams(id=uuid.uuid4(), name="x"))


def test_delete_removes_only_target(queries):
    keep = queries.create("keep")
    drop = queries.create("drop")
    queries.delete(drop.id)
    assert queries.get_all() == [keep]
    with pytest.raises(LookupError):
        queries.get_by_id(drop.id)


def test_delete_missing_is_silent(queries):
    keep = queries.create("keep")
    queries.delete(uuid.uuid4())
    assert queries.get_all() == [keep]


def test_writes_are_committed(tmp_path):
    path = tmp_path / "scores.db"
    conn = sqlite3.connect(path)
    create_schema(conn)
    created = Queries(conn).create("persisted")
    conn.close()
    other = sqlite3.connect(path)
    assert Queries(other).get_all() == [created]
    other.close()


def test_with_tx_leaves_transaction_to_caller(connection, queries):
    tx = queries.with_tx(connection)
    created = tx.create("pending")
    assert tx.get_by_id(created.id).name == "pending"
    connection.rollback()
    assert queries.get_all() == []


def test_create_schema_is_idempotent(connection, queries):
    created = queries.create("stay")
    create_schema(connection)
    assert queries.get_all() == [created]


def test_scoreboard_is_immutable(queries):
    created = queries.create("frozen")
    with pytest.raises(AttributeError):
        created.name = "changed"
    assert isinstance(created, Scoreboard) and created.name == "frozen"