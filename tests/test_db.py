"""Tests for the migration runner and the transaction scope."""

import sqlite3

import pytest

from restroom_finder_api.app.core import db
from restroom_finder_api.app.core.db import init_db, transaction


def test_ratings_are_stored_as_integers(user_id, restroom_id):
    with transaction() as conn:
        conn.execute(
            "INSERT INTO reviews (user_id, restroom_id, review_content, rating) VALUES (?, ?, 'ok', 4)",
            (user_id, restroom_id),
        )
        row = conn.execute("SELECT typeof(rating) AS kind FROM reviews").fetchone()

    assert row["kind"] == "integer"


def test_real_ratings_are_converted_on_upgrade(tmp_path, monkeypatch):
    monkeypatch.setattr(db.settings, "database_url", str(tmp_path / "old.db"))
    monkeypatch.setattr(db, "MIGRATIONS", db.MIGRATIONS[:3])
    init_db()
    with transaction() as conn:
        conn.execute("INSERT INTO users (email, nickname, role_id) VALUES ('old@example.com', 'old', 2)")
        conn.execute("INSERT INTO restrooms (name) VALUES ('old')")
        conn.execute("INSERT INTO reviews (user_id, restroom_id, review_content, rating) VALUES (1, 1, 'ok', 3.0)")

    monkeypatch.undo()
    monkeypatch.setattr(db.settings, "database_url", str(tmp_path / "old.db"))
    init_db()

    with transaction() as conn:
        row = conn.execute("SELECT rating, typeof(rating) AS kind FROM reviews").fetchone()
        version = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()["version"]
    assert (row["rating"], row["kind"]) == (3, "integer")
    assert version == db.MIGRATIONS[-1][0]


def test_init_db_is_idempotent():
    init_db()
    init_db()

    with transaction() as conn:
        roles = [row["name"] for row in conn.execute("SELECT name FROM roles ORDER BY id")]
    assert roles == ["admin", "user"]


def test_transaction_rolls_back_on_error(restroom_id):
    with pytest.raises(sqlite3.IntegrityError):
        with transaction() as conn:
            conn.execute("UPDATE restrooms SET name = 'renamed' WHERE id = ?", (restroom_id,))
            conn.execute("INSERT INTO reviews (user_id, restroom_id, review_content, rating) VALUES (1, 1, 'x', 9)")

    with transaction() as conn:
        name = conn.execute("SELECT name FROM restrooms WHERE id = ?", (restroom_id,)).fetchone()["name"]
    assert name == "Station restroom"
