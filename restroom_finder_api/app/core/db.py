"""
SQLite database integration and simple migration system.

This module provides a connection factory (``get_connection``), a
transaction scope used by every service method (``transaction``) and
the migration runner applied on application start (``init_db``).

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)

ROLE_ADMIN = 1
ROLE_USER = 2

# Largest value an SQLite INTEGER column holds; ids above it are rejected
# before they reach a query.
MAX_ID = 2**63 - 1


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths in ``settings.database_url`` are used as is; relative
    ones are resolved against the project root.  The setting is read on
    every call so it can be swapped at runtime.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # restroom_finder_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    Foreign keys are switched on for the lifetime of the connection;
    SQLite leaves them off by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """Run a block of work as one transaction.

    Commits when the block exits normally, rolls back when it raises and
    always closes the connection.  The exception is re-raised unchanged.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except sqlite3.Error:
        logger.exception("Database error, transaction rolled back")
        conn.rollback()
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS roles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            nickname TEXT NOT NULL,
            password TEXT,
            role_id INTEGER NOT NULL DEFAULT 2,
            point INTEGER NOT NULL DEFAULT 0 CHECK (point >= 0),
            disabled INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(role_id) REFERENCES roles(id)
        );

        CREATE TABLE IF NOT EXISTS restrooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            address TEXT,
            latitude REAL,
            longitude REAL,
            average_rating REAL NOT NULL DEFAULT 0,
            status INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS reviews (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            restroom_id INTEGER NOT NULL,
            review_content TEXT NOT NULL,
            rating REAL NOT NULL CHECK (rating >= 0 AND rating <= 5),
            status INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id),
            FOREIGN KEY(restroom_id) REFERENCES restrooms(id)
        );

        CREATE TABLE IF NOT EXISTS searches (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            search_word TEXT NOT NULL,
            name TEXT,
            road_address TEXT,
            lot_address TEXT,
            latitude REAL,
            longitude REAL,
            clicked INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS orders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            purchase_token TEXT NOT NULL UNIQUE,
            product_id TEXT NOT NULL,
            point INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices on the foreign keys used by list queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_reviews_restroom_id ON reviews(restroom_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_user_id ON reviews(user_id);
        CREATE INDEX IF NOT EXISTS idx_searches_user_id ON searches(user_id);
        CREATE INDEX IF NOT EXISTS idx_orders_user_id ON orders(user_id);
        """,
    ),
    # Migration 3: click order for the recent-search lookup
    (
        3,
        """
        ALTER TABLE searches ADD COLUMN click_seq INTEGER NOT NULL DEFAULT 0;
        """,
    ),
    # Migration 4: whole-star ratings stored as INTEGER
    (
        4,
        """
        CREATE TABLE reviews_v4 (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            restroom_id INTEGER NOT NULL,
            review_content TEXT NOT NULL,
            rating INTEGER NOT NULL CHECK (rating >= 0 AND rating <= 5),
            status INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id),
            FOREIGN KEY(restroom_id) REFERENCES restrooms(id)
        );
        INSERT INTO reviews_v4 (id, user_id, restroom_id, review_content, rating, status, created_at, updated_at)
            SELECT id, user_id, restroom_id, review_content, CAST(ROUND(rating) AS INTEGER), status,
                   created_at, updated_at
            FROM reviews;
        DROP TABLE reviews;
        ALTER TABLE reviews_v4 RENAME TO reviews;
        CREATE INDEX IF NOT EXISTS idx_reviews_restroom_id ON reviews(restroom_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_user_id ON reviews(user_id);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if needed, applies every entry of
    ``MIGRATIONS`` newer than the stored version and makes sure the
    ``admin`` and ``user`` roles exist.  To change the schema, append a
    migration with the next version number.
    """
    with transaction() as conn:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version

        cursor.execute("INSERT OR IGNORE INTO roles (id, name) VALUES (?, 'admin')", (ROLE_ADMIN,))
        cursor.execute("INSERT OR IGNORE INTO roles (id, name) VALUES (?, 'user')", (ROLE_USER,))
