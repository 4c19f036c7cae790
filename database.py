"""
Database helper functions for demoshelf.

Follows the recommended Flask pattern for SQLite connections using the
application context global `g` and teardown callbacks. Each application
context gets its own connection, opened on first use and closed on teardown.
"""

import logging
import os
import sqlite3
import uuid

import click
from flask import Flask, current_app, g
from flask.cli import with_appcontext

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema.sql")


def get_db() -> sqlite3.Connection:
    """Get database connection, creating it if it doesn't exist."""
    if "db" not in g:
        g.db = sqlite3.connect(
            current_app.config["DATABASE"], detect_types=sqlite3.PARSE_DECLTYPES
        )
        g.db.row_factory = sqlite3.Row
        g.db.execute("PRAGMA foreign_keys = ON")
        _create_schema_if_missing(g.db)

    return g.db


def close_db(_e: BaseException | None = None) -> None:
    """Close database connection if it exists."""
    db = g.pop("db", None)

    if db is not None:
        db.close()


def init_db() -> None:
    """Drop and recreate all tables from schema.sql."""
    db = get_db()

    with open(SCHEMA_PATH, encoding="utf8") as f:
        db.executescript(f.read())


@click.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Clear the existing data and create new tables."""
    init_db()
    click.echo("Initialized the database.")


def init_app(app: Flask) -> None:
    """Register database functions with the app."""
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)


def _create_schema_if_missing(db: sqlite3.Connection) -> None:
    """Initialize an empty database with the full schema.

    Idempotent; runs on each new connection.
    """
    cursor = db.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='users'"
    )
    if cursor.fetchone() is not None:
        return

    logger.info("Empty database detected, creating schema")
    with open(SCHEMA_PATH, encoding="utf8") as f:
        db.executescript(f.read())
    db.commit()


def _new_id() -> str:
    return str(uuid.uuid4())


# User functions


def insert_user(email: str, password_hash: str, name: str) -> str:
    """Insert a new user.

    Raises:
        sqlite3.IntegrityError: If the email is already registered.

    Returns:
        The id of the new user.
    """
    user_id = _new_id()
    db = get_db()
    db.execute(
        "INSERT INTO users (id, email, password_hash, name) VALUES (?, ?, ?, ?)",
        (user_id, email, password_hash, name),
    )
    db.commit()
    return user_id


def get_user_by_id(user_id: str) -> sqlite3.Row | None:
    """Get user details by user ID."""
    db = get_db()
    return db.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()


def get_user_by_email(email: str) -> sqlite3.Row | None:
    """Get user details by email address."""
    db = get_db()
    return db.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()


def email_exists(email: str) -> bool:
    """Check if an email address is already registered."""
    return get_user_by_email(email) is not None


# Demo functions
#
# Every lookup and mutation is scoped by owner: a demo that exists but belongs
# to another user is indistinguishable from a missing one.


def insert_demo(
    user_id: str,
    title: str,
    description: str,
    demo_type: str,
    content: str,
    thumbnail: str | None = None,
    url: str | None = None,
    is_public: bool = False,
) -> str:
    """Insert a new demo owned by `user_id` with a zero view counter.

    Returns:
        The id of the new demo.
    """
    demo_id = _new_id()
    db = get_db()
    db.execute(
        """INSERT INTO demos
           (id, title, description, type, content, thumbnail, url, is_public, views, user_id)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, 0, ?)""",
        (
            demo_id,
            title,
            description,
            demo_type,
            content,
            thumbnail,
            url,
            1 if is_public else 0,
            user_id,
        ),
    )
    db.commit()
    return demo_id


def get_demos_for_user(user_id: str) -> list[sqlite3.Row]:
    """Get all demos owned by a user, newest first."""
    db = get_db()
    return db.execute(
        "SELECT * FROM demos WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
        (user_id,),
    ).fetchall()


def get_demo_for_user(demo_id: str, user_id: str) -> sqlite3.Row | None:
    """Get a demo by ID if it is owned by the given user."""
    db = get_db()
    return db.execute(
        "SELECT * FROM demos WHERE id = ? AND user_id = ?", (demo_id, user_id)
    ).fetchone()


def increment_demo_views(demo_id: str, user_id: str) -> None:
    """Add one to the view counter of an owned demo."""
    db = get_db()
    db.execute(
        "UPDATE demos SET views = views + 1 WHERE id = ? AND user_id = ?",
        (demo_id, user_id),
    )
    db.commit()


def update_demo(
    demo_id: str,
    user_id: str,
    title: str,
    description: str,
    demo_type: str,
    content: str,
    thumbnail: str | None = None,
    url: str | None = None,
    is_public: bool = False,
) -> None:
    """Overwrite every mutable field of an owned demo."""
    db = get_db()
    db.execute(
        """UPDATE demos
           SET title = ?, description = ?, type = ?, content = ?,
               thumbnail = ?, url = ?, is_public = ?
           WHERE id = ? AND user_id = ?""",
        (
            title,
            description,
            demo_type,
            content,
            thumbnail,
            url,
            1 if is_public else 0,
            demo_id,
            user_id,
        ),
    )
    db.commit()


def delete_demo(demo_id: str, user_id: str) -> None:
    """Delete an owned demo."""
    db = get_db()
    db.execute("DELETE FROM demos WHERE id = ? AND user_id = ?", (demo_id, user_id))
    db.commit()
