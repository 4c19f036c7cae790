"""User representation returned by the API."""

import sqlite3
from typing import Any


def user_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    """Serialize a user row for `/api/auth/me`. Never includes the password hash."""
    return {
        "id": row["id"],
        "email": row["email"],
        "name": row["name"],
        "createdAt": row["created_at"],
    }
