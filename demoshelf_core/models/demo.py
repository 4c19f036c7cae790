"""Demo representation returned by the API."""

import sqlite3
from typing import Any


def demo_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    """Serialize a demo row using the camelCase field names clients expect."""
    return {
        "id": row["id"],
        "title": row["title"],
        "description": row["description"],
        "type": row["type"],
        "content": row["content"],
        "thumbnail": row["thumbnail"],
        "url": row["url"],
        "isPublic": bool(row["is_public"]),
        "views": row["views"],
        "userId": row["user_id"],
        "createdAt": row["created_at"],
    }
