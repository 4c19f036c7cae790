"""Serializers for database rows."""

from .demo import demo_to_dict  # noqa: F401
from .user import user_to_dict  # noqa: F401
