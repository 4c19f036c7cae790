"""Input validation for API request bodies.

Each validator takes the decoded JSON body and returns a tuple of
(result, error_message). Exactly one of the two is None.
"""

import re
from dataclasses import dataclass
from typing import Any

# Deliberately loose: one "@", no whitespace, a dot in the domain part.
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class SignupInput:
    name: str
    email: str
    password: str
    confirm_password: str


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class DemoInput:
    title: str
    description: str
    type: str
    content: str
    thumbnail: str | None = None
    url: str | None = None
    is_public: bool = False


def is_valid_email(email: Any) -> bool:
    """Return True if `email` is a string that looks like an email address."""
    return isinstance(email, str) and EMAIL_RE.match(email) is not None


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _optional_str(value: Any) -> bool:
    return value is None or isinstance(value, str)


def validate_signup(payload: Any) -> tuple[SignupInput | None, str | None]:
    """Validate a signup body.

    Args:
        payload: Decoded JSON body (may be anything)

    Returns:
        Tuple of (SignupInput, None) or (None, error_message)
    """
    if not isinstance(payload, dict):
        return None, "Invalid input data"

    name = payload.get("name")
    email = payload.get("email")
    password = payload.get("password")
    confirm_password = payload.get("confirmPassword")

    if not _is_str(name) or len(name) < MIN_NAME_LENGTH:
        return None, "Invalid input data"
    if not is_valid_email(email):
        return None, "Invalid input data"
    if not _is_str(password):
        return None, "Invalid input data"

    if password != confirm_password:
        return None, "Passwords do not match"

    return SignupInput(name, email, password, confirm_password), None


def validate_login(payload: Any) -> tuple[LoginInput | None, str | None]:
    """Validate a login body."""
    if not isinstance(payload, dict):
        return None, "Invalid email or password format"

    email = payload.get("email")
    password = payload.get("password")

    if not is_valid_email(email) or not _is_str(password):
        return None, "Invalid email or password format"

    return LoginInput(email, password), None


def validate_demo(payload: Any) -> tuple[DemoInput | None, str | None]:
    """Validate a demo body used for both create and update.

    `title` must be non-empty; `description`, `type` and `content` must be
    strings; `thumbnail` and `url` are optional strings (null allowed);
    `isPublic` is an optional boolean defaulting to False.
    """
    if not isinstance(payload, dict):
        return None, "Invalid demo data"

    title = payload.get("title")
    if not _is_str(title) or not title:
        return None, "Invalid demo data"

    for field in ("description", "type", "content"):
        if not _is_str(payload.get(field)):
            return None, "Invalid demo data"

    thumbnail = payload.get("thumbnail")
    url = payload.get("url")
    if not _optional_str(thumbnail) or not _optional_str(url):
        return None, "Invalid demo data"

    is_public = payload.get("isPublic")
    if is_public is None:
        is_public = False
    elif not isinstance(is_public, bool):
        return None, "Invalid demo data"

    return (
        DemoInput(
            title=title,
            description=payload["description"],
            type=payload["type"],
            content=payload["content"],
            thumbnail=thumbnail,
            url=url,
            is_public=is_public,
        ),
        None,
    )
