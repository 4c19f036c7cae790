"""Bearer token authentication.

Tokens are signed, timestamped `{"userId": ...}` payloads produced with
itsdangerous. There is no server-side session store: a token is valid for as
long as its signature checks out and it is younger than TOKEN_MAX_AGE.
"""

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from flask import current_app, request
from itsdangerous import BadSignature, URLSafeTimedSerializer

from demoshelf_core.errors import InvalidToken, Unauthenticated

TOKEN_SALT = "demoshelf.auth"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, handed to protected views."""

    user_id: str


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user_id: str) -> str:
    """Sign a session token for the given user."""
    return _serializer().dumps({"userId": user_id})


def verify_token(token: str) -> Identity:
    """Verify a session token and return the identity it carries.

    Raises:
        InvalidToken: If the signature is wrong, the token expired, or the
            payload is not a token we issued.
    """
    try:
        data = _serializer().loads(
            token, max_age=current_app.config.get("TOKEN_MAX_AGE")
        )
    except BadSignature as e:
        current_app.logger.info("Token verification failed: %s", e)
        raise InvalidToken() from e

    user_id = data.get("userId") if isinstance(data, dict) else None
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken()
    return Identity(user_id=user_id)


def bearer_token(header: str | None) -> str:
    """Extract the token from an Authorization header value.

    Raises:
        Unauthenticated: If the header is missing, is not a Bearer header, or
            carries an empty token.
    """
    if not header or not header.startswith("Bearer "):
        raise Unauthenticated()
    token = header[len("Bearer ") :].strip()
    if not token:
        raise Unauthenticated()
    return token


def token_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Require a valid bearer token and pass `identity` to the view."""

    @functools.wraps(view)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        token = bearer_token(request.headers.get("Authorization"))
        kwargs["identity"] = verify_token(token)
        return view(*args, **kwargs)

    return wrapped
