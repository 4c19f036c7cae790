"""Authentication routes: signup, login and the current user.

Passwords are stored as Werkzeug hashes and never returned by the API.
"""

import sqlite3

from flask import Blueprint, current_app, jsonify, request
from flask.typing import ResponseReturnValue
from werkzeug.security import check_password_hash, generate_password_hash

from database import email_exists, get_user_by_email, get_user_by_id, insert_user
from demoshelf_core.errors import AuthFailed, Conflict, NotFound, ValidationError
from demoshelf_core.extensions import limiter
from demoshelf_core.models import user_to_dict
from services.audit import log_action
from services.auth import Identity, issue_token, token_required
from services.validation import validate_login, validate_signup

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/signup", methods=["POST"])
@limiter.limit("20 per hour")
def signup() -> ResponseReturnValue:
    """Create an account and return a session token."""
    data, error = validate_signup(request.get_json(silent=True))
    if data is None:
        raise ValidationError(error, status_code=411)

    if email_exists(data.email):
        log_action("signup", "user", details={"email": data.email}, success=False)
        raise Conflict()

    try:
        user_id = insert_user(
            email=data.email,
            password_hash=generate_password_hash(data.password),
            name=data.name,
        )
    except sqlite3.IntegrityError as e:
        # Lost a race with a concurrent signup for the same email
        raise Conflict() from e

    log_action("signup", "user", resource_id=user_id, user_id=user_id)
    return jsonify({"message": "User created successfully", "token": issue_token(user_id)})


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def login() -> ResponseReturnValue:
    """Exchange email and password for a session token."""
    data, error = validate_login(request.get_json(silent=True))
    if data is None:
        raise ValidationError(error)

    user = get_user_by_email(data.email)
    if user is None or not check_password_hash(user["password_hash"], data.password):
        current_app.logger.info(
            "Login failed: %s", "unknown email" if user is None else "password mismatch"
        )
        log_action("login", "user", details={"email": data.email}, success=False)
        raise AuthFailed()

    log_action("login", "user", resource_id=user["id"], user_id=user["id"])
    return jsonify({"token": issue_token(user["id"])})


@auth_bp.route("/me")
@token_required
def me(identity: Identity) -> ResponseReturnValue:
    """Return the authenticated user."""
    user = get_user_by_id(identity.user_id)
    if user is None:
        raise NotFound("User not found")
    return jsonify({"user": user_to_dict(user)})
