"""Unauthenticated utility routes."""

from flask import Blueprint, jsonify
from flask.typing import ResponseReturnValue

from demoshelf_core.extensions import limiter

public_bp = Blueprint("public", __name__, url_prefix="/api")


@public_bp.route("/test")
@limiter.exempt
def health() -> ResponseReturnValue:
    """Liveness check."""
    return jsonify({"message": "API is working!"})
