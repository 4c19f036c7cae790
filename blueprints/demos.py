"""Demo CRUD routes.

All routes are scoped to the authenticated user: another user's demo is
reported as not found, never as forbidden.
"""

from flask import Blueprint, jsonify, request
from flask.typing import ResponseReturnValue

from database import (
    delete_demo,
    get_demo_for_user,
    get_demos_for_user,
    increment_demo_views,
    insert_demo,
    update_demo,
)
from demoshelf_core.errors import NotFound, ValidationError
from demoshelf_core.models import demo_to_dict
from services.audit import log_action
from services.auth import Identity, token_required
from services.validation import validate_demo

demos_bp = Blueprint("demos", __name__, url_prefix="/api/demos")


def _owned_demo_or_404(demo_id: str, identity: Identity):
    demo = get_demo_for_user(demo_id, identity.user_id)
    if demo is None:
        raise NotFound("Demo not found")
    return demo


@demos_bp.route("", methods=["POST"])
@token_required
def create_demo(identity: Identity) -> ResponseReturnValue:
    """Create a demo owned by the caller."""
    data, error = validate_demo(request.get_json(silent=True))
    if data is None:
        raise ValidationError(error)

    demo_id = insert_demo(
        user_id=identity.user_id,
        title=data.title,
        description=data.description,
        demo_type=data.type,
        content=data.content,
        thumbnail=data.thumbnail,
        url=data.url,
        is_public=data.is_public,
    )
    log_action("create", "demo", resource_id=demo_id, user_id=identity.user_id)

    demo = get_demo_for_user(demo_id, identity.user_id)
    return jsonify(demo_to_dict(demo)), 201


@demos_bp.route("", methods=["GET"])
@token_required
def list_demos(identity: Identity) -> ResponseReturnValue:
    """List the caller's demos, newest first."""
    demos = get_demos_for_user(identity.user_id)
    return jsonify([demo_to_dict(d) for d in demos])


@demos_bp.route("/<demo_id>", methods=["GET"])
@token_required
def get_demo(demo_id: str, identity: Identity) -> ResponseReturnValue:
    """Return a demo and count the view.

    The response carries the counter as it was before this view.
    """
    demo = _owned_demo_or_404(demo_id, identity)
    increment_demo_views(demo_id, identity.user_id)
    return jsonify(demo_to_dict(demo))


@demos_bp.route("/<demo_id>", methods=["PUT"])
@token_required
def replace_demo(demo_id: str, identity: Identity) -> ResponseReturnValue:
    """Overwrite all mutable fields of a demo."""
    data, error = validate_demo(request.get_json(silent=True))
    if data is None:
        raise ValidationError(error)

    _owned_demo_or_404(demo_id, identity)

    update_demo(
        demo_id,
        identity.user_id,
        title=data.title,
        description=data.description,
        demo_type=data.type,
        content=data.content,
        thumbnail=data.thumbnail,
        url=data.url,
        is_public=data.is_public,
    )
    log_action("update", "demo", resource_id=demo_id, user_id=identity.user_id)

    return jsonify(demo_to_dict(get_demo_for_user(demo_id, identity.user_id)))


@demos_bp.route("/<demo_id>", methods=["DELETE"])
@token_required
def remove_demo(demo_id: str, identity: Identity) -> ResponseReturnValue:
    """Delete a demo."""
    _owned_demo_or_404(demo_id, identity)
    delete_demo(demo_id, identity.user_id)
    log_action("delete", "demo", resource_id=demo_id, user_id=identity.user_id)
    return jsonify({"message": "Demo deleted successfully"})
