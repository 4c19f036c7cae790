"""Upload blueprint for demo images stored in R2."""

import time

from flask import Blueprint, current_app, jsonify, request
from flask.typing import ResponseReturnValue
from werkzeug.utils import secure_filename

from demoshelf_core.errors import BadRequest, ConfigError, UploadError
from demoshelf_core.extensions import limiter
from services.audit import log_action
from services.auth import Identity, token_required
from services.storage import get_storage

upload_bp = Blueprint("upload", __name__, url_prefix="/api")


def build_object_key(filename: str, now: float | None = None) -> str:
    """Build the storage key `uploads/<epoch ms>-<filename>`.

    Two uploads of the same name within one millisecond collide.
    """
    millis = int((time.time() if now is None else now) * 1000)
    safe_name = secure_filename(filename) or "image"
    return f"uploads/{millis}-{safe_name}"


@upload_bp.route("/upload-image", methods=["POST"])
@limiter.limit("60 per hour")
@token_required
def upload_image(identity: Identity) -> ResponseReturnValue:
    """Store the multipart `image` field and return its public URL."""
    file = request.files.get("image")
    if file is None or not file.filename:
        raise BadRequest("No image file provided")

    bucket = current_app.config.get("R2_BUCKET_NAME")
    if not bucket:
        raise ConfigError("R2 bucket name not configured")

    key = build_object_key(file.filename)
    body = file.read()
    content_type = file.mimetype or "application/octet-stream"

    current_app.logger.info(
        "Preparing upload: %s (%s, %d bytes) to bucket %s",
        file.filename,
        content_type,
        len(body),
        bucket,
    )

    try:
        storage = get_storage()
        storage.put_object(key, body, content_type)
    except Exception as e:
        current_app.logger.error("R2 upload failed: %s", e)
        log_action(
            "upload",
            "image",
            resource_id=key,
            user_id=identity.user_id,
            details={"error": str(e)},
            success=False,
        )
        raise UploadError("Upload to R2 failed", payload={"error": str(e)}) from e

    image_url = storage.public_url(key)
    log_action("upload", "image", resource_id=key, user_id=identity.user_id)
    current_app.logger.info("Image uploaded to R2: %s", image_url)

    return jsonify({"url": image_url})
