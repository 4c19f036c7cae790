"""Audit logging for account and demo actions.

Writes one JSON line per action to `<instance>/audit.log`.
"""

import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

from flask import Flask, current_app, has_request_context, request


class AuditLogger:
    """Centralized audit logging for security relevant actions."""

    def __init__(self, app: Flask | None = None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        """Attach a file-backed audit logger to the app."""
        os.makedirs(app.instance_path, exist_ok=True)
        audit_log_path = os.path.join(app.instance_path, "audit.log")

        audit_logger = logging.getLogger("demoshelf.audit")
        audit_logger.setLevel(logging.INFO)
        audit_logger.propagate = False

        # One audit file per process: the most recently created app wins
        for old in list(audit_logger.handlers):
            audit_logger.removeHandler(old)
            old.close()

        handler = logging.FileHandler(audit_log_path)
        handler.setLevel(logging.INFO)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        audit_logger.addHandler(handler)

        app.extensions["demoshelf.audit"] = audit_logger

    def log_action(
        self,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
        success: bool = True,
    ):
        """Log an action.

        Args:
            action: What happened (e.g. 'signup', 'login', 'create', 'delete')
            resource_type: Type of resource (e.g. 'user', 'demo', 'image')
            resource_id: ID of the resource, if any
            user_id: Authenticated user performing the action
            details: Additional details
            success: Whether the action succeeded
        """
        try:
            entry = {
                "timestamp": datetime.now(UTC).isoformat(),
                "user_id": user_id or "anonymous",
                "ip_address": request.remote_addr if has_request_context() else None,
                "action": action,
                "resource_type": resource_type,
                "resource_id": resource_id,
                "success": success,
                "details": details or {},
            }

            logger = current_app.extensions.get("demoshelf.audit")
            if isinstance(logger, logging.Logger):
                message = json.dumps(entry, separators=(",", ":"))
                if success:
                    logger.info(message)
                else:
                    logger.warning(message)

        except Exception as e:
            # Audit failures must not fail the request
            current_app.logger.warning(f"Audit logging failed: {e}")


audit_logger = AuditLogger()


def log_action(
    action: str,
    resource_type: str,
    resource_id: str | None = None,
    user_id: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
):
    """Convenience wrapper around the global audit logger."""
    audit_logger.log_action(
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        user_id=user_id,
        details=details,
        success=success,
    )


def read_audit_log(limit: int = 100) -> list[dict]:
    """Return the most recent audit entries, newest first."""
    audit_log_path = os.path.join(current_app.instance_path, "audit.log")
    if not os.path.exists(audit_log_path):
        return []

    with open(audit_log_path, encoding="utf8") as f:
        lines = f.readlines()

    entries = []
    for line in lines[-limit:]:
        parts = line.strip().split(" - ", 2)
        if len(parts) < 3:
            continue
        try:
            entries.append(json.loads(parts[2]))
        except json.JSONDecodeError:
            continue

    return list(reversed(entries))
