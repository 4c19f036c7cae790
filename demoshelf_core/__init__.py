"""Core application factory and setup for demoshelf.

Exposes the `create_app` factory used by both the CLI entrypoint and tests.
"""

import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from database import init_app as init_db
from services.audit import audit_logger
from services.security import api_headers
from services.storage import StorageClient
from services.storage import init_app as init_storage

from .config import get_config
from .errors import register_error_handlers
from .extensions import limiter


def create_app(
    test_config: dict | None = None, storage: StorageClient | None = None
) -> Flask:
    """Application factory.

    Args:
        test_config: Optional overrides to apply when testing.
        storage: Object storage client to use instead of the R2 client
            built from configuration.

    Returns:
        A configured `Flask` application instance.
    """
    # Blueprints import from this package
    from blueprints import auth_bp, demos_bp, public_bp, upload_bp  # noqa: PLC0415

    instance_path = (test_config or {}).get("INSTANCE_PATH")
    app = Flask(__name__, instance_path=instance_path)

    # Configuration
    config_obj = get_config()
    app.config.from_object(config_obj)
    if test_config is None:
        # Validate production settings
        if hasattr(config_obj, "validate"):
            config_obj.validate()
    else:
        app.config.update(test_config)

    # Ensure instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)
    db_dir = os.path.dirname(app.config["DATABASE"])
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    # Extensions
    init_db(app)
    init_storage(app, storage)
    limiter.init_app(app)
    audit_logger.init_app(app)
    api_headers.init_app(app)

    # Reverse proxy (intentional replacement of wsgi_app with wrapped middleware)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)  # type: ignore[invalid-assignment]

    # Blueprints
    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(demos_bp)
    app.register_blueprint(upload_bp)

    # Errors
    register_error_handlers(app)

    return app
