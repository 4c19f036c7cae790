"""Blueprint package for demoshelf routes.

Exports the registered blueprints to be imported by the application factory.
"""

from .auth import auth_bp  # noqa: F401
from .demos import demos_bp  # noqa: F401
from .public import public_bp  # noqa: F401
from .upload import upload_bp  # noqa: F401
