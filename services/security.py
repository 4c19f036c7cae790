"""CORS and security headers middleware.

Adds CORS headers for the browser frontend, hardening headers for every
response, and an optional HTTPS redirect for production deployments.
"""

from flask import Flask, current_app, redirect, request

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type"


class ApiHeaders:
    """Middleware for adding CORS and security headers to responses."""

    def __init__(self, app: Flask | None = None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        """Initialize headers middleware."""
        app.after_request(self.add_headers)

        if app.config.get("FORCE_HTTPS"):
            app.before_request(self.force_https)

    @staticmethod
    def allowed_origin(origin: str | None) -> str | None:
        """Return the value for Access-Control-Allow-Origin, if any."""
        configured = str(current_app.config.get("CORS_ORIGINS", "*")).strip()
        if configured == "*":
            return "*"
        if not origin:
            return None
        allowed = {o.strip().rstrip("/") for o in configured.split(",") if o.strip()}
        return origin if origin.rstrip("/") in allowed else None

    def add_headers(self, response):
        """Add CORS and security headers to all responses."""
        allow_origin = self.allowed_origin(request.headers.get("Origin"))
        if allow_origin:
            response.headers["Access-Control-Allow-Origin"] = allow_origin
            response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
            response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
            if allow_origin != "*":
                response.headers.add("Vary", "Origin")

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.is_secure or request.headers.get("X-Forwarded-Proto") == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        # API responses carry user data and tokens
        if request.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"

        return response

    def force_https(self):
        """Redirect HTTP requests to HTTPS."""
        if (
            not request.is_secure
            and request.headers.get("X-Forwarded-Proto") != "https"
        ):
            if request.endpoint == "public.health":
                return None
            return redirect(request.url.replace("http://", "https://", 1), code=301)
        return None


api_headers = ApiHeaders()
