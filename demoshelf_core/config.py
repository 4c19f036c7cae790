"""Configuration objects for different environments."""

import os

DEFAULT_SECRET_KEY = "dev-key-change-in-production"


def _parse_bool(val: str) -> bool:
    """Parse a string as boolean for env config."""
    return str(val).strip().lower() in ("1", "true", "yes", "on")


def _parse_max_age(val: str) -> int | None:
    """Parse token lifetime in seconds; empty or 0 means tokens never expire."""
    val = str(val).strip()
    if not val or val == "0":
        return None
    return int(val)


class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)
    DATABASE = os.path.join(
        os.environ.get("FLASK_INSTANCE_PATH", "instance"), "demoshelf.sqlite"
    )
    PORT = int(os.environ.get("PORT", "3002"))
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    # Session tokens, seconds (default one week)
    TOKEN_MAX_AGE = _parse_max_age(os.environ.get("TOKEN_MAX_AGE", "604800"))
    # Comma separated list, or "*" for any origin
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    FORCE_HTTPS = _parse_bool(os.environ.get("FORCE_HTTPS", "false"))
    # Cloudflare R2 (S3 compatible) object storage
    R2_ENDPOINT = os.environ.get("CLOUDFLARE_R2_ENDPOINT", "")
    R2_ACCESS_KEY_ID = os.environ.get("CLOUDFLARE_R2_ACCESS_KEY_ID", "")
    R2_SECRET_ACCESS_KEY = os.environ.get("CLOUDFLARE_R2_SECRET_ACCESS_KEY", "")
    R2_BUCKET_NAME = os.environ.get("CLOUDFLARE_R2_BUCKET_NAME", "")
    R2_PUBLIC_URL = os.environ.get("CLOUDFLARE_R2_PUBLIC_URL", "")


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class ProductionConfig(BaseConfig):
    DEBUG = False

    @classmethod
    def validate(cls) -> None:
        """Refuse to start production with the development secret."""
        if cls.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise RuntimeError("SECRET_KEY must be set in production")


def get_config():
    """Return a config class based on the DEMOSHELF_ENV environment variable."""
    env = os.environ.get("DEMOSHELF_ENV", "development").lower()
    if env.startswith("prod"):
        return ProductionConfig
    return DevelopmentConfig
