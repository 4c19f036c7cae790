"""
Object storage for uploaded images: Cloudflare R2 (S3 compatible) and an
in-memory client for tests.
"""

from dataclasses import dataclass, field
from typing import Protocol

import boto3
from botocore.config import Config
from flask import Flask, current_app

EXTENSION_KEY = "demoshelf.storage"


class StorageClient(Protocol):
    """Operations the API needs from object storage."""

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        ...

    def public_url(self, key: str) -> str:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double that keeps uploaded objects in a dict."""

    base_url: str = "https://storage.example.test"
    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        self.objects[key] = (body, content_type)

    def public_url(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{key}"


@dataclass
class R2StorageClient:
    """S3-compatible client for a Cloudflare R2 bucket.

    Calls are never retried and time out after five seconds.
    """

    bucket: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    base_url: str

    def __post_init__(self):
        # R2 requires path-style addressing and region "auto".
        config = Config(
            s3={"addressing_style": "path"},
            signature_version="s3v4",
            connect_timeout=5,
            read_timeout=5,
            retries={"total_max_attempts": 1},
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name="auto",
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def public_url(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{key}"


def init_app(app: Flask, storage: StorageClient | None = None) -> None:
    """Attach an injected storage client; None means build one on first use."""
    app.extensions[EXTENSION_KEY] = storage


def get_storage() -> StorageClient:
    """Return the app's storage client, creating the R2 client lazily."""
    storage = current_app.extensions.get(EXTENSION_KEY)
    if storage is None:
        config = current_app.config
        storage = R2StorageClient(
            bucket=config["R2_BUCKET_NAME"],
            endpoint=config.get("R2_ENDPOINT", ""),
            access_key_id=config.get("R2_ACCESS_KEY_ID", ""),
            secret_access_key=config.get("R2_SECRET_ACCESS_KEY", ""),
            base_url=config.get("R2_PUBLIC_URL", ""),
        )
        current_app.extensions[EXTENSION_KEY] = storage
    return storage
