import os

import pytest
from flask import Flask

from database import init_db
from demoshelf_core import create_app
from services.storage import InMemoryStorageClient


@pytest.fixture
def storage() -> InMemoryStorageClient:
    return InMemoryStorageClient(base_url="https://pub.example.test")


@pytest.fixture(name="flask_app")
def app(tmp_path, storage) -> Flask:
    test_instance_path = tmp_path / "instance"
    test_db = tmp_path / "test.sqlite"

    os.makedirs(test_instance_path, exist_ok=True)

    test_config = {
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "INSTANCE_PATH": str(test_instance_path),
        "DATABASE": str(test_db),
        "RATELIMIT_ENABLED": False,
        "TOKEN_MAX_AGE": 3600,
        "CORS_ORIGINS": "*",
        "R2_BUCKET_NAME": "test-bucket",
        "R2_PUBLIC_URL": "https://pub.example.test",
    }

    flask_app = create_app(test_config, storage=storage)

    with flask_app.app_context():
        init_db()

    return flask_app


@pytest.fixture
def client(flask_app: Flask):
    return flask_app.test_client()


@pytest.fixture
def runner(flask_app: Flask):
    return flask_app.test_cli_runner()


def signup(client, email: str, name: str = "Ann", password: str = "p") -> str:
    """Sign up a user through the API and return the session token."""
    res = client.post(
        "/api/auth/signup",
        json={
            "name": name,
            "email": email,
            "password": password,
            "confirmPassword": password,
        },
    )
    assert res.status_code == 200, res.get_json()
    return res.get_json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    return bearer(signup(client, "ann@example.com", name="Annie"))


@pytest.fixture
def other_headers(client) -> dict[str, str]:
    return bearer(signup(client, "bob@example.com", name="Bobby"))


@pytest.fixture
def demo_payload() -> dict:
    return {
        "title": "Bouncing ball",
        "description": "A canvas animation",
        "type": "html",
        "content": "<canvas id='c'></canvas>",
        "thumbnail": "https://pub.example.test/uploads/1-ball.png",
        "url": "https://example.com/ball",
        "isPublic": True,
    }
