"""Tests for CORS and security headers middleware."""


def test_security_headers_on_api_responses(client):
    res = client.get("/api/test")
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
    assert res.headers["Cache-Control"] == "no-store"


def test_cors_wildcard(client):
    res = client.get("/api/test", headers={"Origin": "http://localhost:3000"})
    assert res.headers["Access-Control-Allow-Origin"] == "*"
    assert "Authorization" in res.headers["Access-Control-Allow-Headers"]


def test_cors_preflight_skips_auth(client):
    res = client.options(
        "/api/demos",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )
    assert res.status_code == 200
    assert "POST" in res.headers["Access-Control-Allow-Methods"]


def test_cors_allow_list(flask_app, client):
    flask_app.config["CORS_ORIGINS"] = "https://demos.example.com, http://localhost:3000/"

    allowed = client.get("/api/test", headers={"Origin": "http://localhost:3000"})
    assert allowed.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert "Origin" in allowed.headers.get("Vary", "")

    denied = client.get("/api/test", headers={"Origin": "https://evil.example"})
    assert "Access-Control-Allow-Origin" not in denied.headers


def test_hsts_only_behind_https(client):
    plain = client.get("/api/test")
    assert "Strict-Transport-Security" not in plain.headers

    proxied = client.get("/api/test", headers={"X-Forwarded-Proto": "https"})
    assert "Strict-Transport-Security" in proxied.headers


def test_force_https_redirects(tmp_path, storage):
    from demoshelf_core import create_app

    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "INSTANCE_PATH": str(tmp_path / "instance"),
            "DATABASE": str(tmp_path / "db.sqlite"),
            "RATELIMIT_ENABLED": False,
            "FORCE_HTTPS": True,
        },
        storage=storage,
    )
    client = app.test_client()

    res = client.get("/api/demos", follow_redirects=False)
    assert res.status_code == 301
    assert res.headers["Location"].startswith("https://")

    # Health checks stay reachable over plain HTTP
    assert client.get("/api/test").status_code == 200
