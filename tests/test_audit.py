"""Tests for audit logging of account and demo actions."""

from unittest.mock import patch

from services.audit import log_action, read_audit_log


def test_signup_and_demo_actions_are_audited(flask_app, client, auth_headers, demo_payload):
    demo = client.post("/api/demos", json=demo_payload, headers=auth_headers).get_json()
    client.delete(f"/api/demos/{demo['id']}", headers=auth_headers)

    with flask_app.app_context():
        entries = read_audit_log()

    actions = [(e["action"], e["resource_type"]) for e in entries]
    assert actions == [("delete", "demo"), ("create", "demo"), ("signup", "user")]
    assert entries[0]["resource_id"] == demo["id"]
    assert entries[0]["user_id"] == demo["userId"]
    assert all(e["success"] for e in entries)


def test_failed_login_is_audited_without_password(flask_app, client):
    client.post("/api/auth/login", json={"email": "who@x.com", "password": "hunter2"})

    with flask_app.app_context():
        (entry,) = read_audit_log()

    assert entry["action"] == "login"
    assert entry["success"] is False
    assert entry["user_id"] == "anonymous"
    assert entry["details"] == {"email": "who@x.com"}
    assert "hunter2" not in str(entry)


def test_read_audit_log_limit(flask_app):
    with flask_app.test_request_context():
        for i in range(5):
            log_action("create", "demo", resource_id=str(i), user_id="u")
        entries = read_audit_log(limit=2)

    assert [e["resource_id"] for e in entries] == ["4", "3"]


def test_audit_failure_does_not_break_request(client, auth_headers, demo_payload):
    with patch("services.audit.datetime") as mock_datetime:
        mock_datetime.now.side_effect = RuntimeError("clock broken")
        res = client.post("/api/demos", json=demo_payload, headers=auth_headers)
    assert res.status_code == 201
