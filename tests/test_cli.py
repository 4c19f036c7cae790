from click.testing import CliRunner

from database import get_user_by_email, insert_user
from demoshelf_core.cli import cli, find_config_issues


def test_check_reports_missing_settings(flask_app):
    flask_app.config.update({"SECRET_KEY": "dev-key-change-in-production", "R2_ENDPOINT": ""})
    issues = find_config_issues(flask_app)
    assert any("SECRET_KEY" in i for i in issues)
    assert any("CLOUDFLARE_R2_ENDPOINT" in i for i in issues)
    assert not any("CLOUDFLARE_R2_BUCKET_NAME" in i for i in issues)


def test_check_command_exit_codes(flask_app):
    runner = CliRunner()
    flask_app.config["R2_ENDPOINT"] = ""

    result = runner.invoke(cli, ["check"], obj={"app": flask_app})
    assert result.exit_code == 1
    assert "CLOUDFLARE_R2_ENDPOINT" in result.output

    flask_app.config.update(
        {
            "R2_ENDPOINT": "https://acct.r2.cloudflarestorage.com",
            "R2_ACCESS_KEY_ID": "key",
            "R2_SECRET_ACCESS_KEY": "secret",
        }
    )
    result = runner.invoke(cli, ["check"], obj={"app": flask_app})
    assert result.exit_code == 0
    assert "Configuration OK" in result.output


def test_init_db_command_wipes_data(flask_app):
    with flask_app.app_context():
        insert_user("a@x.com", "hash", "Ann")

    result = CliRunner().invoke(cli, ["init-db", "--yes"], obj={"app": flask_app})
    assert result.exit_code == 0
    with flask_app.app_context():
        assert get_user_by_email("a@x.com") is None


def test_init_db_command_aborts_without_confirmation(flask_app):
    with flask_app.app_context():
        insert_user("a@x.com", "hash", "Ann")

    result = CliRunner().invoke(cli, ["init-db"], obj={"app": flask_app}, input="n\n")
    assert result.exit_code != 0
    with flask_app.app_context():
        assert get_user_by_email("a@x.com") is not None


def test_audit_command_lists_entries(flask_app, client):
    client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "p"})

    result = CliRunner().invoke(cli, ["audit", "-n", "5"], obj={"app": flask_app})
    assert result.exit_code == 0
    assert "login user" in result.output
    assert "FAILED" in result.output


def test_audit_command_empty(flask_app):
    result = CliRunner().invoke(cli, ["audit"], obj={"app": flask_app})
    assert result.exit_code == 0
    assert "No audit entries." in result.output
