"""Command line interface for running and maintaining a demoshelf backend.

Key features:
- Development server
- Database initialization
- Configuration checks
- Audit log inspection
"""

import sys

import click
from flask import Flask

from .config import DEFAULT_SECRET_KEY


def _get_app(ctx: click.Context) -> Flask:
    """Return the app passed in by the caller, or build one from the environment."""
    if isinstance(ctx.obj, dict) and ctx.obj.get("app") is not None:
        return ctx.obj["app"]

    from . import create_app  # noqa: PLC0415

    app = create_app()
    ctx.ensure_object(dict)["app"] = app
    return app


def find_config_issues(app: Flask) -> list[str]:
    """Return human readable problems with the app's configuration."""
    issues = []
    config = app.config

    if config.get("SECRET_KEY") == DEFAULT_SECRET_KEY:
        issues.append("SECRET_KEY is the development default")

    r2_settings = {
        "R2_BUCKET_NAME": "CLOUDFLARE_R2_BUCKET_NAME",
        "R2_ENDPOINT": "CLOUDFLARE_R2_ENDPOINT",
        "R2_ACCESS_KEY_ID": "CLOUDFLARE_R2_ACCESS_KEY_ID",
        "R2_SECRET_ACCESS_KEY": "CLOUDFLARE_R2_SECRET_ACCESS_KEY",
        "R2_PUBLIC_URL": "CLOUDFLARE_R2_PUBLIC_URL",
    }
    for key, env_name in r2_settings.items():
        if not config.get(key):
            issues.append(f"{env_name} is not set; image uploads will fail")

    return issues


@click.group()
@click.version_option(package_name="demoshelf")
def cli():
    """demoshelf - demo gallery backend management."""


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", type=int, default=None, help="Defaults to the PORT setting.")
@click.pass_context
def run(ctx: click.Context, host: str, port: int | None):
    """Run the development server."""
    app = _get_app(ctx)
    app.run(host=host, port=port or app.config["PORT"], debug=app.debug)


@cli.command("init-db")
@click.confirmation_option(prompt="This deletes all users and demos. Continue?")
@click.pass_context
def init_db(ctx: click.Context):
    """Drop and recreate the database tables."""
    from database import init_db as db_init  # noqa: PLC0415

    app = _get_app(ctx)
    with app.app_context():
        db_init()
    click.echo("Database initialized.")


@cli.command()
@click.pass_context
def check(ctx: click.Context):
    """Report configuration problems; exits non-zero if any are found."""
    issues = find_config_issues(_get_app(ctx))
    if not issues:
        click.echo("Configuration OK")
        return

    for issue in issues:
        click.echo(f"- {issue}")
    sys.exit(1)


@cli.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Entries to show.")
@click.pass_context
def audit(ctx: click.Context, limit: int):
    """Show the most recent audit log entries."""
    from services.audit import read_audit_log  # noqa: PLC0415

    app = _get_app(ctx)
    with app.app_context():
        entries = read_audit_log(limit)

    if not entries:
        click.echo("No audit entries.")
        return

    for entry in entries:
        status = "ok" if entry.get("success") else "FAILED"
        click.echo(
            f"{entry.get('timestamp')} {entry.get('user_id')} "
            f"{entry.get('action')} {entry.get('resource_type')} "
            f"{entry.get('resource_id') or '-'} {status}"
        )


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
