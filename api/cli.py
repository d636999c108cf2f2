import click
from flask import current_app


def register_cli(app):
    @app.cli.command("purge-expired-tokens")
    def purge_expired_tokens():
        """Delete refresh tokens whose stored expiry has passed."""
        deleted = current_app.extensions["token_manager"].purge_expired()
        click.echo(f"Deleted {deleted} expired refresh token(s).")
