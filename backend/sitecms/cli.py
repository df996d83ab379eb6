import click
from flask import current_app

from sitecms.domain.exceptions import BadRequestError
from sitecms.extensions import db


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables that do not exist yet."""
        # Models must be imported for their tables to be known.
        from sitecms import models  # noqa: F401

        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("seed-admin")
    def seed_admin():
        """Create the admin account from ADMIN_* settings."""
        from sitecms.application.auth.service import seed_admin as seed

        config = current_app.config
        try:
            admin = seed(
                config["ADMIN_EMAIL"],
                config["ADMIN_INITIAL_PASSWORD"],
                config["ADMIN_NAME"],
            )
        except BadRequestError as exc:
            raise click.ClickException(exc.message) from exc

        if admin is None:
            click.echo(f"Admin {config['ADMIN_EMAIL']} already exists")
        else:
            click.echo(f"Admin {admin.email} created")
