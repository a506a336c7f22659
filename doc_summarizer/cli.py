"""
Flask CLI commands: ``flask --app doc_summarizer:create_app create-user``.
"""
import click

from doc_summarizer import db
from doc_summarizer.models import User


def register_commands(app):
    @app.cli.command("create-user")
    @click.argument("email")
    @click.password_option()
    def create_user(email, password):
        """Create a user account that can sign in."""
        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise click.ClickException(f"{email} already exists")
        user = User(email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created {email}")

    @app.cli.command("disable-user")
    @click.argument("email")
    def disable_user(email):
        """Block a user from signing in."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None:
            raise click.ClickException(f"No user {email}")
        user.is_active_account = False
        db.session.commit()
        click.echo(f"Disabled {user.email}")
