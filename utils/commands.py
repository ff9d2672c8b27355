import click
from flask.cli import with_appcontext
from models import db, User


@click.command("create-admin")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.password_option()
@with_appcontext
def create_admin(name, email, password):
    """Create an admin account, or promote and re-key an existing one."""
    user = User.find_by_email(email)
    if user:
        user.role = "admin"
    else:
        user = User(name=name, email=email, role="admin")
        db.session.add(user)
    user.set_password(password)
    db.session.commit()
    click.echo(f"Admin {email} ready (id {user.id}).")


def register_commands(app):
    app.cli.add_command(create_admin)
