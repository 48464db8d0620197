"""Flask CLI commands for deployment setup"""
import click
from navtree.extensions import db


def register_commands(app):
    """Attach the navtree CLI commands to the app"""

    @app.cli.command('init-db')
    def init_db():
        """Create any missing tables (safe to run repeatedly)"""
        from sqlalchemy import inspect
        before = set(inspect(db.engine).get_table_names())
        db.create_all()
        after = set(inspect(db.engine).get_table_names())
        created = sorted(after - before)
        if created:
            click.echo(f"Created tables: {', '.join(created)}")
        else:
            click.echo("All tables already exist")

    @app.cli.command('create-token')
    @click.argument('username')
    @click.option('--admin', is_flag=True, help='Create the user as an admin')
    def create_token(username, admin):
        """Issue a new API token for USERNAME, creating the user if needed"""
        import secrets
        from navtree.models import User

        user = User.query.filter_by(username=username).first()
        if user is None:
            user = User(username=username, is_admin=admin)
            user.set_password(secrets.token_urlsafe(16))
            db.session.add(user)
        token = user.generate_api_token()
        db.session.commit()
        click.echo(token)
