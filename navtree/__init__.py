"""Flask application factory"""
import os
from flask import Flask
from navtree.config import config
from navtree.extensions import db, login_manager, limiter


def create_app(config_name=None):
    """Create and configure the Flask application"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name]())
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Bearer tokens only; there is no session login
    @login_manager.request_loader
    def load_user_from_request(request):
        from navtree.models import User
        from navtree.utils.security import extract_bearer_token, verify_token
        identity = verify_token(extract_bearer_token(request.headers.get('Authorization')))
        if identity is None:
            return None
        return db.session.get(User, identity['user_id'])

    # Register blueprints
    from navtree.blueprints.api import bp as api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    from navtree.commands import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        _initialize_database(app)

    return app


def _initialize_database(app):
    """Create tables and the default admin user"""
    from navtree.models import User

    db.create_all()

    if not app.config.get('CREATE_DEFAULT_ADMIN'):
        return

    # Create default admin user if no users exist
    if User.query.count() == 0:
        admin_username = os.environ.get('ADMIN_USERNAME', 'admin')
        admin_password = os.environ.get('ADMIN_PASSWORD', 'admin')
        admin = User(username=admin_username, is_admin=True)
        admin.set_password(admin_password)
        admin.api_token = os.environ.get('ADMIN_API_TOKEN') or None
        if admin.api_token is None:
            admin.generate_api_token()
        db.session.add(admin)
        db.session.commit()
        app.logger.info(f"Created admin user: {admin_username}")
        if admin_password == 'admin':
            app.logger.warning("Using default password 'admin'. Set ADMIN_PASSWORD environment variable for security.")
