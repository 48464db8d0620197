"""User model for bearer-token authentication"""
from datetime import datetime
import secrets
from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from navtree.extensions import db


class User(UserMixin, db.Model):
    """Represents a CMS user holding an API token"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False)
    api_token = db.Column(db.String(100), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        """Hash and set user password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verify password against hash"""
        return check_password_hash(self.password_hash, password)

    def generate_api_token(self):
        """Generate and store a new bearer token, replacing any previous one"""
        self.api_token = secrets.token_urlsafe(32)
        return self.api_token

    @property
    def role(self):
        return 'admin' if self.is_admin else 'editor'

    @staticmethod
    def get_by_api_token(token):
        """Find user by bearer token"""
        if not token:
            return None
        return User.query.filter_by(api_token=token).first()

    def __repr__(self):
        return f'<User {self.username}>'
