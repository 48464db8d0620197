"""Page model - local backing table for the page catalog"""
from datetime import datetime
from navtree.extensions import db
from navtree.models.menu import _new_id


class Page(db.Model):
    """Represents a content page that menu items can link to"""
    __tablename__ = 'pages'

    id = db.Column(db.String(64), primary_key=True, default=_new_id)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    published = db.Column(db.Boolean, default=False)  # Only published pages are linkable
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_basic(self):
        """The {id, title, slug} shape menu items link against"""
        return {'id': self.id, 'title': self.title, 'slug': self.slug}

    def __repr__(self):
        return f'<Page {self.title}>'
