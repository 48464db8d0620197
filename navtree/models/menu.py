"""Menu and MenuItem models"""
import uuid
from datetime import datetime
from navtree.extensions import db


def _new_id():
    return str(uuid.uuid4())


class Menu(db.Model):
    """Represents a navigation menu"""
    __tablename__ = 'menus'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(50), nullable=True)  # main, footer, ... (not unique)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Read-only: style rows are written and deleted by StyleService / CascadeDeleter
    header_style = db.relationship('HeaderStyle', uselist=False, viewonly=True)
    footer_style = db.relationship('FooterStyle', uselist=False, viewonly=True)

    def to_dict(self):
        """Convert menu row to dictionary (without items or styles)"""
        return {
            'id': self.id,
            'name': self.name,
            'location': self.location,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Menu {self.name}>'


class MenuItem(db.Model):
    """Represents a node in a menu's item tree.

    Children are not mapped as a relationship; they are derived on demand by
    filtering on (menu_id, parent_id).
    """
    __tablename__ = 'menu_items'
    __table_args__ = (
        db.Index('ix_menu_items_sibling_group', 'menu_id', 'parent_id', 'order'),
    )

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    menu_id = db.Column(db.String(36), db.ForeignKey('menus.id'), nullable=False)
    parent_id = db.Column(db.String(36), db.ForeignKey('menu_items.id'), nullable=True)
    title = db.Column(db.String(200), nullable=False)
    url = db.Column(db.String(500), nullable=True)
    page_id = db.Column(db.String(64), nullable=True)  # external catalog id, no FK
    target = db.Column(db.String(20), nullable=True)  # _self, _blank
    icon = db.Column(db.String(100), nullable=True)
    order = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """Convert item to dictionary"""
        return {
            'id': self.id,
            'menu_id': self.menu_id,
            'parent_id': self.parent_id,
            'title': self.title,
            'url': self.url,
            'page_id': self.page_id,
            'target': self.target,
            'icon': self.icon,
            'order': self.order,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<MenuItem {self.title}>'
