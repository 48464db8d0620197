"""HeaderStyle and FooterStyle models (one of each per menu)"""
import json
from datetime import datetime
from navtree.extensions import db
from navtree.models.menu import _new_id


class _StyleMixin:
    """Shared columns and helpers for per-menu style records"""

    # Fields StyleService copies from input; subclasses list their own
    EDITABLE_FIELDS = ()
    # field name -> allowed values
    CHOICES = {}
    # Editable fields not listed in these are plain strings
    BOOLEAN_FIELDS = ()
    INTEGER_FIELDS = ('transparency',)
    # field name -> accepted JSON container type(s)
    JSON_FIELDS = {'advanced_options': dict}

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    transparency = db.Column(db.Integer, default=0)
    advanced_options = db.Column(db.Text)  # JSON string, opaque to the engine
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def _load_json(self, field, default):
        raw = getattr(self, field)
        try:
            return json.loads(raw) if raw else default
        except (json.JSONDecodeError, TypeError):
            return default

    def get_advanced_options(self):
        """Parse the stored advanced options, falling back to an empty dict"""
        return self._load_json('advanced_options', {})

    def to_dict(self):
        data = {'id': self.id, 'menu_id': self.menu_id}
        for field in self.EDITABLE_FIELDS:
            if field in self.JSON_FIELDS:
                data[field] = self._load_json(field, self.JSON_FIELDS[field]())
            else:
                data[field] = getattr(self, field)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        data['updated_at'] = self.updated_at.isoformat() if self.updated_at else None
        return data


class HeaderStyle(_StyleMixin, db.Model):
    """Header presentation settings for a menu"""
    __tablename__ = 'header_styles'

    EDITABLE_FIELDS = (
        'transparency', 'header_size', 'menu_alignment', 'menu_button_style',
        'mobile_menu_style', 'mobile_menu_position', 'transparent_header',
        'border_bottom', 'fixed_header', 'advanced_options',
        'show_button', 'button_text', 'button_action', 'button_color',
        'button_text_color', 'button_size', 'button_border_radius',
        'button_shadow', 'button_border_color', 'button_border_width',
        'button_width', 'button_height', 'button_position',
        'button_dropdown', 'button_dropdown_items', 'button_url_type',
        'selected_page_id',
    )
    CHOICES = {
        'header_size': ('sm', 'md', 'lg'),
        'menu_alignment': ('left', 'center', 'right'),
        'menu_button_style': ('default', 'filled', 'outline'),
        'mobile_menu_style': ('fullscreen', 'dropdown', 'sidebar'),
        'mobile_menu_position': ('left', 'right'),
    }
    BOOLEAN_FIELDS = (
        'transparent_header', 'border_bottom', 'fixed_header',
        'show_button', 'button_dropdown',
    )
    INTEGER_FIELDS = ('transparency', 'button_border_radius', 'button_border_width')
    JSON_FIELDS = {'advanced_options': dict, 'button_dropdown_items': list}

    menu_id = db.Column(db.String(36), db.ForeignKey('menus.id'), unique=True, nullable=False)
    header_size = db.Column(db.String(10), default='md')
    menu_alignment = db.Column(db.String(10), default='right')
    menu_button_style = db.Column(db.String(10), default='default')
    mobile_menu_style = db.Column(db.String(20), default='dropdown')
    mobile_menu_position = db.Column(db.String(10), default='right')
    transparent_header = db.Column(db.Boolean, default=False)
    border_bottom = db.Column(db.Boolean, default=False)
    fixed_header = db.Column(db.Boolean, default=False)

    # Call-to-action button
    show_button = db.Column(db.Boolean, default=False)
    button_text = db.Column(db.String(100))
    button_action = db.Column(db.String(500))
    button_color = db.Column(db.String(30))
    button_text_color = db.Column(db.String(30))
    button_size = db.Column(db.String(10))
    button_border_radius = db.Column(db.Integer)
    button_shadow = db.Column(db.String(50))
    button_border_color = db.Column(db.String(30))
    button_border_width = db.Column(db.Integer)
    button_width = db.Column(db.String(20))
    button_height = db.Column(db.String(20))
    button_position = db.Column(db.String(20))
    button_dropdown = db.Column(db.Boolean, default=False)
    button_dropdown_items = db.Column(db.Text)  # JSON list of dropdown entries
    button_url_type = db.Column(db.String(20))
    selected_page_id = db.Column(db.String(64))

    def __repr__(self):
        return f'<HeaderStyle menu={self.menu_id}>'


class FooterStyle(_StyleMixin, db.Model):
    """Footer presentation settings for a menu"""
    __tablename__ = 'footer_styles'

    EDITABLE_FIELDS = (
        'transparency', 'column_layout', 'social_alignment', 'border_top',
        'alignment', 'padding', 'width', 'advanced_options',
    )
    CHOICES = {
        'column_layout': ('stacked', 'grid', 'flex'),
        'social_alignment': ('left', 'center', 'right'),
    }
    BOOLEAN_FIELDS = ('border_top',)

    menu_id = db.Column(db.String(36), db.ForeignKey('menus.id'), unique=True, nullable=False)
    column_layout = db.Column(db.String(10), default='grid')
    social_alignment = db.Column(db.String(10), default='left')
    border_top = db.Column(db.Boolean, default=False)
    alignment = db.Column(db.String(10), default='left')
    padding = db.Column(db.String(20))
    width = db.Column(db.String(20))

    def __repr__(self):
        return f'<FooterStyle menu={self.menu_id}>'
