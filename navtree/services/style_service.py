"""Header/footer style attachment (one record of each per menu)"""
import json
from collections import namedtuple
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from navtree.errors import NavtreeError, NotFound, ValidationError, AuthError
from navtree.models.menu import Menu
from navtree.models.style import HeaderStyle, FooterStyle
from navtree.utils.validators import (
    validate_style_choices, validate_style_types, validate_json_structure
)


StyleResult = namedtuple('StyleResult', ['success', 'message', 'style'])


def normalize_json_field(field, value, expected=dict):
    """
    Deep-copy an opaque JSON payload (advanced options, dropdown items).

    Args:
        field (str): Field name, used in error messages
        value: Decoded JSON input
        expected (type): Container type the field must hold

    Returns:
        str: JSON text to store (None when value is None)

    Raises:
        ValidationError: wrong container type, not serializable, or too deep
    """
    if value is None:
        return None
    if not isinstance(value, expected):
        kind = 'an object' if expected is dict else 'a list'
        raise ValidationError(f"{field} must be {kind}")
    if not validate_json_structure(value, max_depth=10):
        raise ValidationError(f"{field} structure too deeply nested")
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} is not valid JSON: {e}") from e


class StyleService:
    """Service for upserting per-menu header and footer styles"""

    def __init__(self, session):
        self.session = session

    @staticmethod
    def _prepare(model, data):
        """Validate input and pick out the fields the model accepts"""
        if not isinstance(data, dict):
            raise ValidationError("Style data must be an object")

        is_valid, error = validate_style_choices(data, model.CHOICES)
        if not is_valid:
            raise ValidationError(error)

        is_valid, error = validate_style_types(
            data, model.EDITABLE_FIELDS,
            boolean_fields=model.BOOLEAN_FIELDS,
            integer_fields=model.INTEGER_FIELDS,
            json_fields=model.JSON_FIELDS
        )
        if not is_valid:
            raise ValidationError(error)

        values = {}
        for field in model.EDITABLE_FIELDS:
            if field not in data:
                continue
            if field in model.JSON_FIELDS:
                values[field] = normalize_json_field(field, data[field], model.JSON_FIELDS[field])
            else:
                values[field] = data[field]
        return values

    def _upsert(self, model, menu_id, data, commit=True):
        values = self._prepare(model, data)

        style = self.session.query(model).filter_by(menu_id=menu_id).first()
        created = style is None
        if created:
            style = model(menu_id=menu_id)
            self.session.add(style)
        for field, value in values.items():
            setattr(style, field, value)

        if commit:
            try:
                self.session.commit()
            except SQLAlchemyError as e:
                self.session.rollback()
                current_app.logger.error(f"Upserting {model.__tablename__} failed for menu {menu_id}: {e}")
                raise NavtreeError(f"Failed to save {model.__tablename__}: {e}") from e
            current_app.logger.info(
                f"{'Created' if created else 'Updated'} {model.__tablename__} for menu {menu_id}"
            )
        return style

    def upsert_header_style(self, menu_id, data, commit=True):
        """Create the menu's header style or merge data into the existing one"""
        return self._upsert(HeaderStyle, menu_id, data, commit=commit)

    def upsert_footer_style(self, menu_id, data, commit=True):
        """Create the menu's footer style or merge data into the existing one"""
        return self._upsert(FooterStyle, menu_id, data, commit=commit)

    def update_header_style(self, menu_id, data, identity):
        """
        Authenticated header style update.

        Args:
            menu_id (str): Menu ID
            data (dict): Header style fields
            identity (dict): Decoded bearer token ({'user_id', 'role'})

        Returns:
            HeaderStyle: The saved style

        Raises:
            AuthError: no identity
            NotFound: menu does not exist
        """
        if not identity or not identity.get('user_id'):
            raise AuthError("Authentication required")

        if self.session.get(Menu, menu_id) is None:
            raise NotFound(f"Menu {menu_id} not found")

        style = self.upsert_header_style(menu_id, data)
        current_app.logger.info(f"Header style for menu {menu_id} saved by user {identity['user_id']}")
        return style

    def update_footer_style(self, menu_id, data):
        """
        Footer style update reporting business failures in the result.

        Returns:
            StyleResult: (success, message, style)
        """
        if self.session.get(Menu, menu_id) is None:
            return StyleResult(False, f"Menu {menu_id} not found", None)

        try:
            style = self.upsert_footer_style(menu_id, data)
        except ValidationError as e:
            return StyleResult(False, e.message, None)

        return StyleResult(True, "Footer style updated successfully", style)
