"""JSON API blueprint for menus, menu items and menu styles"""
from flask import Blueprint, request, jsonify, current_app
from flask_login import current_user
from navtree.errors import NavtreeError, ValidationError, AuthError
from navtree.extensions import db, limiter
from navtree.services.menu_service import MenuTreeStore
from navtree.utils.security import identity_for

bp = Blueprint('api', __name__)


def _store():
    return MenuTreeStore.for_app(db.session)


def _json_body():
    """Request body as a dict; anything else is a validation error"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


@bp.errorhandler(NavtreeError)
def handle_navtree_error(error):
    if error.status_code >= 500:
        current_app.logger.error(f"{request.method} {request.path} failed: {error.message}")
    return jsonify(error.to_dict()), error.status_code


# ===== QUERY ROUTES =====

@bp.route('/menus', methods=['GET'])
def menus_list():
    """List all menus with their items and styles"""
    return jsonify({'success': True, 'menus': _store().list_menus()})


@bp.route('/menus/<menu_id>', methods=['GET'])
def menu_detail(menu_id):
    menu = _store().get_menu(menu_id)
    if menu is None:
        return jsonify({'success': False, 'error': 'Menu not found'}), 404
    return jsonify({'success': True, 'menu': menu})


@bp.route('/menus/location/<location>', methods=['GET'])
def menu_by_location(location):
    menu = _store().get_menu_by_location(location)
    if menu is None:
        return jsonify({'success': False, 'error': 'Menu not found'}), 404
    return jsonify({'success': True, 'menu': menu})


@bp.route('/menus/name/<name>', methods=['GET'])
def menu_by_name(name):
    menu = _store().get_menu_by_name(name)
    if menu is None:
        return jsonify({'success': False, 'error': 'Menu not found'}), 404
    return jsonify({'success': True, 'menu': menu})


@bp.route('/pages', methods=['GET'])
def pages_list():
    """Pages available as menu item targets"""
    return jsonify({'success': True, 'pages': _store().list_pages()})


# ===== MENU MUTATIONS =====

@bp.route('/menus', methods=['POST'])
@limiter.limit("30 per minute")
def menu_create():
    """Create a menu, optionally with header/footer styles"""
    menu = _store().create_menu(_json_body())
    return jsonify({'success': True, 'menu': menu}), 201


@bp.route('/menus/<menu_id>', methods=['PUT'])
@limiter.limit("30 per minute")
def menu_update(menu_id):
    menu = _store().update_menu(menu_id, _json_body())
    return jsonify({'success': True, 'menu': menu})


@bp.route('/menus/<menu_id>', methods=['DELETE'])
@limiter.limit("30 per minute")
def menu_delete(menu_id):
    """Delete a menu with its styles and every item"""
    _store().delete_menu(menu_id)
    return jsonify({'success': True})


# ===== MENU ITEM MUTATIONS =====

@bp.route('/menu-items', methods=['POST'])
@limiter.limit("60 per minute")
def menu_item_create():
    item = _store().create_menu_item(_json_body())
    return jsonify({'success': True, 'item': item.to_dict()}), 201


@bp.route('/menu-items/order', methods=['PUT'])
@limiter.limit("60 per minute")
def menu_items_reorder():
    """
    Bulk reorder/reparent in one transaction.

    Body: {"items": [{"id": ..., "order": 1, "parent_id": ...}, ...]}
    Leave parent_id out of an entry to keep the item's current parent;
    send null to move it to the top level.
    """
    data = _json_body()
    _store().update_menu_items_order(data.get('items'))
    return jsonify({'success': True})


@bp.route('/menu-items/<item_id>', methods=['PUT'])
@limiter.limit("60 per minute")
def menu_item_update(item_id):
    item = _store().update_menu_item(item_id, _json_body())
    return jsonify({'success': True, 'item': item.to_dict()})


@bp.route('/menu-items/<item_id>', methods=['DELETE'])
@limiter.limit("60 per minute")
def menu_item_delete(item_id):
    """Delete an item together with all of its descendants"""
    _store().delete_menu_item(item_id)
    return jsonify({'success': True})


@bp.route('/menu-items/<item_id>/order', methods=['PUT'])
@limiter.limit("60 per minute")
def menu_item_order(item_id):
    """Set a single item's order (no reparenting, siblings untouched)"""
    data = _json_body()
    item = _store().update_menu_item_order(item_id, data.get('new_order'))
    return jsonify({'success': True, 'item': item.to_dict()})


# ===== STYLE MUTATIONS =====

@bp.route('/menus/<menu_id>/header-style', methods=['PUT'])
@limiter.limit("30 per minute")
def header_style_update(menu_id):
    """Upsert the menu's header style (requires a bearer token)"""
    identity = identity_for(current_user)
    if identity is None:
        raise AuthError("Authentication required")
    style = _store().update_header_style(menu_id, _json_body(), identity)
    return jsonify({
        'success': True,
        'message': 'Header style updated successfully',
        'header_style': style.to_dict()
    })


@bp.route('/menus/<menu_id>/footer-style', methods=['PUT'])
@limiter.limit("30 per minute")
def footer_style_update(menu_id):
    """Upsert the menu's footer style; failures come back in the envelope"""
    result = _store().update_footer_style(menu_id, _json_body())
    body = {
        'success': result.success,
        'message': result.message,
        'footer_style': result.style.to_dict() if result.style else None
    }
    return jsonify(body), (200 if result.success else 400)
