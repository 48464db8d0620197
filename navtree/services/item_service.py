"""Menu item repository: CRUD over tree nodes"""
from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from navtree.errors import NavtreeError, NotFound, ValidationError
from navtree.models.menu import Menu, MenuItem
from navtree.services.cascade_service import CascadeDeleter
from navtree.services.reorder_service import find_cycle_or_foreign_parent
from navtree.utils.security import sanitize_text
from navtree.utils.validators import validate_item_data, validate_order_value


class MenuItemRepository:
    """Service for handling menu item operations"""

    def __init__(self, session, url_resolver, page_catalog):
        self.session = session
        self.url_resolver = url_resolver
        self.page_catalog = page_catalog

    def get_item(self, item_id):
        item = self.session.get(MenuItem, item_id)
        if item is None:
            raise NotFound(f"Menu item {item_id} not found")
        return item

    def next_order(self, menu_id, parent_id=None):
        """One past the highest order in the sibling group, or 1 if it is empty"""
        current_max = self.session.query(func.max(MenuItem.order)).filter(
            MenuItem.menu_id == menu_id,
            MenuItem.parent_id == parent_id
        ).scalar()
        return 1 if current_max is None else current_max + 1

    def children_of(self, menu_id, parent_id=None):
        """Items of one sibling group, ascending by order"""
        return self.session.query(MenuItem).filter(
            MenuItem.menu_id == menu_id,
            MenuItem.parent_id == parent_id
        ).order_by(MenuItem.order, MenuItem.created_at).all()

    def items_of(self, menu_id):
        """Every item of a menu as a flat list"""
        return self.session.query(MenuItem).filter_by(menu_id=menu_id).order_by(MenuItem.order).all()

    def resolved_page(self, item):
        """Linked page as {id, title, slug}, or None"""
        if not item.page_id:
            return None
        return self.page_catalog.get_page(item.page_id)

    def _commit(self, operation, entity_id):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"{operation} failed for {entity_id}: {e}")
            raise NavtreeError(f"Failed to {operation.replace('_', ' ')}: {e}") from e

    def create_item(self, data):
        """
        Create a new menu item at the end of its sibling group.

        Args:
            data (dict): menu_id, title, and optionally parent_id, url,
                page_id, target, icon

        Returns:
            MenuItem: The persisted item

        Raises:
            NotFound: menu, parent or linked page does not exist
            ValidationError: bad input, or neither URL nor page given
        """
        is_valid, error = validate_item_data(data)
        if not is_valid:
            raise ValidationError(error)

        menu_id = data.get('menu_id')
        if not menu_id or self.session.get(Menu, menu_id) is None:
            raise NotFound(f"Menu {menu_id} not found")

        parent_id = data.get('parent_id') or None
        if parent_id is not None:
            parent = self.session.get(MenuItem, parent_id)
            if parent is None:
                raise NotFound(f"Parent menu item {parent_id} not found")
            if parent.menu_id != menu_id:
                raise ValidationError("Parent menu item belongs to a different menu")

        title = sanitize_text(data['title'])
        if not title:
            raise ValidationError("Title is required")

        order = self.next_order(menu_id, parent_id)
        page_id = data.get('page_id') or None
        url = self.url_resolver.resolve(data.get('url'), page_id)

        item = MenuItem(
            menu_id=menu_id,
            parent_id=parent_id,
            title=title,
            url=url,
            page_id=page_id,
            target=data.get('target'),
            icon=sanitize_text(data.get('icon')),
            order=order
        )
        self.session.add(item)
        self._commit('create_item', menu_id)
        current_app.logger.info(f"Created menu item {item.id} in menu {menu_id} at order {order}")
        return item

    def update_item(self, item_id, data):
        """
        Update a menu item. title/url/page_id/target/icon are replaced from
        data; parent_id only changes when the key is present. The order is
        left alone (use reorder for positioning).

        Args:
            item_id (str): Item ID
            data (dict): Item fields

        Returns:
            MenuItem: The updated item

        Raises:
            NotFound: item, parent or linked page does not exist
            ValidationError: bad input, cyclic move, or neither URL nor page
        """
        item = self.get_item(item_id)

        is_valid, error = validate_item_data(data)
        if not is_valid:
            raise ValidationError(error)

        if 'parent_id' in data:
            parent_id = data['parent_id'] or None
            error = find_cycle_or_foreign_parent(self.session, item, parent_id)
            if error:
                raise ValidationError(error)
        else:
            parent_id = item.parent_id

        title = sanitize_text(data['title'])
        if not title:
            raise ValidationError("Title is required")

        page_id = data.get('page_id') or None
        url = self.url_resolver.resolve(data.get('url'), page_id)

        item.title = title
        item.url = url
        item.page_id = page_id
        item.target = data.get('target')
        item.icon = sanitize_text(data.get('icon'))
        item.parent_id = parent_id
        self._commit('update_item', item_id)
        return item

    def update_item_order(self, item_id, new_order):
        """Set one item's order; siblings are not renumbered"""
        if not validate_order_value(new_order):
            raise ValidationError("Order must be an integer")
        item = self.get_item(item_id)
        item.order = new_order
        self._commit('update_item_order', item_id)
        return item

    def delete_item(self, item_id):
        """Delete an item and its whole subtree"""
        CascadeDeleter(self.session).delete_item(item_id)
        return True
