"""Cascade deletion of menus and item subtrees"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from navtree.errors import NotFound, CascadeDeleteError, PartialCascadeFailure
from navtree.models.menu import Menu, MenuItem
from navtree.models.style import HeaderStyle, FooterStyle


class CascadeDeleter:
    """Removes a menu or an item together with everything it owns"""

    def __init__(self, session):
        self.session = session

    def delete_menu(self, menu_id):
        """
        Delete a menu in dependency order:
        1. header and footer style rows (best-effort, each committed on its own)
        2. every item of the menu, as one bulk statement
        3. the menu row
        Stages 2 and 3 share one transaction.

        Args:
            menu_id (str): Menu ID

        Returns:
            bool: True on success

        Raises:
            NotFound: menu does not exist
            CascadeDeleteError: items or menu row could not be deleted
        """
        if self.session.get(Menu, menu_id) is None:
            raise NotFound(f"Menu {menu_id} not found")

        for model, dependent in ((HeaderStyle, 'header_style'), (FooterStyle, 'footer_style')):
            self._delete_style(model, menu_id, dependent)

        stage = 'items'
        try:
            deleted = self.session.query(MenuItem).filter_by(menu_id=menu_id).delete(
                synchronize_session='fetch'
            )
            stage = 'menu'
            menu = self.session.get(Menu, menu_id)
            if menu is not None:
                self.session.delete(menu)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"delete_menu failed at stage '{stage}' for menu {menu_id}: {e}")
            raise CascadeDeleteError(f"Failed to delete menu {stage}: {e}", stage=stage) from e

        current_app.logger.info(f"Deleted menu {menu_id} with {deleted} item(s)")
        return True

    def _delete_style(self, model, menu_id, dependent):
        """Delete one style row; failures are logged and swallowed"""
        try:
            self.session.query(model).filter_by(menu_id=menu_id).delete(synchronize_session='fetch')
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            failure = PartialCascadeFailure(
                f"Could not delete {dependent} for menu {menu_id}: {e}",
                menu_id=menu_id,
                dependent=dependent
            )
            current_app.logger.warning(failure.message, extra={'cascade_failure': failure})

    def collect_subtree(self, item):
        """
        Walk the subtree rooted at item with an explicit stack.

        Returns:
            list: Items in post-order (every child before its parent)
        """
        visited = set()
        pre_order = []
        stack = [item]
        while stack:
            node = stack.pop()
            if node.id in visited:
                # Corrupt data with a cycle; each node is deleted once
                continue
            visited.add(node.id)
            pre_order.append(node)
            children = self.session.query(MenuItem).filter_by(
                menu_id=node.menu_id, parent_id=node.id
            ).all()
            stack.extend(children)
        # Reversed pre-order puts descendants ahead of their ancestors
        return list(reversed(pre_order))

    def delete_item(self, item_id):
        """
        Delete an item and all of its descendants, children first, one row
        at a time inside a single transaction.

        Args:
            item_id (str): Item ID

        Returns:
            int: Number of items removed (descendants + 1)

        Raises:
            NotFound: item does not exist
            CascadeDeleteError: a row could not be deleted (nothing is removed)
        """
        item = self.session.get(MenuItem, item_id)
        if item is None:
            raise NotFound(f"Menu item {item_id} not found")

        try:
            nodes = self.collect_subtree(item)
            for node in nodes:
                self.session.delete(node)
                self.session.flush()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"delete_item failed for item {item_id}: {e}")
            raise CascadeDeleteError(f"Failed to delete menu item: {e}", stage='items') from e

        current_app.logger.info(f"Deleted menu item {item_id} and {len(nodes) - 1} descendant(s)")
        return len(nodes)
