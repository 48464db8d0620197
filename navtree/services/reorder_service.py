"""Atomic bulk reordering / reparenting of menu items"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from navtree.errors import NavtreeError, NotFound, ValidationError, TransactionFailure
from navtree.models.menu import MenuItem
from navtree.utils.validators import validate_order_updates


def find_cycle_or_foreign_parent(session, item, parent_id):
    """
    Check whether item may hang under parent_id.

    Walks upward from the proposed parent; the item must not be met on the
    way (it would become its own ancestor) and the parent must live in the
    same menu.

    Returns:
        str: Error message, or None when the move is allowed
    """
    if parent_id is None:
        return None
    if parent_id == item.id:
        return f"Menu item {item.id} cannot be its own parent"

    parent = session.get(MenuItem, parent_id)
    if parent is None:
        return f"Parent menu item {parent_id} not found"
    if parent.menu_id != item.menu_id:
        return "Parent menu item belongs to a different menu"

    seen = set()
    current = parent
    while current is not None:
        if current.id == item.id:
            return f"Menu item {item.id} cannot be moved under its own descendant"
        if current.id in seen:
            # Pre-existing cycle above the target; refuse to build on it
            return f"Menu item {current.id} is part of a cycle"
        seen.add(current.id)
        current = session.get(MenuItem, current.parent_id) if current.parent_id else None
    return None


class ReorderCoordinator:
    """Applies a batch of order/parent updates as one transaction"""

    def __init__(self, session):
        self.session = session

    def reorder_items(self, updates):
        """
        Apply every update or none of them.

        Args:
            updates (list): [{'id': str, 'order': int, 'parent_id'?: str|None}]
                parent_id is only touched when the key is present; an
                explicit None promotes the item to top level.

        Returns:
            bool: True when all updates were committed

        Raises:
            ValidationError: malformed payload (nothing attempted)
            TransactionFailure: an update failed and the batch was rolled back
        """
        is_valid, error = validate_order_updates(updates)
        if not is_valid:
            raise ValidationError(error)

        try:
            moved = []
            for entry in updates:
                item = self.session.get(MenuItem, entry['id'])
                if item is None:
                    raise NotFound(f"Menu item {entry['id']} not found")
                item.order = entry['order']
                if 'parent_id' in entry:
                    item.parent_id = entry['parent_id']
                    moved.append(item)

            # Checked against the batch's final state, not entry by entry
            for item in moved:
                error = find_cycle_or_foreign_parent(self.session, item, item.parent_id)
                if error:
                    raise ValidationError(error)

            self.session.commit()
        except (NavtreeError, SQLAlchemyError) as e:
            self.session.rollback()
            message = e.message if isinstance(e, NavtreeError) else str(e)
            current_app.logger.error(f"reorder_items rolled back ({len(updates)} update(s)): {message}")
            raise TransactionFailure(f"Failed to update menu item orders: {message}") from e

        current_app.logger.info(f"Reordered {len(updates)} menu item(s)")
        return True
