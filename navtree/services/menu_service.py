"""Menu tree store: aggregate root over menus, items and styles"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from navtree.errors import NavtreeError, NotFound, ValidationError
from navtree.models.menu import Menu
from navtree.services.cascade_service import CascadeDeleter
from navtree.services.item_service import MenuItemRepository
from navtree.services.page_catalog import get_page_catalog
from navtree.services.reorder_service import ReorderCoordinator
from navtree.services.style_service import StyleService
from navtree.services.url_service import UrlResolver
from navtree.utils.validators import validate_menu_data


class MenuTreeStore:
    """Entry point for every menu, item and style operation.

    Collaborators are injected; ``MenuTreeStore.for_app(db.session)`` wires the
    defaults from app config.
    """

    def __init__(self, session, page_catalog):
        self.session = session
        self.page_catalog = page_catalog
        self.items = MenuItemRepository(session, UrlResolver(page_catalog), page_catalog)
        self.styles = StyleService(session)
        self.cascade = CascadeDeleter(session)
        self.reorder = ReorderCoordinator(session)

    @classmethod
    def for_app(cls, session):
        return cls(session, get_page_catalog(session))

    # ----- read projections -----

    def _page_lookup(self):
        """Per-projection page resolver: each page id hits the catalog once,
        and a failing catalog degrades to page=None instead of failing the read"""
        pages = {}

        def lookup(item):
            if not item.page_id:
                return None
            if item.page_id not in pages:
                try:
                    pages[item.page_id] = self.items.resolved_page(item)
                except NavtreeError as e:
                    current_app.logger.error(f"Page lookup failed for {item.page_id} (item {item.id}): {e.message}")
                    pages[item.page_id] = None
            return pages[item.page_id]
        return lookup

    def build_tree(self, menu_id, lookup=None):
        """
        Nest a menu's flat item list into a tree of dicts.

        Returns:
            list: Top-level item dicts, each with a 'children' list, every
            sibling group ascending by order
        """
        if lookup is None:
            lookup = self._page_lookup()
        by_parent = {}
        for item in self.items.items_of(menu_id):
            by_parent.setdefault(item.parent_id, []).append(item)

        roots = []
        # (parent_id, list to fill) pairs; no recursion so depth is unbounded
        stack = [(None, roots)]
        while stack:
            parent_id, target = stack.pop()
            for item in sorted(by_parent.get(parent_id, []), key=lambda i: i.order):
                node = item.to_dict()
                node['page'] = lookup(item)
                node['children'] = []
                target.append(node)
                stack.append((item.id, node['children']))
        return roots

    def project(self, menu, lookup=None):
        """Full read model of a menu: row, nested items and both styles"""
        data = menu.to_dict()
        data['items'] = self.build_tree(menu.id, lookup)
        data['header_style'] = menu.header_style.to_dict() if menu.header_style else None
        data['footer_style'] = menu.footer_style.to_dict() if menu.footer_style else None
        return data

    def get_menu(self, menu_id):
        menu = self.session.get(Menu, menu_id)
        return self.project(menu) if menu else None

    def get_menu_by_location(self, location):
        menu = self.session.query(Menu).filter_by(location=location).order_by(Menu.created_at).first()
        return self.project(menu) if menu else None

    def get_menu_by_name(self, name):
        menu = self.session.query(Menu).filter_by(name=name).order_by(Menu.created_at).first()
        return self.project(menu) if menu else None

    def list_menus(self):
        lookup = self._page_lookup()
        return [self.project(m, lookup) for m in self.session.query(Menu).order_by(Menu.name).all()]

    def list_pages(self):
        """Pages available as item targets"""
        return self.page_catalog.list_pages()

    # ----- menu mutations -----

    def _attach_styles(self, menu_id, data):
        if data.get('header_style') is not None:
            self.styles.upsert_header_style(menu_id, data['header_style'], commit=False)
        if data.get('footer_style') is not None:
            self.styles.upsert_footer_style(menu_id, data['footer_style'], commit=False)

    def create_menu(self, data):
        """
        Create a menu, optionally with header/footer styles, in one transaction.
        No items are created.

        Args:
            data (dict): name, and optionally location, header_style, footer_style

        Returns:
            dict: Menu projection
        """
        is_valid, error = validate_menu_data(data)
        if not is_valid:
            raise ValidationError(error)

        menu = Menu(name=data['name'].strip(), location=data.get('location') or None)
        try:
            self.session.add(menu)
            self.session.flush()
            self._attach_styles(menu.id, data)
            self.session.commit()
        except NavtreeError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"create_menu failed for '{data.get('name')}': {e}")
            raise NavtreeError(f"Failed to create menu: {e}") from e

        current_app.logger.info(f"Created menu {menu.id} ({menu.name})")
        return self.project(menu)

    def update_menu(self, menu_id, data):
        """
        Update the menu fields present in data and upsert any given styles.

        Returns:
            dict: Menu projection

        Raises:
            NotFound: menu does not exist
        """
        menu = self.session.get(Menu, menu_id)
        if menu is None:
            raise NotFound(f"Menu {menu_id} not found")

        is_valid, error = validate_menu_data(data, partial=True)
        if not is_valid:
            raise ValidationError(error)

        try:
            if 'name' in data:
                menu.name = data['name'].strip()
            if 'location' in data:
                menu.location = data['location'] or None
            self._attach_styles(menu.id, data)
            self.session.commit()
        except NavtreeError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.error(f"update_menu failed for menu {menu_id}: {e}")
            raise NavtreeError(f"Failed to update menu: {e}") from e

        return self.project(menu)

    def delete_menu(self, menu_id):
        return self.cascade.delete_menu(menu_id)

    # ----- item mutations -----

    def create_menu_item(self, data):
        return self.items.create_item(data)

    def update_menu_item(self, item_id, data):
        return self.items.update_item(item_id, data)

    def delete_menu_item(self, item_id):
        return self.items.delete_item(item_id)

    def update_menu_item_order(self, item_id, new_order):
        return self.items.update_item_order(item_id, new_order)

    def update_menu_items_order(self, updates):
        return self.reorder.reorder_items(updates)

    # ----- style mutations -----

    def update_header_style(self, menu_id, data, identity):
        return self.styles.update_header_style(menu_id, data, identity)

    def update_footer_style(self, menu_id, data):
        return self.styles.update_footer_style(menu_id, data)
