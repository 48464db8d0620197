import pytest

from navtree import create_app
from navtree.extensions import db
from navtree.models import Page, User
from navtree.services.menu_service import MenuTreeStore


@pytest.fixture()
def app():
    """App bound to a fresh in-memory database, with an active app context."""
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def session(app):
    return db.session


@pytest.fixture()
def store(app):
    return MenuTreeStore.for_app(db.session)


@pytest.fixture()
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture()
def make_page(session):
    def _make_page(page_id, slug, title=None, published=True):
        page = Page(id=page_id, slug=slug, title=title or slug.title(), published=published)
        session.add(page)
        session.commit()
        return page
    return _make_page


@pytest.fixture()
def api_token(session):
    user = User(username='editor')
    user.set_password('secret-password')
    token = user.generate_api_token()
    session.add(user)
    session.commit()
    return token


@pytest.fixture()
def menu(store):
    return store.create_menu({'name': 'Main', 'location': 'header'})
