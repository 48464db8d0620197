"""
HTTP surface.

Covers:
  - menu create/get/list/update/delete round trip over JSON
  - item create/update/delete, single and bulk order
  - error envelopes and status codes (400/404/500)
  - header style requires bearer token (401 without, even with a bad body)
  - badly typed style values -> 400
  - footer style reports missing menu in the envelope
  - page listing
"""


def _create_menu(client, **body):
    body.setdefault('name', 'Main')
    resp = client.post('/api/menus', json=body)
    assert resp.status_code == 201
    return resp.get_json()['menu']


def _create_item(client, menu_id, title, **body):
    body.update({'menu_id': menu_id, 'title': title})
    body.setdefault('url', f'/{title.lower()}')
    resp = client.post('/api/menu-items', json=body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['item']


class TestMenuRoutes:

    def test_create_and_get(self, client):
        menu = _create_menu(client, location='header', header_style={'header_size': 'lg'})

        resp = client.get(f"/api/menus/{menu['id']}")
        assert resp.status_code == 200
        data = resp.get_json()['menu']
        assert data['name'] == 'Main'
        assert data['header_style']['header_size'] == 'lg'

        assert client.get('/api/menus/location/header').get_json()['menu']['id'] == menu['id']
        assert client.get('/api/menus/name/Main').get_json()['menu']['id'] == menu['id']
        assert len(client.get('/api/menus').get_json()['menus']) == 1

    def test_get_missing(self, client):
        resp = client.get('/api/menus/missing')
        assert resp.status_code == 404
        assert resp.get_json()['success'] is False

    def test_create_invalid(self, client):
        resp = client.post('/api/menus', json={'location': 'header'})
        assert resp.status_code == 400
        assert resp.get_json() == {'success': False, 'error': 'Name is required'}

    def test_non_object_body(self, client):
        resp = client.post('/api/menus', json=['Main'])
        assert resp.status_code == 400

    def test_update(self, client):
        menu = _create_menu(client)
        resp = client.put(f"/api/menus/{menu['id']}", json={'location': 'footer'})
        assert resp.status_code == 200
        assert resp.get_json()['menu']['location'] == 'footer'

    def test_update_missing(self, client):
        resp = client.put('/api/menus/missing', json={'name': 'X'})
        assert resp.status_code == 404

    def test_delete(self, client):
        menu = _create_menu(client)
        parent = _create_item(client, menu['id'], 'Products')
        _create_item(client, menu['id'], 'Shoes', parent_id=parent['id'])

        resp = client.delete(f"/api/menus/{menu['id']}")
        assert resp.get_json() == {'success': True}
        assert client.get(f"/api/menus/{menu['id']}").status_code == 404


class TestItemRoutes:

    def test_create_requires_url_or_page(self, client):
        menu = _create_menu(client)
        resp = client.post('/api/menu-items', json={'menu_id': menu['id'], 'title': 'About'})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'Either a page or custom URL must be provided'

    def test_create_with_missing_page(self, client):
        menu = _create_menu(client)
        resp = client.post('/api/menu-items', json={'menu_id': menu['id'], 'title': 'Docs', 'page_id': 'x'})
        assert resp.status_code == 404
        assert resp.get_json()['error'] == 'Selected page not found'

    def test_create_with_page(self, client, make_page):
        make_page('page-42', 'documentation')
        menu = _create_menu(client)
        item = _create_item(client, menu['id'], 'Docs', page_id='page-42', url='/other')
        assert item['url'] == '/documentation'
        assert item['order'] == 1

    def test_update_and_delete(self, client):
        menu = _create_menu(client)
        item = _create_item(client, menu['id'], 'Home')

        resp = client.put(f"/api/menu-items/{item['id']}", json={'title': 'Start', 'url': '/', 'target': '_blank'})
        assert resp.status_code == 200
        assert resp.get_json()['item']['target'] == '_blank'

        assert client.delete(f"/api/menu-items/{item['id']}").get_json() == {'success': True}
        assert client.delete(f"/api/menu-items/{item['id']}").status_code == 404

    def test_single_order(self, client):
        menu = _create_menu(client)
        item = _create_item(client, menu['id'], 'Home')
        resp = client.put(f"/api/menu-items/{item['id']}/order", json={'new_order': 9})
        assert resp.get_json()['item']['order'] == 9

    def test_bulk_order(self, client):
        menu = _create_menu(client)
        a = _create_item(client, menu['id'], 'Home')
        c = _create_item(client, menu['id'], 'Docs')

        resp = client.put('/api/menu-items/order', json={'items': [
            {'id': a['id'], 'order': 2},
            {'id': c['id'], 'order': 1},
        ]})
        assert resp.get_json() == {'success': True}

        items = client.get(f"/api/menus/{menu['id']}").get_json()['menu']['items']
        assert [i['title'] for i in items] == ['Docs', 'Home']

    def test_bulk_order_rollback(self, client):
        menu = _create_menu(client)
        a = _create_item(client, menu['id'], 'Home')

        resp = client.put('/api/menu-items/order', json={'items': [
            {'id': a['id'], 'order': 5},
            {'id': 'ghost', 'order': 1},
        ]})
        assert resp.status_code == 500
        assert resp.get_json()['error'].startswith('Failed to update menu item orders:')

        items = client.get(f"/api/menus/{menu['id']}").get_json()['menu']['items']
        assert items[0]['order'] == 1

    def test_bulk_order_promote(self, client):
        menu = _create_menu(client)
        parent = _create_item(client, menu['id'], 'Products')
        child = _create_item(client, menu['id'], 'Shoes', parent_id=parent['id'])

        client.put('/api/menu-items/order', json={'items': [{'id': child['id'], 'order': 2, 'parent_id': None}]})

        items = client.get(f"/api/menus/{menu['id']}").get_json()['menu']['items']
        assert [i['title'] for i in items] == ['Products', 'Shoes']


class TestStyleRoutes:

    def test_header_style_requires_token(self, client):
        menu = _create_menu(client)
        resp = client.put(f"/api/menus/{menu['id']}/header-style", json={'header_size': 'sm'})
        assert resp.status_code == 401

    def test_header_style_auth_checked_before_body(self, client):
        menu = _create_menu(client)
        resp = client.put(f"/api/menus/{menu['id']}/header-style", data='not json', content_type='text/plain')
        assert resp.status_code == 401

    def test_header_style_wrong_type(self, client, api_token):
        menu = _create_menu(client)
        resp = client.put(
            f"/api/menus/{menu['id']}/header-style",
            json={'fixed_header': 'yes'},
            headers={'Authorization': f'Bearer {api_token}'}
        )
        assert resp.status_code == 400
        assert resp.get_json() == {'success': False, 'error': 'fixed_header must be true or false'}

    def test_header_style_bad_token(self, client, api_token):
        menu = _create_menu(client)
        resp = client.put(
            f"/api/menus/{menu['id']}/header-style",
            json={'header_size': 'sm'},
            headers={'Authorization': 'Bearer wrong'}
        )
        assert resp.status_code == 401

    def test_header_style_with_token(self, client, api_token):
        menu = _create_menu(client)
        resp = client.put(
            f"/api/menus/{menu['id']}/header-style",
            json={'header_size': 'sm', 'advanced_options': {'blur': 2}},
            headers={'Authorization': f'Bearer {api_token}'}
        )
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['success'] is True
        assert body['header_style']['advanced_options'] == {'blur': 2}

    def test_header_style_missing_menu(self, client, api_token):
        resp = client.put(
            '/api/menus/missing/header-style',
            json={},
            headers={'Authorization': f'Bearer {api_token}'}
        )
        assert resp.status_code == 404

    def test_footer_style(self, client):
        menu = _create_menu(client)
        resp = client.put(f"/api/menus/{menu['id']}/footer-style", json={'alignment': 'center'})
        body = resp.get_json()
        assert body['success'] is True
        assert body['footer_style']['alignment'] == 'center'

    def test_footer_style_wrong_type(self, client):
        menu = _create_menu(client)
        resp = client.put(f"/api/menus/{menu['id']}/footer-style", json={'border_top': 'yes'})
        assert resp.status_code == 400
        assert resp.get_json()['success'] is False

    def test_create_menu_with_badly_typed_style(self, client):
        resp = client.post('/api/menus', json={'name': 'Main', 'header_style': {'transparency': 'x'}})
        assert resp.status_code == 400
        assert client.get('/api/menus').get_json()['menus'] == []

    def test_footer_style_missing_menu(self, client):
        resp = client.put('/api/menus/missing/footer-style', json={'alignment': 'center'})
        body = resp.get_json()
        assert body['success'] is False
        assert body['footer_style'] is None
        assert 'not found' in body['message']


class TestPages:

    def test_list(self, client, make_page):
        make_page('p1', 'about', title='About')
        make_page('p2', 'hidden', published=False)
        assert client.get('/api/pages').get_json()['pages'] == [{'id': 'p1', 'title': 'About', 'slug': 'about'}]
