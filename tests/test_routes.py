# -*- coding: utf-8 -*-
"""
Rutas Flask de punta a punta con el test_client y un almacén en memoria.
"""
import pytest
from bson import ObjectId

from foxy_admin.app_container import AppContainer, get_container
from foxy_admin.main import app
from foxy_admin.services.badge_image_service import BadgeImageService
from foxy_admin.services.password_service import hash_password

from conftest import FailingStore, login, make_order, make_quote


# =========================================================================
# PÚBLICAS
# =========================================================================

def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.get_json() == {'status': 'healthy', 'service': 'foxy-fabrications-admin'}


def test_info_shape(client):
    data = client.get('/info').get_json()
    assert set(data) == {'service', 'image', 'build_time', 'git_commit', 'environment'}


def test_security_headers(client):
    r = client.get('/login')
    assert r.headers['X-Frame-Options'] == 'DENY'
    assert r.headers['X-Content-Type-Options'] == 'nosniff'


def test_login_form_keeps_next(client):
    html = client.get('/login?next=/orders').get_data(as_text=True)
    assert 'name="next" value="/orders"' in html


# =========================================================================
# LOGIN / LOGOUT
# =========================================================================

def test_login_redirects_to_products_by_default(client, admin_user):
    r = login(client, *admin_user)
    assert r.status_code == 302
    assert r.headers['Location'] == '/products'


def test_login_honours_safe_next(client, admin_user):
    assert login(client, *admin_user, next_url='/orders?page=2').headers['Location'] == '/orders?page=2'


def test_login_ignores_offsite_next(client, admin_user):
    assert login(client, *admin_user, next_url='//evil.example').headers['Location'] == '/products'


def test_bad_credentials(client, admin_user):
    r = login(client, 'admin', 'wrong')
    assert r.status_code == 200
    assert 'Bad credentials' in r.get_data(as_text=True)
    assert client.get('/products').status_code == 302


def test_out_of_range_stored_hash_is_bad_credentials(client, store):
    store.insert_one('users', {
        'username': 'legacy',
        'password_hash': 'pbkdf2:sha256:99999999999999999999$salt$deadbeef',
        'is_admin': True,
    })
    r = login(client, 'legacy', 'whatever')
    assert r.status_code == 200
    assert 'Bad credentials' in r.get_data(as_text=True)
    assert client.get('/products').status_code == 302


def test_empty_username(client):
    r = login(client, '', 'x')
    assert 'Username cannot be empty' in r.get_data(as_text=True)


def test_store_failure_during_login():
    AppContainer.reset_instance()
    get_container(FailingStore({'users': {'find_one'}}))
    try:
        with app.test_client() as c:
            r = login(c, 'admin', 'x')
            assert r.status_code == 200
            assert 'Server error' in r.get_data(as_text=True)
    finally:
        AppContainer.reset_instance()


def test_logout(admin_client):
    r = admin_client.get('/logout')
    assert r.status_code == 302
    assert r.headers['Location'] == '/'
    assert admin_client.get('/products').status_code == 302


# =========================================================================
# CONTROL DE ACCESO
# =========================================================================

def test_dashboard_for_anonymous(client):
    r = client.get('/')
    assert r.status_code == 302
    assert r.headers['Location'].startswith('/login')


def test_dashboard_for_admin(admin_client):
    r = admin_client.get('/')
    assert r.status_code == 302
    assert r.headers['Location'] == '/products'


@pytest.mark.parametrize('path', ['/', '/products', '/orders', '/quotes', '/calculator', '/products/new'])
def test_non_admin_gets_403(client, staff_user, path):
    login(client, *staff_user)
    r = client.get(path)
    assert r.status_code == 403
    assert r.get_data(as_text=True) == 'Access denied - Admin privileges required'


def test_anonymous_page_redirect_keeps_destination(client):
    r = client.get('/orders?page=2')
    assert r.headers['Location'] == '/login?next=%2Forders%3Fpage%3D2'


@pytest.mark.parametrize('method, path', [
    ('post', '/orders/update-status'),
    ('post', '/quotes/update-status'),
    ('delete', f'/products/delete/{ObjectId()}'),
])
def test_json_routes_deny_anonymous(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 403
    assert r.get_json() == {'success': False, 'message': 'Access denied'}


# =========================================================================
# PRODUCTOS
# =========================================================================

PRODUCT_FORM = {'name': 'Fox badge', 'price': '4.50', 'quantity': '12', 'description': 'Orange'}


def test_create_and_list_products(admin_client, store):
    r = admin_client.post('/products/new', data=PRODUCT_FORM)
    assert r.status_code == 302

    html = admin_client.get('/products').get_data(as_text=True)
    assert 'Fox badge' in html
    assert 'Product created successfully' in html
    assert store.count('products', {}) == 1


def test_create_with_invalid_form(admin_client, store):
    r = admin_client.post('/products/new', data=dict(PRODUCT_FORM, name=''))
    assert r.status_code == 200
    assert 'Product name cannot be empty' in r.get_data(as_text=True)
    assert store.count('products', {}) == 0


def test_edit_product(admin_client, store):
    product_id = store.insert_one('products', {'name': 'Old', 'price': '1.00', 'quantity': 1,
                                               'image_url': '/static/images/placeholder.png'})
    assert 'Old' in admin_client.get(f'/products/edit/{product_id}').get_data(as_text=True)

    r = admin_client.post(f'/products/edit/{product_id}', data=dict(PRODUCT_FORM, adoptable='on'))
    assert r.status_code == 302
    assert r.headers['Location'] == '/products'
    doc = store.find_one('products', {'_id': ObjectId(product_id)})
    assert doc['name'] == 'Fox badge'
    assert doc['adoptable'] is True


def test_edit_with_invalid_form_shows_message(admin_client, store):
    product_id = store.insert_one('products', {'name': 'Old', 'price': '1.00', 'quantity': 1})
    r = admin_client.post(f'/products/edit/{product_id}', data=dict(PRODUCT_FORM, price='free'))
    assert r.status_code == 200
    assert 'Price must be a valid number' in r.get_data(as_text=True)
    assert store.find_one('products', {'_id': ObjectId(product_id)})['name'] == 'Old'


def test_edit_unknown_or_malformed_product(admin_client):
    assert admin_client.get('/products/edit/not-an-id').status_code == 400
    assert admin_client.get(f'/products/edit/{ObjectId()}').status_code == 404
    assert admin_client.post(f'/products/edit/{ObjectId()}', data=PRODUCT_FORM).status_code == 404


def test_delete_product(admin_client, store):
    product_id = store.insert_one('products', {'name': 'Gone'})
    r = admin_client.delete(f'/products/delete/{product_id}')
    assert r.get_json() == {'success': True, 'message': 'Product deleted successfully', 'product_id': product_id}
    assert admin_client.delete(f'/products/delete/{product_id}').get_json()['message'] == 'Product not found'
    assert admin_client.delete('/products/delete/bad').get_json()['message'] == 'Invalid product ID'


# =========================================================================
# PEDIDOS
# =========================================================================

def test_orders_page(admin_client, store):
    store.insert_one('orders', make_order('FOX-A1', 'pending', '2025-01-01T10:00:00Z'))
    store.insert_one('completed_orders', make_order('FOX-C1', 'paid', '2025-01-02T10:00:00Z'))
    store.insert_one('completed_orders', make_order('FOX-C2', 'completed', '2025-01-03T10:00:00Z'))

    html = admin_client.get('/orders').get_data(as_text=True)
    assert 'FOX-A1' in html and 'FOX-C1' in html
    assert 'FOX-C2' not in html

    html = admin_client.get('/orders?show_completed=true').get_data(as_text=True)
    assert 'FOX-C2' in html
    assert '£44.98' in html


def test_orders_page_with_broken_store():
    AppContainer.reset_instance()
    store = FailingStore({'orders': {'find'}})
    get_container(store)
    store.insert_one('users', {'username': 'admin', 'password_hash': hash_password('pw'), 'is_admin': True})
    try:
        with app.test_client() as c:
            login(c, 'admin', 'pw')
            r = c.get('/orders')
            assert r.status_code == 200
            assert 'Database error fetching orders' in r.get_data(as_text=True)
    finally:
        AppContainer.reset_instance()


def test_update_order_status(admin_client, store):
    doc = make_order('FOX-C1', 'paid', '2025-01-02T10:00:00Z')
    store.insert_one('completed_orders', doc)

    r = admin_client.post('/orders/update-status', data={'order_id': str(doc['_id']), 'status': 'shipped'})
    assert r.get_json()['message'] == 'Order status updated to shipped'

    r = admin_client.post('/orders/update-status', data={'order_id': str(doc['_id']), 'status': 'lost'})
    assert r.get_json() == {'success': False, 'message': 'Invalid status', 'order_id': None}


# =========================================================================
# PRESUPUESTOS
# =========================================================================

def test_quotes_page(admin_client, store):
    store.insert_one('badge_quotes', make_quote('pending', '2025-03-01T12:00:00Z', email='pending@example.com'))
    store.insert_one('badge_quotes', make_quote('accepted', '2025-03-02T12:00:00Z', email='accepted@example.com'))

    html = admin_client.get('/quotes').get_data(as_text=True)
    assert 'pending@example.com' in html and 'accepted@example.com' in html

    html = admin_client.get('/quotes?status_filter=accepted').get_data(as_text=True)
    assert 'accepted@example.com' in html
    assert 'pending@example.com' not in html


def test_update_quote_status(admin_client, store):
    doc = make_quote('pending', '2025-03-01T12:00:00Z')
    store.insert_one('badge_quotes', doc)
    r = admin_client.post('/quotes/update-status', data={'quote_id': str(doc['_id']), 'status': 'quoted'})
    assert r.get_json()['success'] is True
    assert store.find_one('badge_quotes', {'_id': doc['_id']})['status'] == 'quoted'


def test_badge_image(admin_client, container, tmp_path):
    (tmp_path / 'badge_fox.jpg').write_bytes(b'jpeg-bytes')
    container._badge_image_service = BadgeImageService(str(tmp_path))

    r = admin_client.get('/quotes/image/badge_fox.jpg')
    assert r.status_code == 200
    assert r.data == b'jpeg-bytes'
    assert r.headers['Content-Type'] == 'image/jpeg'
    assert r.headers['Cache-Control'] == 'private, max-age=3600'

    assert admin_client.get('/quotes/image/badge_nope.jpg').status_code == 404
    assert admin_client.get('/quotes/image/other.jpg').status_code == 400
    assert admin_client.get('/quotes/image/badge_..%5Cx.jpg').status_code == 400


def test_badge_image_requires_admin(client, staff_user):
    assert client.get('/quotes/image/badge_fox.jpg').status_code == 403
    login(client, *staff_user)
    assert client.get('/quotes/image/badge_fox.jpg').status_code == 403


# =========================================================================
# CLI
# =========================================================================

def test_create_user_command(container, store):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-user', 'boss', '--admin', '--password', 'pw'])
    assert result.exit_code == 0
    assert "Created admin 'boss'" in result.output
    assert store.find_one('users', {'username': 'boss'})['is_admin'] is True

    result = runner.invoke(args=['create-user', 'boss', '--password', 'pw'])
    assert result.exit_code != 0
    assert 'User already exists' in result.output
