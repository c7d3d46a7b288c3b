# -*- coding: utf-8 -*-
"""
Fixtures compartidas.

El entorno se configura ANTES de importar foxy_admin: config.py lee las
variables de entorno al importarse.
"""
import os
import tempfile

os.environ.setdefault('ADMIN_LOGS_DIR', tempfile.mkdtemp(prefix='foxy_admin_logs_'))
os.environ.setdefault('STORAGE_BACKEND', 'memory')
os.environ.setdefault('ADMIN_SECRET_KEY', 'test-secret-key')

import pytest
from bson import ObjectId

from foxy_admin.app_container import AppContainer, get_container
from foxy_admin.main import app
from foxy_admin.repositories import MemoryDocumentStore, StoreError
from foxy_admin.services.password_service import hash_password


class FailingStore(MemoryDocumentStore):
    """
    MemoryDocumentStore que falla en las colecciones indicadas.

    failing = {'orders': {'find'}, 'completed_orders': {'update_one'}}
    """

    def __init__(self, failing=None):
        super().__init__()
        self.failing = failing or {}
        self.writes = []

    def _check(self, collection, operation):
        if operation in self.failing.get(collection, ()):
            raise StoreError(f"{operation} on {collection} failed")

    def find_one(self, collection, filter):
        self._check(collection, 'find_one')
        return super().find_one(collection, filter)

    def find(self, collection, filter, sort=None, skip=0, limit=0):
        self._check(collection, 'find')
        return super().find(collection, filter, sort=sort, skip=skip, limit=limit)

    def count(self, collection, filter):
        self._check(collection, 'count')
        return super().count(collection, filter)

    def insert_one(self, collection, document):
        self._check(collection, 'insert_one')
        self.writes.append(('insert_one', collection))
        return super().insert_one(collection, document)

    def update_one(self, collection, filter, fields):
        self._check(collection, 'update_one')
        self.writes.append(('update_one', collection))
        return super().update_one(collection, filter, fields)

    def delete_one(self, collection, filter):
        self._check(collection, 'delete_one')
        self.writes.append(('delete_one', collection))
        return super().delete_one(collection, filter)


def make_order(reference, status, created_at, **extra):
    doc = {
        '_id': ObjectId(),
        'order_reference': reference,
        'customer_name': 'Ada Lovelace',
        'customer_email': 'ada@example.com',
        'shipping_address': {
            'line1': '1 Fox Lane',
            'city': 'Bristol',
            'postcode': 'BS1 1AA',
            'country': 'UK',
        },
        'items': [{'product_id': 'p1', 'name': 'Fox badge', 'quantity': 2,
                   'price': 19.99, 'line_total': 39.98}],
        'subtotal': 39.98,
        'shipping_cost': 5.0,
        'total': 44.98,
        'currency': 'GBP',
        'status': status,
        'created_at': created_at,
        'updated_at': created_at,
    }
    doc.update(extra)
    return doc


def make_quote(status, created_at, **extra):
    doc = {
        '_id': ObjectId(),
        'num_colors': '3',
        'double_sided': False,
        'print_size': '38mm',
        'thickness': '3mm',
        'email': 'customer@example.com',
        'image_path': 'private_uploads/badge_abc.png',
        'estimated_price': 12.5,
        'status': status,
        'created_at': created_at,
        'updated_at': created_at,
    }
    doc.update(extra)
    return doc


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def container(store):
    AppContainer.reset_instance()
    c = get_container(store)
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def client(container):
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def admin_user(store):
    store.insert_one('users', {
        'username': 'admin',
        'password_hash': hash_password('fox-secret'),
        'is_admin': True,
    })
    return 'admin', 'fox-secret'


@pytest.fixture
def staff_user(store):
    store.insert_one('users', {
        'username': 'staff',
        'password_hash': hash_password('staff-secret'),
        'is_admin': False,
    })
    return 'staff', 'staff-secret'


def login(client, username, password, next_url=None):
    data = {'username': username, 'password': password}
    if next_url is not None:
        data['next'] = next_url
    return client.post('/login', data=data)


@pytest.fixture
def admin_client(client, admin_user):
    r = login(client, *admin_user)
    assert r.status_code == 302
    return client
