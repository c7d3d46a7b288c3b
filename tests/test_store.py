# -*- coding: utf-8 -*-
"""
Almacenes de documentos y repositorios.
"""
import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from foxy_admin.repositories import (
    IDocumentStore,
    IOrderRepository,
    IProductRepository,
    IQuoteRepository,
    IUserRepository,
    InvalidIdError,
    MongoDocumentStore,
    OrderRepository,
    ProductRepository,
    QuoteRepository,
    StoreError,
    UserRepository,
    parse_object_id,
)


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id(f'  {oid}  ') == oid
    assert parse_object_id(oid) is oid


@pytest.mark.parametrize('raw', ['', 'xyz', '123', 'g' * 24, None, 42])
def test_malformed_ids(raw):
    with pytest.raises(InvalidIdError):
        parse_object_id(raw)


def test_repositories_reject_malformed_ids_before_touching_the_store(store):
    repo = ProductRepository(store)
    with pytest.raises(InvalidIdError):
        repo.delete('bad')
    assert store.count('products', {}) == 0


# =========================================================================
# MEMORIA
# =========================================================================

def test_memory_filters_and_paging(store):
    for i, status in enumerate(['a', 'b', 'a', 'c', 'a']):
        store.insert_one('things', {'n': i, 'status': status})

    assert store.count('things', {'status': 'a'}) == 3
    assert store.count('things', {'status': {'$in': ['b', 'c']}}) == 2

    docs = store.find('things', {'status': 'a'}, sort=[('n', -1)], skip=1, limit=1)
    assert [d['n'] for d in docs] == [2]


def test_memory_update_sets_fields_only(store):
    doc_id = store.insert_one('things', {'a': 1, 'b': 2})
    assert store.update_one('things', {'_id': ObjectId(doc_id)}, {'b': 3}) == 1
    assert store.find_one('things', {'_id': ObjectId(doc_id)}) == {'_id': ObjectId(doc_id), 'a': 1, 'b': 3}
    assert store.update_one('things', {'_id': ObjectId()}, {'b': 4}) == 0


def test_memory_documents_are_copies(store):
    doc_id = store.insert_one('things', {'tags': ['x']})
    found = store.find_one('things', {'_id': ObjectId(doc_id)})
    found['tags'].append('y')
    assert store.find_one('things', {'_id': ObjectId(doc_id)})['tags'] == ['x']


def test_memory_delete(store):
    doc_id = store.insert_one('things', {'a': 1})
    assert store.delete_one('things', {'_id': ObjectId(doc_id)}) == 1
    assert store.delete_one('things', {'_id': ObjectId(doc_id)}) == 0


# =========================================================================
# MONGODB (errores del driver)
# =========================================================================

class _BrokenCollection:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError('no servers available')
        return fail


class _BrokenDatabase:
    def __getitem__(self, name):
        return _BrokenCollection()


@pytest.mark.parametrize('call', [
    lambda s: s.find_one('products', {}),
    lambda s: s.find('products', {}),
    lambda s: s.count('products', {}),
    lambda s: s.insert_one('products', {'name': 'x'}),
    lambda s: s.update_one('products', {}, {'name': 'x'}),
    lambda s: s.delete_one('products', {}),
])
def test_driver_errors_become_store_errors(call):
    with pytest.raises(StoreError):
        call(MongoDocumentStore(_BrokenDatabase()))


# =========================================================================
# CONTRATOS
# =========================================================================

@pytest.mark.parametrize('repo_class, protocol', [
    (UserRepository, IUserRepository),
    (ProductRepository, IProductRepository),
    (OrderRepository, IOrderRepository),
    (QuoteRepository, IQuoteRepository),
])
def test_repositories_satisfy_their_protocols(store, repo_class, protocol):
    assert isinstance(repo_class(store), protocol)


def test_stores_satisfy_the_document_store_protocol(store):
    assert isinstance(store, IDocumentStore)
    assert isinstance(MongoDocumentStore(object()), IDocumentStore)
