# ==============================================================================
# REPOSITORIO BASE - Almacén de documentos (MongoDB / memoria)
# ==============================================================================
# Dos implementaciones del mismo contrato (IDocumentStore):
#   - MongoDocumentStore: pymongo, producción
#   - MemoryDocumentStore: diccionarios en memoria, desarrollo y tests
#
# Los repositorios de dominio heredan de BaseRepository y nunca hablan con
# pymongo directamente.
# ==============================================================================

import copy
import threading
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from foxy_admin.repositories.interfaces import Filter, IDocumentStore, Sort


class StoreError(Exception):
    """Fallo del almacén de documentos (conexión, timeout, permisos...)."""
    pass


class InvalidIdError(ValueError):
    """El identificador recibido no es un ObjectId válido."""
    pass


def parse_object_id(raw: Any) -> ObjectId:
    """
    Convierte un ID recibido en la petición a ObjectId.

    Args:
        raw: Texto hexadecimal de 24 caracteres (o un ObjectId)

    Returns:
        ObjectId

    Raises:
        InvalidIdError: Si el valor no es un ObjectId válido
    """
    if isinstance(raw, ObjectId):
        return raw
    if not isinstance(raw, str) or not ObjectId.is_valid(raw.strip()):
        raise InvalidIdError(f"Invalid id: {raw!r}")
    try:
        return ObjectId(raw.strip())
    except (InvalidId, TypeError) as e:
        raise InvalidIdError(str(e)) from e


# ==============================================================================
# MONGODB
# ==============================================================================

class MongoDocumentStore:
    """
    Almacén respaldado por MongoDB.

    Traduce cualquier PyMongoError a StoreError para que los servicios
    no dependan del driver.
    """

    def __init__(self, database):
        """
        Args:
            database: pymongo.database.Database ya conectada
        """
        self.database = database

    @classmethod
    def from_uri(cls, uri: str, database_name: str) -> 'MongoDocumentStore':
        client = MongoClient(uri, serverSelectionTimeoutMS=5000)
        return cls(client[database_name])

    def find_one(self, collection: str, filter: Filter) -> Optional[Dict[str, Any]]:
        try:
            return self.database[collection].find_one(filter)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self.database[collection].find(filter)
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def count(self, collection: str, filter: Filter) -> int:
        try:
            return self.database[collection].count_documents(filter)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        try:
            result = self.database[collection].insert_one(dict(document))
            return str(result.inserted_id)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def update_one(self, collection: str, filter: Filter, fields: Dict[str, Any]) -> int:
        try:
            result = self.database[collection].update_one(filter, {'$set': fields})
            return result.matched_count
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def delete_one(self, collection: str, filter: Filter) -> int:
        try:
            result = self.database[collection].delete_one(filter)
            return result.deleted_count
        except PyMongoError as e:
            raise StoreError(str(e)) from e


# ==============================================================================
# MEMORIA
# ==============================================================================

class MemoryDocumentStore:
    """
    Almacén en memoria con el mismo contrato que MongoDocumentStore.

    Soporta el subconjunto de filtros que usa la aplicación:
    igualdad exacta y {"$in": [...]}. Los documentos se copian al entrar y
    al salir para que nadie modifique el estado interno por referencia.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[ObjectId, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _collection(self, name: str) -> Dict[ObjectId, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _matches(document: Dict[str, Any], filter: Filter) -> bool:
        for field, expected in filter.items():
            value = document.get(field)
            if isinstance(expected, dict) and '$in' in expected:
                if value not in expected['$in']:
                    return False
            elif value != expected:
                return False
        return True

    def find_one(self, collection: str, filter: Filter) -> Optional[Dict[str, Any]]:
        with self._lock:
            for doc in self._collection(collection).values():
                if self._matches(doc, filter):
                    return copy.deepcopy(doc)
        return None

    def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        with self._lock:
            docs = [copy.deepcopy(d) for d in self._collection(collection).values()
                    if self._matches(d, filter)]
        # Orden estable: aplicar las claves de la última a la primera
        for field, direction in reversed(list(sort or [])):
            docs.sort(key=lambda d: d.get(field, ''), reverse=direction < 0)
        if skip:
            docs = docs[skip:]
        if limit:
            docs = docs[:limit]
        return docs

    def count(self, collection: str, filter: Filter) -> int:
        with self._lock:
            return sum(1 for d in self._collection(collection).values() if self._matches(d, filter))

    def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        doc = copy.deepcopy(document)
        doc_id = doc.get('_id') or ObjectId()
        doc['_id'] = doc_id
        with self._lock:
            self._collection(collection)[doc_id] = doc
        return str(doc_id)

    def update_one(self, collection: str, filter: Filter, fields: Dict[str, Any]) -> int:
        with self._lock:
            for doc in self._collection(collection).values():
                if self._matches(doc, filter):
                    doc.update(copy.deepcopy(fields))
                    return 1
        return 0

    def delete_one(self, collection: str, filter: Filter) -> int:
        with self._lock:
            docs = self._collection(collection)
            for doc_id, doc in list(docs.items()):
                if self._matches(doc, filter):
                    del docs[doc_id]
                    return 1
        return 0


# ==============================================================================
# REPOSITORIO BASE
# ==============================================================================

class BaseRepository:
    """
    Clase base para los repositorios de dominio.
    Guarda el almacén y el nombre de la colección principal.
    """

    def __init__(self, store: IDocumentStore, collection: str):
        """
        Args:
            store: Almacén de documentos (MongoDB o memoria)
            collection: Nombre de la colección
        """
        self.store = store
        self.collection = collection

    def _by_id(self, record_id: Any) -> Filter:
        return {'_id': parse_object_id(record_id)}
