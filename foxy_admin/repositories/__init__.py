# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (MongoDB).
# Los servicios solo ven entidades (models/), nunca documentos ni pymongo.
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos (contratos)
# ├── base.py                → Almacenes (Mongo / memoria), errores, BaseRepository
# ├── user_repository.py     → Colección users
# ├── product_repository.py  → Colección products
# ├── order_repository.py    → Colecciones orders + completed_orders
# └── quote_repository.py    → Colección badge_quotes
# ==============================================================================

from .interfaces import (
    IDocumentStore,
    IUserRepository,
    IProductRepository,
    IOrderRepository,
    IQuoteRepository,
)

from .base import (
    BaseRepository,
    InvalidIdError,
    MemoryDocumentStore,
    MongoDocumentStore,
    StoreError,
    parse_object_id,
)
from .user_repository import UserRepository
from .product_repository import ProductRepository
from .order_repository import CompletedOrderUpdateError, OrderRepository
from .quote_repository import QuoteRepository

__all__ = [
    # Interfaces
    'IDocumentStore',
    'IUserRepository',
    'IProductRepository',
    'IOrderRepository',
    'IQuoteRepository',

    # Base
    'BaseRepository',
    'InvalidIdError',
    'MemoryDocumentStore',
    'MongoDocumentStore',
    'StoreError',
    'parse_object_id',

    # Implementaciones
    'UserRepository',
    'ProductRepository',
    'OrderRepository',
    'CompletedOrderUpdateError',
    'QuoteRepository',
]
