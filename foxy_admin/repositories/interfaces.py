# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que implementan el almacén
# de documentos y los repositorios. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Los servicios dependen de interfaces, NO de pymongo
#    - MongoDB en producción, diccionarios en memoria en tests
#
# 2. TESTING
#    - Fácil crear dobles que fallen a propósito (simular caída de MongoDB)
#
# 3. DOCUMENTACIÓN
#    - Contratos claros de qué hace cada repositorio
#
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from foxy_admin.models import CustomBadgeQuote, Order, Product, User


# Filtro estilo MongoDB: {"campo": valor} o {"campo": {"$in": [...]}}
Filter = Dict[str, Any]
# Orden estilo pymongo: [("created_at", -1)]
Sort = Sequence[Tuple[str, int]]


# ==============================================================================
# ALMACÉN DE DOCUMENTOS
# ==============================================================================

@runtime_checkable
class IDocumentStore(Protocol):
    """
    Almacén de documentos direccionado por nombre de colección.

    Todas las operaciones pueden lanzar StoreError ante un fallo del motor.
    update_one aplica semántica $set sobre los campos indicados.
    """

    def find_one(self, collection: str, filter: Filter) -> Optional[Dict[str, Any]]:
        ...

    def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        ...

    def count(self, collection: str, filter: Filter) -> int:
        ...

    def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        """Inserta y devuelve el _id asignado (hex)."""
        ...

    def update_one(self, collection: str, filter: Filter, fields: Dict[str, Any]) -> int:
        """Devuelve la cantidad de documentos que coincidieron (0 o 1)."""
        ...

    def delete_one(self, collection: str, filter: Filter) -> int:
        """Devuelve la cantidad de documentos eliminados (0 o 1)."""
        ...


# ==============================================================================
# INTERFACES ESPECÍFICAS POR DOMINIO
# ==============================================================================

@runtime_checkable
class IUserRepository(Protocol):

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def user_exists(self, username: str) -> bool:
        ...

    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> str:
        ...


@runtime_checkable
class IProductRepository(Protocol):

    def list_all(self) -> List[Product]:
        ...

    def get_by_id(self, product_id: Any) -> Optional[Product]:
        ...

    def create(self, fields: Dict[str, Any]) -> str:
        ...

    def update_fields(self, product_id: Any, fields: Dict[str, Any]) -> bool:
        ...

    def delete(self, product_id: Any) -> bool:
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Pedidos como una sola entidad lógica.
    Cuántas colecciones hay detrás es un detalle de la implementación.
    """

    def list_for_triage(self, show_completed: bool) -> List[Order]:
        ...

    def update_status(self, order_id: Any, status: str, updated_at: str) -> bool:
        ...


@runtime_checkable
class IQuoteRepository(Protocol):

    def count(self, status: Optional[str] = None) -> int:
        ...

    def list_page(self, status: Optional[str], skip: int, limit: int) -> List[CustomBadgeQuote]:
        ...

    def update_status(self, quote_id: Any, status: str, updated_at: str) -> bool:
        ...
