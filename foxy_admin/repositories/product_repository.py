# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula todo el acceso a la colección "products".
# ==============================================================================

from typing import Any, Dict, List, Optional

from foxy_admin import config
from foxy_admin.models import Product
from foxy_admin.repositories.base import BaseRepository
from foxy_admin.repositories.interfaces import IDocumentStore


class ProductRepository(BaseRepository):
    """
    Repositorio de productos.

    Los métodos que reciben product_id lanzan InvalidIdError si el ID no es
    un ObjectId válido, antes de tocar la base de datos.
    """

    def __init__(self, store: IDocumentStore, collection: str = config.PRODUCTS_COLLECTION):
        super().__init__(store, collection)

    def list_all(self) -> List[Product]:
        """Todos los productos, incluidos los agotados y los de adopción."""
        return [Product.from_dict(d) for d in self.store.find(self.collection, {})]

    def get_by_id(self, product_id: Any) -> Optional[Product]:
        doc = self.store.find_one(self.collection, self._by_id(product_id))
        return Product.from_dict(doc) if doc else None

    def create(self, fields: Dict[str, Any]) -> str:
        return self.store.insert_one(self.collection, fields)

    def update_fields(self, product_id: Any, fields: Dict[str, Any]) -> bool:
        """
        Actualiza campos de un producto.

        Returns:
            True si el producto existía
        """
        return self.store.update_one(self.collection, self._by_id(product_id), fields) > 0

    def delete(self, product_id: Any) -> bool:
        """
        Elimina un producto.

        Returns:
            True si se eliminó, False si no existía
        """
        return self.store.delete_one(self.collection, self._by_id(product_id)) > 0
