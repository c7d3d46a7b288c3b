# ==============================================================================
# REPOSITORIO DE PRESUPUESTOS
# ==============================================================================
# Encapsula el acceso a la colección "badge_quotes".
# A diferencia de los pedidos, aquí la paginación se delega a MongoDB
# (count + sort + skip + limit).
# ==============================================================================

from typing import Any, List, Optional

from foxy_admin import config
from foxy_admin.models import CustomBadgeQuote
from foxy_admin.repositories.base import BaseRepository
from foxy_admin.repositories.interfaces import Filter, IDocumentStore


class QuoteRepository(BaseRepository):

    def __init__(self, store: IDocumentStore, collection: str = config.QUOTES_COLLECTION):
        super().__init__(store, collection)

    @staticmethod
    def _status_filter(status: Optional[str]) -> Filter:
        # None = todos los estados
        return {} if status is None else {'status': status}

    def count(self, status: Optional[str] = None) -> int:
        return self.store.count(self.collection, self._status_filter(status))

    def list_page(self, status: Optional[str], skip: int, limit: int) -> List[CustomBadgeQuote]:
        """
        Una página de presupuestos, los más recientes primero.

        Args:
            status: Estado exacto o None para todos
            skip: Documentos a saltar
            limit: Tamaño de página
        """
        docs = self.store.find(
            self.collection,
            self._status_filter(status),
            sort=[('created_at', -1)],
            skip=skip,
            limit=limit,
        )
        return [CustomBadgeQuote.from_dict(d) for d in docs]

    def update_status(self, quote_id: Any, status: str, updated_at: str) -> bool:
        """
        Cambia el estado de un presupuesto.

        Returns:
            True si el presupuesto existía
        """
        matched = self.store.update_one(
            self.collection,
            self._by_id(quote_id),
            {'status': status, 'updated_at': updated_at},
        )
        return matched > 0
