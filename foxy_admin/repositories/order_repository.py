# ==============================================================================
# REPOSITORIO DE PEDIDOS
# ==============================================================================
# Un pedido es UNA entidad lógica guardada en DOS colecciones:
#   - "orders"           → antes del pago (pending, failed, cancelled)
#   - "completed_orders" → desde el pago (paid, processing, shipped, completed, cancelled)
#
# La pasarela de pagos (fuera de este panel) mueve el documento de una a otra.
# Este repositorio es el ÚNICO lugar que sabe que existen dos colecciones:
# el resto del sistema ve una sola fuente de pedidos.
#
# No hay transacción entre colecciones: si dos admins cambian el mismo
# pedido a la vez, gana la última escritura.
# ==============================================================================

from typing import Any, List

from foxy_admin import config
from foxy_admin.models import Order
from foxy_admin.performance_logger import log_event
from foxy_admin.repositories.base import BaseRepository, StoreError
from foxy_admin.repositories.interfaces import IDocumentStore


# Estados que requieren atención en cada colección (vista por defecto)
ACTIVE_TRIAGE_STATUSES = ('pending', 'failed', 'cancelled')
COMPLETED_TRIAGE_STATUSES = ('paid', 'processing', 'shipped')


class CompletedOrderUpdateError(StoreError):
    """Fallo al escribir en la colección de pedidos completados."""
    pass


class OrderRepository(BaseRepository):
    """Repositorio de pedidos sobre las colecciones activa y completada."""

    def __init__(
        self,
        store: IDocumentStore,
        collection: str = config.ORDERS_COLLECTION,
        completed_collection: str = config.COMPLETED_ORDERS_COLLECTION,
    ):
        super().__init__(store, collection)
        self.completed_collection = completed_collection

    def list_for_triage(self, show_completed: bool) -> List[Order]:
        """
        Pedidos de ambas colecciones, sin ordenar ni paginar.

        Args:
            show_completed: True = todos los pedidos sin filtrar;
                False = solo los que requieren atención

        Returns:
            Lista combinada de pedidos

        Raises:
            StoreError: Si falla la lectura de la colección activa.
                Un fallo en la colección completada NO se propaga: se registra
                y se devuelven solo los pedidos activos.
        """
        if show_completed:
            active_filter = {}
            completed_filter = {}
        else:
            active_filter = {'status': {'$in': list(ACTIVE_TRIAGE_STATUSES)}}
            completed_filter = {'status': {'$in': list(COMPLETED_TRIAGE_STATUSES)}}

        orders = [Order.from_dict(d) for d in self.store.find(self.collection, active_filter)]

        # TODO: confirmar con producto si este fallo debe mostrarse en la página;
        # hoy oculta una colección renombrada o caída.
        try:
            completed_docs = self.store.find(self.completed_collection, completed_filter)
        except StoreError as e:
            log_event('WARNING', f"Lectura de '{self.completed_collection}' fallida, "
                                 f"se muestran solo pedidos activos: {e}")
            completed_docs = []

        orders.extend(Order.from_dict(d) for d in completed_docs)
        return orders

    def update_status(self, order_id: Any, status: str, updated_at: str) -> bool:
        """
        Cambia el estado de un pedido donde sea que esté guardado.

        Intenta primero en la colección activa; solo si no hubo coincidencia
        reintenta en la completada.

        Returns:
            True si el pedido se encontró en alguna de las dos

        Raises:
            InvalidIdError: ID mal formado (antes de cualquier escritura)
            StoreError: Fallo de escritura en la colección activa
            CompletedOrderUpdateError: Fallo de escritura en la completada
        """
        id_filter = self._by_id(order_id)
        fields = {'status': status, 'updated_at': updated_at}

        if self.store.update_one(self.collection, id_filter, fields) > 0:
            return True

        try:
            return self.store.update_one(self.completed_collection, id_filter, fields) > 0
        except StoreError as e:
            raise CompletedOrderUpdateError(str(e)) from e
