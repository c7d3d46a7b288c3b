# ==============================================================================
# SERVICIO DE PEDIDOS - Triage
# ==============================================================================
# Listado paginado y cambio de estado de pedidos.
#
# A diferencia de los presupuestos, la paginación se calcula EN MEMORIA:
# los pedidos vienen de dos colecciones y hay que unirlas y ordenarlas
# antes de cortar la página.
# ==============================================================================

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from foxy_admin.performance_logger import log_event, profile_function
from foxy_admin.repositories.base import InvalidIdError, StoreError
from foxy_admin.repositories.interfaces import IOrderRepository
from foxy_admin.repositories.order_repository import CompletedOrderUpdateError
from foxy_admin.services.display_service import order_to_display
from foxy_admin.services.pagination import compute_skip, create_pagination_info

ALLOWED_ORDER_STATUSES = ('paid', 'processing', 'shipped', 'completed', 'cancelled')


def utc_now_iso() -> str:
    """Instante actual en RFC 3339 (UTC)."""
    return datetime.now(timezone.utc).isoformat()


def _result(success: bool, message: str, order_id: Optional[str] = None) -> Dict[str, Any]:
    return {'success': success, 'message': message, 'order_id': order_id}


class OrderService:

    def __init__(self, order_repo: IOrderRepository):
        self.order_repo = order_repo

    @profile_function(name="Listar pedidos")
    def list_orders(self, page: int, page_size: int, show_completed: bool = False) -> Dict[str, Any]:
        """
        Una página de pedidos, los más recientes primero.

        Args:
            page: Página (>= 1, ya normalizada)
            page_size: Tamaño de página (ya normalizado)
            show_completed: True = todos los pedidos sin filtrar

        Returns:
            {'orders': [OrderDisplay], 'pagination': PaginationInfo,
             'show_completed': bool, 'error_message': str}
        """
        try:
            orders = self.order_repo.list_for_triage(show_completed)
        except StoreError as e:
            log_event('ERROR', f"Listado de pedidos fallido: {e}")
            return {
                'orders': [],
                'pagination': create_pagination_info(1, page_size, 0),
                'show_completed': show_completed,
                'error_message': f"Database error fetching orders: {e}",
            }

        # sort estable: a igual created_at se conserva el orden de lectura
        orders.sort(key=lambda o: o.created_at, reverse=True)

        skip = compute_skip(page, page_size)
        window = orders[skip:skip + page_size]

        return {
            'orders': [order_to_display(o) for o in window],
            'pagination': create_pagination_info(page, page_size, len(orders)),
            'show_completed': show_completed,
            'error_message': '',
        }

    @profile_function(name="Cambiar estado de pedido")
    def update_status(self, order_id: str, status: str) -> Dict[str, Any]:
        """
        Cambia el estado de un pedido, esté en la colección que esté.

        Returns:
            {'success': bool, 'message': str, 'order_id': str | None}
        """
        if status not in ALLOWED_ORDER_STATUSES:
            return _result(False, "Invalid status")

        try:
            found = self.order_repo.update_status(order_id, status, utc_now_iso())
        except InvalidIdError:
            return _result(False, "Invalid order ID")
        except CompletedOrderUpdateError as e:
            log_event('ERROR', f"Cambio de estado del pedido {order_id} (completados) fallido: {e}")
            return _result(False, f"Database error updating completed order: {e}")
        except StoreError as e:
            log_event('ERROR', f"Cambio de estado del pedido {order_id} fallido: {e}")
            return _result(False, f"Database error: {e}")

        if not found:
            return _result(False, "Order not found in either collection")
        return _result(True, f"Order status updated to {status}", order_id)
