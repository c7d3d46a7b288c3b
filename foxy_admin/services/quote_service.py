# ==============================================================================
# SERVICIO DE PRESUPUESTOS DE CHAPAS
# ==============================================================================
# Listado paginado (count + skip/limit en MongoDB) y cambio de estado.
# ==============================================================================

from typing import Any, Dict, Optional

from foxy_admin.performance_logger import log_event, profile_function
from foxy_admin.repositories.base import InvalidIdError, StoreError
from foxy_admin.repositories.interfaces import IQuoteRepository
from foxy_admin.services.display_service import quote_to_display
from foxy_admin.services.order_service import utc_now_iso
from foxy_admin.services.pagination import compute_skip, create_pagination_info

ALLOWED_QUOTE_STATUSES = ('pending', 'quoted', 'accepted', 'completed', 'cancelled')
ALL_STATUSES = 'all'


def _result(success: bool, message: str, quote_id: Optional[str] = None) -> Dict[str, Any]:
    return {'success': success, 'message': message, 'quote_id': quote_id}


class QuoteService:

    def __init__(self, quote_repo: IQuoteRepository):
        self.quote_repo = quote_repo

    @profile_function(name="Listar presupuestos")
    def list_quotes(self, page: int, page_size: int, status_filter: Optional[str] = None) -> Dict[str, Any]:
        """
        Una página de presupuestos.

        Args:
            status_filter: "all" (o vacío) para todos, si no coincidencia exacta

        Returns:
            {'quotes': [QuoteDisplay], 'pagination': PaginationInfo,
             'status_filter': str, 'error_message': str}
        """
        status_filter = status_filter or ALL_STATUSES
        status = None if status_filter == ALL_STATUSES else status_filter

        def failed(message: str) -> Dict[str, Any]:
            log_event('ERROR', f"Listado de presupuestos fallido: {message}")
            return {
                'quotes': [],
                'pagination': create_pagination_info(1, page_size, 0),
                'status_filter': status_filter,
                'error_message': message,
            }

        try:
            total = self.quote_repo.count(status)
        except StoreError as e:
            return failed(f"Database error counting quotes: {e}")

        try:
            quotes = self.quote_repo.list_page(status, compute_skip(page, page_size), page_size)
        except StoreError as e:
            return failed(f"Database error fetching quotes: {e}")

        return {
            'quotes': [quote_to_display(q) for q in quotes],
            'pagination': create_pagination_info(page, page_size, total),
            'status_filter': status_filter,
            'error_message': '',
        }

    @profile_function(name="Cambiar estado de presupuesto")
    def update_status(self, quote_id: str, status: str) -> Dict[str, Any]:
        """
        Cambia el estado de un presupuesto.

        Returns:
            {'success': bool, 'message': str, 'quote_id': str | None}
        """
        if status not in ALLOWED_QUOTE_STATUSES:
            return _result(False, "Invalid status")

        try:
            found = self.quote_repo.update_status(quote_id, status, utc_now_iso())
        except InvalidIdError:
            return _result(False, "Invalid quote ID")
        except StoreError as e:
            log_event('ERROR', f"Cambio de estado del presupuesto {quote_id} fallido: {e}")
            return _result(False, f"Database error: {e}")

        if not found:
            return _result(False, "Quote not found")
        return _result(True, f"Quote status updated to {status}", quote_id)
