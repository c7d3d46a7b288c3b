# ==============================================================================
# PAGINACIÓN
# ==============================================================================
# Aritmética de páginas compartida por todos los listados (pedidos y
# presupuestos). Funciones puras: mismos argumentos → mismo resultado.
# ==============================================================================

from typing import Any

from foxy_admin.models import PaginationInfo

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def to_int(v: Any, default=None):
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def normalize_page(raw: Any) -> int:
    """Página solicitada: 1 por defecto, nunca menor que 1."""
    return max(1, to_int(raw, 1))


def normalize_page_size(raw: Any) -> int:
    """Tamaño de página: DEFAULT_PAGE_SIZE por defecto, entre 1 y MAX_PAGE_SIZE."""
    size = to_int(raw, DEFAULT_PAGE_SIZE)
    return min(max(1, size), MAX_PAGE_SIZE)


def compute_skip(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def create_pagination_info(current_page: int, page_size: int, total_items: int) -> PaginationInfo:
    """
    Calcula la información de paginación.

    Args:
        current_page: Página actual (>= 1)
        page_size: Elementos por página (1..MAX_PAGE_SIZE)
        total_items: Total de elementos (>= 0)

    Returns:
        PaginationInfo con índices de inicio/fin basados en 1 (0, 0 si no hay elementos)
    """
    if total_items == 0:
        total_pages = 1
        start_item, end_item = 0, 0
    else:
        total_pages = (total_items + page_size - 1) // page_size
        start_item = (current_page - 1) * page_size + 1
        end_item = min(current_page * page_size, total_items)

    return PaginationInfo(
        current_page=current_page,
        total_pages=total_pages,
        has_prev=current_page > 1,
        has_next=current_page < total_pages,
        start_item=start_item,
        end_item=end_item,
        total_items=total_items,
    )
