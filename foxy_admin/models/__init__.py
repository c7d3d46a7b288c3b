# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
#   - entities.py → documentos de MongoDB (User, Product, Order, ...)
#   - display.py  → proyecciones de solo lectura para las plantillas
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    UserState,

    # Productos
    Product,

    # Pedidos
    Order,
    OrderItem,
    ShippingAddress,

    # Presupuestos
    CustomBadgeQuote,

    # Paginación
    PaginationInfo,
)

from .display import (
    ProductDisplay,
    OrderDisplay,
    ShippingAddressDisplay,
    QuoteDisplay,
)

__all__ = [
    'User',
    'UserState',
    'Product',
    'Order',
    'OrderItem',
    'ShippingAddress',
    'CustomBadgeQuote',
    'PaginationInfo',
    'ProductDisplay',
    'OrderDisplay',
    'ShippingAddressDisplay',
    'QuoteDisplay',
]
