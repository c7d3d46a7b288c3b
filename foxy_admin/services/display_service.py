# ==============================================================================
# PROYECCIÓN A MODELOS DE PRESENTACIÓN
# ==============================================================================
# Funciones puras entidad → modelo de presentación (formato de moneda,
# fechas, clases CSS de estado, textos derivados) y validación del
# formulario de producto. Sin I/O: no conocen ni MongoDB ni Flask.
# ==============================================================================

import math
import re
from datetime import datetime
from typing import Tuple

from foxy_admin.models import (
    CustomBadgeQuote,
    Order,
    OrderDisplay,
    Product,
    ProductDisplay,
    QuoteDisplay,
    ShippingAddressDisplay,
)

CURRENCY_SYMBOL = "£"
DATE_FORMAT = "%Y-%m-%d %H:%M"

# Fracción de segundo: fromisoformat solo admite 3 o 6 dígitos antes de 3.11
_FRACTION = re.compile(r"\.(\d+)")

ORDER_STATUS_CLASSES = {
    'paid': 'status-paid',
    'processing': 'status-processing',
    'shipped': 'status-shipped',
    'completed': 'status-completed',
    'cancelled': 'status-cancelled',
}

QUOTE_STATUS_CLASSES = {
    'pending': 'status-pending',
    'quoted': 'status-quoted',
    'accepted': 'status-accepted',
    'completed': 'status-completed',
    'cancelled': 'status-cancelled',
}

UNKNOWN_STATUS_CLASS = 'status-unknown'

# Límites del formulario de producto
MAX_NAME_LENGTH = 255
MAX_PRICE = 999999.99
MAX_QUANTITY = 999999
MAX_DESCRIPTION_LENGTH = 5000


class ProductValidationError(ValueError):
    """Formulario de producto inválido. El mensaje se muestra tal cual al admin."""
    pass


# =========================================================================
# FORMATO
# =========================================================================

def format_currency(amount: float) -> str:
    """44.98 → "£44.98" (siempre 2 decimales)."""
    return f"{CURRENCY_SYMBOL}{amount:.2f}"


def format_timestamp(value: str) -> str:
    """
    "2025-01-01T12:00:00Z" → "2025-01-01 12:00".
    Si el texto no es ISO-8601 se devuelve sin cambios.
    """
    if not isinstance(value, str):
        return str(value)
    raw = value.strip()
    if raw.endswith(('Z', 'z')):
        raw = raw[:-1] + '+00:00'
    raw = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), raw, count=1)
    try:
        return datetime.fromisoformat(raw).strftime(DATE_FORMAT)
    except ValueError:
        return value


def normalize_image_url(url: str) -> str:
    """Asegura que la ruta de la imagen empiece por "/"."""
    if url.startswith('/'):
        return url
    return f"/{url}"


def order_status_class(status: str) -> str:
    return ORDER_STATUS_CLASSES.get(status, UNKNOWN_STATUS_CLASS)


def quote_status_class(status: str) -> str:
    return QUOTE_STATUS_CLASSES.get(status, UNKNOWN_STATUS_CLASS)


# =========================================================================
# PROYECCIONES
# =========================================================================

def product_to_display(product: Product) -> ProductDisplay:
    return ProductDisplay(
        id=product.id,
        name=product.name,
        image_url=normalize_image_url(product.image_url),
        price=product.price,
        quantity=product.quantity,
        description=product.description,
        adoptable=product.adoptable,
    )


def order_to_display(order: Order) -> OrderDisplay:
    address = order.shipping_address
    return OrderDisplay(
        id=order.id,
        order_reference=order.order_reference,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        shipping_address=ShippingAddressDisplay(
            line1=address.line1,
            line2=address.line2 or '',
            city=address.city,
            postcode=address.postcode,
            country=address.country,
        ),
        items=list(order.items),
        subtotal=order.subtotal,
        shipping_cost=order.shipping_cost,
        total=order.total,
        currency=order.currency,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
        formatted_total=format_currency(order.total),
        formatted_created_at=format_timestamp(order.created_at),
        status_class=order_status_class(order.status),
    )


def quote_to_display(quote: CustomBadgeQuote) -> QuoteDisplay:
    return QuoteDisplay(
        id=quote.id,
        num_colors=quote.num_colors,
        double_sided='yes' if quote.double_sided else 'no',
        print_size=quote.print_size,
        thickness=quote.thickness,
        email=quote.email,
        image_path=quote.image_path,
        estimated_price=quote.estimated_price,
        created_at=quote.created_at,
        status=quote.status,
        formatted_price=format_currency(quote.estimated_price),
        formatted_created_at=format_timestamp(quote.created_at),
        status_class=quote_status_class(quote.status),
        sided_text='Double-sided' if quote.double_sided else 'Single-sided',
    )


# =========================================================================
# VALIDACIÓN DEL FORMULARIO DE PRODUCTO
# =========================================================================

def validate_product_form(name: str, price: str, quantity: str, description: str) -> Tuple[float, int]:
    """
    Valida el formulario de alta/edición de producto.

    Se detiene en el primer error, en este orden: nombre, precio,
    cantidad, descripción.

    Returns:
        (precio, cantidad) ya convertidos

    Raises:
        ProductValidationError: Con el mensaje para el admin
    """
    name = name or ''
    description = description or ''

    if not name.strip():
        raise ProductValidationError("Product name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ProductValidationError("Product name must be less than 255 characters")

    try:
        parsed_price = float((price or '').strip())
    except ValueError:
        raise ProductValidationError("Price must be a valid number") from None
    if not math.isfinite(parsed_price):
        raise ProductValidationError("Price must be a valid number")
    if parsed_price < 0:
        raise ProductValidationError("Price cannot be negative")
    if parsed_price > MAX_PRICE:
        raise ProductValidationError("Price cannot exceed £999,999.99")

    try:
        parsed_quantity = int((quantity or '').strip())
    except ValueError:
        raise ProductValidationError("Quantity must be a valid number") from None
    if parsed_quantity < 0:
        raise ProductValidationError("Quantity cannot be negative")
    if parsed_quantity > MAX_QUANTITY:
        raise ProductValidationError("Quantity cannot exceed 999,999")

    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ProductValidationError("Description must be less than 5,000 characters")

    return parsed_price, parsed_quantity
