# ==============================================================================
# MODELOS DE PRESENTACIÓN
# ==============================================================================
# Versiones de solo lectura de las entidades, listas para las plantillas:
# todos los textos ya formateados, sin Optional. Nunca se persisten.
# ==============================================================================

from dataclasses import dataclass, field
from typing import List, Optional

from .entities import OrderItem


@dataclass(frozen=True)
class ProductDisplay:
    id: str
    name: str
    image_url: str
    price: str
    quantity: int
    description: str
    adoptable: bool


@dataclass(frozen=True)
class ShippingAddressDisplay:
    line1: str
    line2: str  # "" si el pedido no tiene segunda línea
    city: str
    postcode: str
    country: str


@dataclass(frozen=True)
class OrderDisplay:
    id: str
    order_reference: str
    customer_name: str
    customer_email: str
    shipping_address: ShippingAddressDisplay
    subtotal: float
    shipping_cost: float
    total: float
    currency: str
    status: str
    created_at: str
    updated_at: str
    formatted_total: str
    formatted_created_at: str
    status_class: str  # Clase CSS del badge de estado
    items: List[OrderItem] = field(default_factory=list)


@dataclass(frozen=True)
class QuoteDisplay:
    id: str
    num_colors: str
    double_sided: str  # "yes" / "no"
    print_size: str
    thickness: str
    email: str
    image_path: Optional[str]
    estimated_price: float
    created_at: str
    status: str
    formatted_price: str
    formatted_created_at: str
    status_class: str
    sided_text: str  # "Single-sided" / "Double-sided"
