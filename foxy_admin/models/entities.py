# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un documento de MongoDB.
# Diseñadas para ser independientes del mecanismo de persistencia:
# los repositorios convierten documentos con from_dict() y nunca devuelven
# documentos crudos a los servicios.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


def _id_to_str(value: Any) -> str:
    """Convierte un _id (ObjectId o str) a su representación hexadecimal."""
    return str(value) if value is not None else ''


# ==============================================================================
# USUARIOS Y SESIÓN
# ==============================================================================

@dataclass
class User:
    """
    Usuario del panel de administración.

    Attributes:
        id: ID del documento (hex)
        username: Nombre de usuario (único)
        password_hash: Hash de la contraseña (nunca texto plano)
        is_admin: Acceso a todas las rutas protegidas
    """
    id: str
    username: str
    password_hash: str
    is_admin: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia (sin _id)."""
        return {
            'username': self.username,
            'password_hash': self.password_hash,
            'is_admin': self.is_admin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde un documento."""
        return cls(
            id=_id_to_str(data.get('_id')),
            username=data.get('username', ''),
            password_hash=data.get('password_hash', ''),
            is_admin=bool(data.get('is_admin', False)),
        )


@dataclass
class UserState:
    """
    Estado del usuario actual para las plantillas.
    Se deriva SOLO de la sesión, sin consultar la base de datos.
    """
    is_authenticated: bool = False
    username: str = ''
    is_admin: bool = False

    @property
    def logged_in(self) -> bool:
        """Alias usado por las plantillas."""
        return self.is_authenticated


# ==============================================================================
# PRODUCTOS
# ==============================================================================

@dataclass
class Product:
    """
    Producto de la tienda.

    Attributes:
        price: Se guarda como texto tal como lo escribió el admin ("19.99")
        adoptable: Producto de adopción (se muestra aunque no haya stock)
    """
    id: str
    name: str
    image_url: str = ''
    price: str = '0.00'
    quantity: int = 0
    description: str = ''
    adoptable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'image_url': self.image_url,
            'price': self.price,
            'quantity': self.quantity,
            'description': self.description,
            'adoptable': self.adoptable,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=_id_to_str(data.get('_id')),
            name=data.get('name', ''),
            image_url=data.get('image_url', ''),
            price=str(data.get('price', '0.00')),
            quantity=int(data.get('quantity', 0) or 0),
            description=data.get('description', ''),
            adoptable=bool(data.get('adoptable', False)),
        )


# ==============================================================================
# PEDIDOS
# ==============================================================================

@dataclass
class ShippingAddress:
    line1: str = ''
    line2: Optional[str] = None
    city: str = ''
    postcode: str = ''
    country: str = ''

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ShippingAddress':
        data = data or {}
        return cls(
            line1=data.get('line1', ''),
            line2=data.get('line2'),
            city=data.get('city', ''),
            postcode=data.get('postcode', ''),
            country=data.get('country', ''),
        )


@dataclass
class OrderItem:
    """
    Línea de un pedido.
    En MongoDB el nombre del producto se guarda en el campo "name".
    """
    product_id: str
    product_name: str
    quantity: int = 0
    price: float = 0.0
    line_total: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderItem':
        return cls(
            product_id=str(data.get('product_id', '')),
            product_name=data.get('name', ''),
            quantity=int(data.get('quantity', 0) or 0),
            price=float(data.get('price', 0.0) or 0.0),
            line_total=float(data.get('line_total', 0.0) or 0.0),
        )


@dataclass
class Order:
    """
    Pedido de un cliente.

    Vive en "orders" (pending/failed/cancelled, antes del pago) o en
    "completed_orders" (paid/processing/shipped/completed/cancelled).
    total = subtotal + shipping_cost lo garantiza la tienda, no este panel.
    """
    id: str
    order_reference: str
    customer_name: str = ''
    customer_email: str = ''
    shipping_address: ShippingAddress = field(default_factory=ShippingAddress)
    items: List[OrderItem] = field(default_factory=list)
    subtotal: float = 0.0
    shipping_cost: float = 0.0
    total: float = 0.0
    currency: str = 'GBP'
    status: str = ''
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        return cls(
            id=_id_to_str(data.get('_id')),
            order_reference=data.get('order_reference', ''),
            customer_name=data.get('customer_name', ''),
            customer_email=data.get('customer_email', ''),
            shipping_address=ShippingAddress.from_dict(data.get('shipping_address')),
            items=[OrderItem.from_dict(i) for i in data.get('items', [])],
            subtotal=float(data.get('subtotal', 0.0) or 0.0),
            shipping_cost=float(data.get('shipping_cost', 0.0) or 0.0),
            total=float(data.get('total', 0.0) or 0.0),
            currency=data.get('currency', 'GBP'),
            status=data.get('status', ''),
            created_at=str(data.get('created_at', '')),
            updated_at=str(data.get('updated_at', '')),
        )


# ==============================================================================
# PRESUPUESTOS DE CHAPAS PERSONALIZADAS
# ==============================================================================

@dataclass
class CustomBadgeQuote:
    """Solicitud de presupuesto de chapa personalizada."""
    id: str
    num_colors: str = ''
    double_sided: bool = False
    print_size: str = ''
    thickness: str = ''
    email: str = ''
    image_path: Optional[str] = None
    estimated_price: float = 0.0
    status: str = ''
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomBadgeQuote':
        return cls(
            id=_id_to_str(data.get('_id')),
            num_colors=str(data.get('num_colors', '')),
            double_sided=bool(data.get('double_sided', False)),
            print_size=data.get('print_size', ''),
            thickness=data.get('thickness', ''),
            email=data.get('email', ''),
            image_path=data.get('image_path'),
            estimated_price=float(data.get('estimated_price', 0.0) or 0.0),
            status=data.get('status', ''),
            created_at=str(data.get('created_at', '')),
            updated_at=str(data.get('updated_at', '')),
        )


# ==============================================================================
# PAGINACIÓN
# ==============================================================================

@dataclass(frozen=True)
class PaginationInfo:
    """Datos de paginación calculados en cada petición (nunca se guardan)."""
    current_page: int
    total_pages: int
    has_prev: bool
    has_next: bool
    start_item: int
    end_item: int
    total_items: int
