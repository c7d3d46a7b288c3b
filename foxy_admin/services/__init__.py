# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio del panel.
#
# PRINCIPIOS:
# 1. Las rutas (main.py) solo llaman a servicios
# 2. Los servicios aplican validaciones y convierten errores de
#    almacenamiento en resultados ({'ok': ...} / {'success': ...})
# 3. Los servicios NO conocen pymongo: solo repositorios y entidades
#
# ESTRUCTURA:
# ├── password_service.py    → Hash y verificación de contraseñas
# ├── user_service.py        → Autenticación y sesión
# ├── access_gate.py         → Decisión de acceso (admin / login / 403)
# ├── pagination.py          → Aritmética de páginas
# ├── display_service.py     → Entidad → modelo de presentación, validación
# ├── product_service.py     → Productos
# ├── order_service.py       → Pedidos (dos colecciones)
# ├── quote_service.py       → Presupuestos de chapas
# ├── badge_image_service.py → Imágenes privadas de presupuestos
# └── version_service.py     → /info y /health
# ==============================================================================

from foxy_admin.services.password_service import hash_password, verify_password, is_password_hashed
from foxy_admin.services.user_service import UserService, SessionError
from foxy_admin.services.access_gate import AccessDecision, AccessKind, check_access
from foxy_admin.services.display_service import ProductValidationError, validate_product_form
from foxy_admin.services.product_service import ProductService
from foxy_admin.services.order_service import OrderService
from foxy_admin.services.quote_service import QuoteService
from foxy_admin.services.badge_image_service import BadgeImageService
from foxy_admin.services.version_service import read_version_info, health_status

__all__ = [
    'hash_password',
    'verify_password',
    'is_password_hashed',
    'UserService',
    'SessionError',
    'AccessDecision',
    'AccessKind',
    'check_access',
    'ProductValidationError',
    'validate_product_form',
    'ProductService',
    'OrderService',
    'QuoteService',
    'BadgeImageService',
    'read_version_info',
    'health_status',
]
