# ==============================================================================
# CONFIGURACIÓN - Variables de entorno y constantes
# ==============================================================================
# Todas las opciones se leen de variables de entorno con un valor por defecto
# apto para desarrollo local. En producción se definen en el contenedor.
#
#   export ADMIN_SECRET_KEY="clave_larga_y_aleatoria"
#   export MONGODB_URI="mongodb://mongo:27017"
# ==============================================================================

import os

# True = sin mensajes de depuración, advierte si falta la clave secreta
PRODUCTION_MODE = os.environ.get('ENVIRONMENT', '').lower() == 'production'

# ═══════════════════════════════════════════════════════════════════════════════
# SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
_DEFAULT_SECRET = "foxy_admin_dev_secret_key_change_in_production"
SECRET_KEY = os.environ.get("ADMIN_SECRET_KEY")

if PRODUCTION_MODE and not SECRET_KEY:
    print("[ADVERTENCIA] ENVIRONMENT=production sin ADMIN_SECRET_KEY definida")
    print("[ADVERTENCIA] Define la variable de entorno para mayor seguridad")

SECRET_KEY = SECRET_KEY or _DEFAULT_SECRET

SESSION_LIFETIME_SECONDS = 86400  # 24 horas

# ═══════════════════════════════════════════════════════════════════════════════
# ALMACENAMIENTO
# ═══════════════════════════════════════════════════════════════════════════════
# mongo  = MongoDB real (producción)
# memory = diccionarios en memoria (desarrollo y tests)
STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "mongo").lower()
MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DATABASE = os.environ.get("MONGODB_DATABASE", "foxy_fabrications")

# Nombres de colecciones
USERS_COLLECTION = "users"
PRODUCTS_COLLECTION = "products"
ORDERS_COLLECTION = "orders"
COMPLETED_ORDERS_COLLECTION = "completed_orders"
QUOTES_COLLECTION = "badge_quotes"

# ═══════════════════════════════════════════════════════════════════════════════
# ARCHIVOS
# ═══════════════════════════════════════════════════════════════════════════════
# Imágenes subidas por clientes para presupuestos (NO públicas)
PRIVATE_UPLOADS_DIR = os.environ.get("PRIVATE_UPLOADS_DIR", os.path.join(os.getcwd(), "private_uploads"))

# Archivo generado por CI/CD: "imagen:tag,build_time,git_commit"
VERSION_FILE = os.environ.get("VERSION_FILE", os.path.join(os.getcwd(), "version.txt"))

ENVIRONMENT = os.environ.get("ENVIRONMENT", "unknown")
SERVICE_NAME = "foxy-fabrications-admin"

# ═══════════════════════════════════════════════════════════════════════════════
# SERVIDOR
# ═══════════════════════════════════════════════════════════════════════════════
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
HOST = os.environ.get('ADMIN_HOST', '0.0.0.0')
PORT = int(os.environ.get('ADMIN_PORT', 3001))

# Profiling de rutas en logs/ (desactivar con ENABLE_PROFILING=0)
ENABLE_PROFILING = os.environ.get('ENABLE_PROFILING', '1') == '1'
LOGS_DIR = os.environ.get('ADMIN_LOGS_DIR', os.path.join(os.getcwd(), 'logs'))
