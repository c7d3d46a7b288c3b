# ==============================================================================
# FOXY FABRICATIONS - Panel de administración
# ==============================================================================
# Productos, pedidos y presupuestos de chapas personalizadas.
# La app Flask vive en foxy_admin.main (importarla desde wsgi.py).
# ==============================================================================

__version__ = "0.1.0"
