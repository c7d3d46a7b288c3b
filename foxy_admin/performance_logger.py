# ==============================================================================
# PROFILING Y EVENTOS DEL PANEL
# ==============================================================================
# Dos tipos de log en LOGS_DIR, en texto legible:
#   performance.log / slow_routes.log → tiempos de cada petición del panel
#   slow_functions.log                → llamadas lentas + resumen al salir
#   events.log                        → fallos de MongoDB, lecturas degradadas,
#                                       logins fallidos (siempre activo)
#
# ENABLE_PROFILING=0 desactiva los tiempos; los eventos se siguen escribiendo.
# ==============================================================================

import os
import time
import threading
from datetime import datetime
from functools import wraps
from collections import defaultdict

from foxy_admin import config

ENABLE_PROFILING = config.ENABLE_PROFILING

# Milisegundos
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

LOGS_DIR = config.LOGS_DIR

PERFORMANCE_LOG = os.path.join(LOGS_DIR, 'performance.log')
SLOW_ROUTES_LOG = os.path.join(LOGS_DIR, 'slow_routes.log')
SLOW_FUNCTIONS_LOG = os.path.join(LOGS_DIR, 'slow_functions.log')
EVENTS_LOG = os.path.join(LOGS_DIR, 'events.log')

# Regla de Flask → acción que ve quien lee el log
ROUTE_NAMES = {
    'GET /login': 'Ver formulario de login',
    'POST /login': 'Iniciar sesión',
    'GET /logout': 'Cerrar sesión',
    'GET /': 'Ver panel principal',
    'GET /calculator': 'Ver calculadora',

    'GET /products': 'Ver productos',
    'GET /products/new': 'Ver formulario de producto nuevo',
    'POST /products/new': 'Crear producto',
    'GET /products/edit/<product_id>': 'Ver edición de producto',
    'POST /products/edit/<product_id>': 'Editar producto',
    'DELETE /products/delete/<product_id>': 'Eliminar producto',

    'GET /orders': 'Ver pedidos',
    'POST /orders/update-status': 'Cambiar estado de pedido',

    'GET /quotes': 'Ver presupuestos',
    'POST /quotes/update-status': 'Cambiar estado de presupuesto',
    'GET /quotes/image/<filename>': 'Ver imagen de presupuesto',
}

# Rutas que no se cronometran
UNTIMED_PREFIXES = ('/static', '/health', '/info')

# {nombre: {calls, total_time, max_time}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()
_write_lock = threading.Lock()


def _get_timestamp():
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _write_log(filepath, content):
    try:
        with _write_lock:
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
            with open(filepath, 'a', encoding='utf-8') as f:
                f.write(content)
    except OSError:
        pass  # Sin disco para logs: la entrada se descarta


def _get_route_name(method, path, rule=None):
    """Nombre legible de la ruta; si no está en ROUTE_NAMES, "MÉTODO /ruta"."""
    for candidate in (path, rule):
        if candidate and f"{method} {candidate}" in ROUTE_NAMES:
            return ROUTE_NAMES[f"{method} {candidate}"]
    return f"{method} {path}"


def _severity(time_ms):
    if time_ms >= THRESHOLD_CRITICAL:
        return 'CRITICAL'
    if time_ms >= THRESHOLD_WARNING:
        return 'WARNING'
    return None


# ═══════════════════════════════════════════════════════════════════════════
# EVENTOS
# ═══════════════════════════════════════════════════════════════════════════

def log_event(level, message):
    """
    Registra un evento operativo en events.log.

    Args:
        level: 'INFO', 'WARNING' o 'ERROR'
        message: Texto legible del evento
    """
    _write_log(EVENTS_LOG, f"""
[{level}] {_get_timestamp()}
────────────────────────────────────────
{message}
""")


# ═══════════════════════════════════════════════════════════════════════════
# TIEMPOS DE PETICIÓN
# ═══════════════════════════════════════════════════════════════════════════

def log_request_timing(method, path, rule, time_ms, user=None):
    """
    Una línea por petición en performance.log; si supera un umbral,
    además un bloque en slow_routes.log.
    """
    if not ENABLE_PROFILING:
        return

    action = _get_route_name(method, path, rule)
    who = user or 'anónimo'
    _write_log(PERFORMANCE_LOG,
               f"{_get_timestamp()} | {time_ms:6.0f} ms | {who} | {action} ({method} {path})\n")

    level = _severity(time_ms)
    if level:
        threshold = THRESHOLD_CRITICAL if level == 'CRITICAL' else THRESHOLD_WARNING
        _write_log(SLOW_ROUTES_LOG, f"""
[{level}] {_get_timestamp()}
────────────────────────────────────────
Acción: {action}
Usuario: {who}
Detalle: {method} {path}
Tiempo: {time_ms:.0f} ms (umbral: {threshold} ms)
""")


def init_profiling(app):
    """Registra los hooks before/after_request que cronometran cada petición."""
    if not ENABLE_PROFILING:
        return

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request, session

        if not hasattr(g, 'start_time') or request.path.startswith(UNTIMED_PREFIXES):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000
        rule = str(request.url_rule) if request.url_rule else request.path
        log_request_timing(request.method, request.path, rule, elapsed, session.get('username'))
        return response


# ═══════════════════════════════════════════════════════════════════════════
# FUNCIONES PERFILADAS
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Acumula llamadas, media y máximo de una función y deja constancia
    de las llamadas lentas en slow_functions.log.

        @profile_function(name="Listar pedidos")
        def list_orders(...): ...
    """
    def decorator(fn):
        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not ENABLE_PROFILING:
                return fn(*args, **kwargs)
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    stats['max_time'] = max(stats['max_time'], elapsed_ms)

                level = _severity(elapsed_ms)
                if level:
                    _write_log(SLOW_FUNCTIONS_LOG,
                               f"[{level}] {_get_timestamp()} {func_name}: {elapsed_ms:.0f} ms\n")

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def get_function_stats():
    """{nombre: {calls, avg_time, max_time}} con tiempos en ms redondeados."""
    with _stats_lock:
        return {
            func_name: {
                'calls': stats['calls'],
                'avg_time': round(stats['total_time'] / stats['calls'], 2) if stats['calls'] else 0,
                'max_time': round(stats['max_time'], 2),
            }
            for func_name, stats in _function_stats.items()
        }


def write_function_stats_report():
    """Resumen de las funciones perfiladas, la más lenta primero. Se llama con atexit."""
    if not ENABLE_PROFILING:
        return

    stats = get_function_stats()
    if not stats:
        return

    lines = [f"\n── Resumen de funciones ({_get_timestamp()}) ──"]
    for func_name, data in sorted(stats.items(), key=lambda x: x[1]['avg_time'], reverse=True):
        lines.append(f"{func_name}: {data['calls']} llamadas, "
                     f"media {data['avg_time']:.0f} ms, máx {data['max_time']:.0f} ms")
    _write_log(SLOW_FUNCTIONS_LOG, "\n".join(lines) + "\n")


def reset_stats():
    with _stats_lock:
        _function_stats.clear()


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'log_request_timing',
    'profile_function',
    'log_event',
    'get_function_stats',
    'write_function_stats_report',
    'reset_stats',
]
