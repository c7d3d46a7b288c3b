from flask import Flask, render_template, request, redirect, session, flash, jsonify, Response
from functools import wraps
import atexit

import click

from foxy_admin import config

# Sistema de profiling interno
from foxy_admin.performance_logger import init_profiling, log_event, write_function_stats_report

from foxy_admin.repositories import StoreError
from foxy_admin.services import SessionError, UserService, read_version_info, health_status
from foxy_admin.services.access_gate import (
    AccessKind,
    DEFAULT_REDIRECT,
    check_access,
    denial_payload,
    safe_redirect_target,
)
from foxy_admin.services.pagination import normalize_page, normalize_page_size

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo orquestan: petición → servicio → respuesta.
# Toda regla de negocio vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from foxy_admin.app_container import get_container

app = Flask(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en logs/
# Para desactivar: ENABLE_PROFILING=0
init_profiling(app)

# Al cerrar el proceso se escribe el resumen de funciones perfiladas
atexit.register(write_function_stats_report)

# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
# SECRET_KEY: En producción DEBE definirse via ADMIN_SECRET_KEY
app.secret_key = config.SECRET_KEY

app.config.update(
    SESSION_COOKIE_HTTPONLY=True,      # Protege contra XSS
    SESSION_COOKIE_SECURE=config.PRODUCTION_MODE,
    SESSION_COOKIE_SAMESITE='Lax',     # Protección CSRF básica
    PERMANENT_SESSION_LIFETIME=config.SESSION_LIFETIME_SECONDS,  # 24 horas
)


def current_user_state():
    return UserService.current_user_state(session)


def _next_path():
    """Ruta solicitada con su query string (para volver tras el login)."""
    if request.query_string:
        return request.full_path
    return request.path


def admin_required(api=False):
    """
    Protege una ruta: solo administradores.

    HTML: anónimo → /login?next=..., sin admin → 403 con texto.
    API (api=True): cualquier denegación → 403 con JSON.
    """
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            decision = check_access(current_user_state(), _next_path(), api=api)
            if decision.kind == AccessKind.REDIRECT:
                return redirect(decision.location)
            if decision.kind == AccessKind.FORBIDDEN:
                if api:
                    return jsonify(denial_payload(decision)), 403
                return Response(decision.body, status=403, mimetype='text/plain')
            return f(*args, **kwargs)
        return wrapper
    return deco


@app.context_processor
def inject_user_state():
    return {'user_state': current_user_state()}


@app.after_request
def set_security_headers(response):
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=()'
    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


# ═══════════════════════════════════════════════════════════════════════════════
# LOGIN / LOGOUT
# ═══════════════════════════════════════════════════════════════════════════════

def _login_form(error, next_url):
    return render_template("login.html", error=error, next_url=next_url or '')


@app.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return _login_form('', request.args.get('next'))

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""
    next_url = request.form.get("next") or ''

    error = UserService.validate_credentials(username, password)
    if error:
        return _login_form(error, next_url)

    user_service = get_container().user_service
    try:
        user = user_service.authenticate(username, password)
    except StoreError as e:
        log_event('ERROR', f"Login de '{username}' fallido por error de base de datos: {e}")
        return _login_form("Server error", next_url)

    if user is None:
        log_event('INFO', f"Credenciales incorrectas para '{username}'")
        return _login_form("Bad credentials", next_url)

    try:
        user_service.login(session, user)
    except SessionError as e:
        log_event('ERROR', f"No se pudo iniciar la sesión de '{username}': {e}")
        return _login_form("Internal error", next_url)

    return redirect(safe_redirect_target(next_url))


@app.route("/logout")
def logout():
    get_container().user_service.logout(session)
    return redirect("/")


# ═══════════════════════════════════════════════════════════════════════════════
# PANEL
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/")
@admin_required()
def dashboard():
    return redirect(DEFAULT_REDIRECT)


@app.route("/calculator")
@admin_required()
def calculator():
    return render_template("calculator.html")


# ═══════════════════════════════════════════════════════════════════════════════
# PRODUCTOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/products")
@admin_required()
def list_products():
    result = get_container().product_service.list_products()
    return render_template("product_management.html",
                           products=result['products'],
                           error_message=result['error_message'])


@app.route("/products/new", methods=["GET", "POST"])
@admin_required()
def create_product():
    if request.method == "GET":
        return render_template("create_product.html", form={}, error_message='')

    result = get_container().product_service.create_product(request.form)
    if not result['ok']:
        return render_template("create_product.html", form=request.form, error_message=result['error'])

    flash("Product created successfully", "success")
    return redirect("/products")


def _edit_form(product_id, error_message=''):
    found = get_container().product_service.get_product(product_id)
    if not found['ok']:
        return Response(found['error'], status=found['status'], mimetype='text/plain')
    return render_template("edit_product.html", product=found['product'], error_message=error_message)


@app.route("/products/edit/<product_id>", methods=["GET", "POST"])
@admin_required()
def edit_product(product_id):
    if request.method == "GET":
        return _edit_form(product_id)

    result = get_container().product_service.update_product(product_id, request.form)
    if result['ok']:
        flash("Product updated successfully", "success")
        return redirect("/products")
    if result['status'] == 200:
        return _edit_form(product_id, result['error'])
    return Response(result['error'], status=result['status'], mimetype='text/plain')


@app.route("/products/delete/<product_id>", methods=["DELETE"])
@admin_required(api=True)
def delete_product(product_id):
    return jsonify(get_container().product_service.delete_product(product_id))


# ═══════════════════════════════════════════════════════════════════════════════
# PEDIDOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/orders")
@admin_required()
def list_orders():
    page = normalize_page(request.args.get('page'))
    page_size = normalize_page_size(request.args.get('page_size'))
    show_completed = request.args.get('show_completed', 'false') == 'true'

    result = get_container().order_service.list_orders(page, page_size, show_completed)
    return render_template("order_processing.html",
                           orders=result['orders'],
                           pagination=result['pagination'],
                           page_size=page_size,
                           show_completed=result['show_completed'],
                           error_message=result['error_message'])


@app.route("/orders/update-status", methods=["POST"])
@admin_required(api=True)
def update_order_status():
    order_id = request.form.get('order_id') or ''
    status = request.form.get('status') or ''
    return jsonify(get_container().order_service.update_status(order_id, status))


# ═══════════════════════════════════════════════════════════════════════════════
# PRESUPUESTOS DE CHAPAS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/quotes")
@admin_required()
def list_quotes():
    page = normalize_page(request.args.get('page'))
    page_size = normalize_page_size(request.args.get('page_size'))

    result = get_container().quote_service.list_quotes(page, page_size, request.args.get('status_filter'))
    return render_template("quote_processing.html",
                           quotes=result['quotes'],
                           pagination=result['pagination'],
                           page_size=page_size,
                           status_filter=result['status_filter'],
                           error_message=result['error_message'])


@app.route("/quotes/update-status", methods=["POST"])
@admin_required(api=True)
def update_quote_status():
    quote_id = request.form.get('quote_id') or ''
    status = request.form.get('status') or ''
    return jsonify(get_container().quote_service.update_status(quote_id, status))


@app.route("/quotes/image/<filename>")
@admin_required(api=True)
def serve_badge_image(filename):
    result = get_container().badge_image_service.read_badge_image(filename)
    if not result['ok']:
        return Response(status=result['status'])
    response = Response(result['content'], mimetype=result['content_type'])
    response.headers['Cache-Control'] = result['cache_control']
    return response


# ═══════════════════════════════════════════════════════════════════════════════
# INFORMACIÓN DEL SERVICIO (públicas)
# ═══════════════════════════════════════════════════════════════════════════════

@app.route("/info")
def info():
    return jsonify(read_version_info())


@app.route("/health")
def health():
    return jsonify(health_status())


# ═══════════════════════════════════════════════════════════════════════════════
# CLI - Alta de usuarios (no hay registro desde la web)
# ═══════════════════════════════════════════════════════════════════════════════
#   flask --app wsgi create-user admin --admin
@app.cli.command("create-user")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--admin", "is_admin", is_flag=True, default=False, help="Acceso al panel")
def create_user_command(username, password, is_admin):
    """Crea un usuario del panel."""
    try:
        result = get_container().user_service.create_user(username, password, is_admin)
    except StoreError as e:
        raise click.ClickException(f"Database error: {e}")
    if not result['ok']:
        raise click.ClickException(result['error'])
    role = "admin" if result['is_admin'] else "user"
    click.echo(f"Created {role} '{result['username']}' ({result['id']})")


if __name__ == "__main__":
    # En producción usar WSGI: gunicorn wsgi:app
    if not config.DEBUG:
        print(f"\n{'='*50}")
        print(f"  Servidor iniciado en http://{config.HOST}:{config.PORT}")
        print(f"  Acceso local: http://localhost:{config.PORT}")
        print(f"{'='*50}\n")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
