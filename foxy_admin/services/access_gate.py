# ==============================================================================
# CONTROL DE ACCESO
# ==============================================================================
# Cada ruta protegida consulta check_access() al inicio. La decisión es un
# valor (PROCEED / REDIRECT / FORBIDDEN), no una excepción: la ruta decide
# cómo convertirla en respuesta (HTML o JSON).
#
#   anónimo          → redirect a /login?next=...   (API: 403 JSON)
#   usuario sin admin → 403                          (API: 403 JSON)
#   admin            → continuar
# ==============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from foxy_admin.models import UserState

LOGIN_PATH = '/login'
DEFAULT_REDIRECT = '/products'

FORBIDDEN_MESSAGE = "Access denied - Admin privileges required"
API_DENIED_BODY = {'success': False, 'message': 'Access denied'}


class AccessKind(str, Enum):
    PROCEED = "proceed"
    REDIRECT = "redirect"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    kind: AccessKind
    location: Optional[str] = None       # Solo para REDIRECT
    body: Any = None                     # Solo para FORBIDDEN (texto o dict JSON)

    @property
    def allowed(self) -> bool:
        return self.kind == AccessKind.PROCEED


def is_safe_redirect(url: Optional[str]) -> bool:
    """
    Solo se aceptan rutas relativas del propio sitio.
    "//evil.com" es una URL relativa al protocolo (sale del sitio).
    """
    return bool(url) and url.startswith('/') and not url.startswith('//')


def safe_redirect_target(url: Optional[str]) -> str:
    """Destino seguro tras el login (DEFAULT_REDIRECT si el valor no es válido)."""
    return url if is_safe_redirect(url) else DEFAULT_REDIRECT


def login_url(next_path: Optional[str] = None) -> str:
    """URL del login conservando el destino solicitado."""
    if is_safe_redirect(next_path):
        return f"{LOGIN_PATH}?{urlencode({'next': next_path})}"
    return LOGIN_PATH


def check_access(user_state: UserState, next_path: Optional[str] = None, api: bool = False) -> AccessDecision:
    """
    Decide si la petición puede continuar.

    Args:
        user_state: Estado derivado de la sesión
        next_path: Ruta solicitada (para volver tras el login)
        api: True para rutas JSON (nunca redirigen)

    Returns:
        AccessDecision
    """
    if not user_state.is_authenticated:
        if api:
            return AccessDecision(AccessKind.FORBIDDEN, body=dict(API_DENIED_BODY))
        return AccessDecision(AccessKind.REDIRECT, location=login_url(next_path))

    if not user_state.is_admin:
        body: Any = dict(API_DENIED_BODY) if api else FORBIDDEN_MESSAGE
        return AccessDecision(AccessKind.FORBIDDEN, body=body)

    return AccessDecision(AccessKind.PROCEED)


def denial_payload(decision: AccessDecision) -> Dict[str, Any]:
    """Cuerpo JSON de una denegación en rutas API."""
    if isinstance(decision.body, dict):
        return decision.body
    return dict(API_DENIED_BODY)
