# ==============================================================================
# HASH DE CONTRASEÑAS
# ==============================================================================
# Envoltorio sobre werkzeug.security. El hash es autodescriptivo:
#   "scrypt:32768:8:1$<salt>$<digest>"
# (método + parámetros + salt aleatorio + digest en un solo texto)
#
# REGLA: ninguna de estas funciones lanza excepciones. Reciben datos que
# vienen directamente del formulario de login.
# ==============================================================================

from werkzeug.security import check_password_hash, generate_password_hash

# Hash sintácticamente válido que nunca verifica ninguna contraseña
FALLBACK_HASH = "scrypt:error$error$hash"

HASH_PREFIXES = ('scrypt:', 'pbkdf2:')


def hash_password(password: str) -> str:
    """
    Genera el hash de una contraseña con salt aleatorio.

    Si el hash falla (extremadamente raro) se reintenta una vez con un salt
    nuevo; si vuelve a fallar se devuelve FALLBACK_HASH. Una entrada que no
    es texto devuelve FALLBACK_HASH directamente.
    """
    if not isinstance(password, str):
        return FALLBACK_HASH
    for _ in range(2):
        try:
            return generate_password_hash(password)
        except (TypeError, ValueError, OverflowError):
            continue
    return FALLBACK_HASH


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Verifica una contraseña contra su hash.

    Returns:
        False si no coincide o si el hash está mal formado
        (incluidos parámetros de coste fuera de rango)
    """
    if not isinstance(password, str) or not isinstance(stored_hash, str):
        return False
    try:
        return check_password_hash(stored_hash, password)
    except (TypeError, ValueError, OverflowError):
        return False


def is_password_hashed(value: str) -> bool:
    """True si el valor guardado tiene formato de hash de werkzeug."""
    if not value:
        return False
    return value.startswith(HASH_PREFIXES)
