# ==============================================================================
# SERVICIO DE USUARIOS - Autenticación y sesión
# ==============================================================================
# Centraliza la lógica de identidad:
#   - authenticate()        → usuario + contraseña → User o None
#   - login() / logout()    → vincula / desvincula la identidad en la sesión
#   - current_user_state()  → quién hace la petición (SIN consultar MongoDB)
#
# La sesión es la de Flask (cookie firmada). Guardamos en ella todo lo que
# las plantillas necesitan (id, username, is_admin) para que saber "quién
# soy" nunca cueste una consulta a la base de datos.
# ==============================================================================

from typing import Any, Dict, MutableMapping, Optional

from foxy_admin.models import User, UserState
from foxy_admin.performance_logger import log_event, profile_function
from foxy_admin.repositories.interfaces import IUserRepository
from foxy_admin.services.password_service import hash_password, verify_password


# Claves de la sesión
SESSION_USER_ID = 'user_id'
SESSION_USERNAME = 'username'
SESSION_IS_ADMIN = 'is_admin'


class SessionError(Exception):
    """No se pudo escribir la identidad en la sesión."""
    pass


class UserService:
    """
    Servicio de autenticación.

    IMPORTANTE: authenticate() no distingue entre "usuario no existe" y
    "contraseña incorrecta": en ambos casos devuelve None y en ambos casos
    se ejecuta una verificación de hash completa.
    """

    def __init__(self, user_repo: IUserRepository):
        self.user_repo = user_repo
        self._dummy_hash: Optional[str] = None

    def _get_dummy_hash(self) -> str:
        # Se calcula una sola vez, con el mismo método que los hashes reales
        if self._dummy_hash is None:
            self._dummy_hash = hash_password('dummy-password-for-timing')
        return self._dummy_hash

    # =========================================================================
    # AUTENTICACIÓN
    # =========================================================================

    @staticmethod
    def validate_credentials(username: str, password: str) -> Optional[str]:
        """
        Valida el formato del formulario de login.

        Returns:
            Mensaje de error o None si es válido
        """
        if not username or not username.strip():
            return "Username cannot be empty"
        if not password:
            return "Password cannot be empty"
        return None

    @profile_function(name="Autenticar usuario")
    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Autentica un usuario.

        Args:
            username: Nombre de usuario (coincidencia exacta)
            password: Contraseña en texto plano

        Returns:
            User si las credenciales son válidas, None si no

        Raises:
            StoreError: Si falla la consulta a MongoDB
        """
        user = self.user_repo.get_by_username(username)
        if user is None:
            # Mismo costo que una verificación real
            verify_password(password, self._get_dummy_hash())
            return None

        if not verify_password(password, user.password_hash):
            return None
        return user

    # =========================================================================
    # SESIÓN
    # =========================================================================

    def login(self, session: MutableMapping[str, Any], user: User) -> None:
        """
        Vincula la identidad del usuario a la sesión.

        Raises:
            SessionError: Si la sesión no se puede modificar
        """
        try:
            session.clear()
            session[SESSION_USER_ID] = user.id
            session[SESSION_USERNAME] = user.username
            session[SESSION_IS_ADMIN] = bool(user.is_admin)
            if hasattr(session, 'permanent'):
                session.permanent = True  # Usa PERMANENT_SESSION_LIFETIME
        except RuntimeError as e:
            raise SessionError(str(e)) from e

    def logout(self, session: MutableMapping[str, Any]) -> bool:
        """
        Elimina la identidad de la sesión.

        Es de mejor esfuerzo: un fallo se registra y se devuelve False,
        pero nunca se propaga a la ruta.
        """
        username = session.get(SESSION_USERNAME)
        try:
            session.clear()
        except RuntimeError as e:
            log_event('WARNING', f"No se pudo cerrar la sesión de '{username}': {e}")
            return False
        return True

    @staticmethod
    def current_user_state(session: Optional[Dict[str, Any]]) -> UserState:
        """
        Estado del usuario actual, derivado SOLO de la sesión.

        Returns:
            UserState (todo en False / vacío si es anónimo)
        """
        if not session or not session.get(SESSION_USER_ID):
            return UserState()
        return UserState(
            is_authenticated=True,
            username=session.get(SESSION_USERNAME, ''),
            is_admin=bool(session.get(SESSION_IS_ADMIN, False)),
        )

    # =========================================================================
    # ALTA DE USUARIOS (fuera de banda: comando "flask create-user")
    # =========================================================================

    def create_user(self, username: str, password: str, is_admin: bool = False) -> Dict[str, Any]:
        """
        Crea un nuevo usuario.

        Returns:
            Dict con resultado {'ok': bool, 'error': str opcional}
        """
        if not username or not username.strip():
            return {'ok': False, 'error': 'Username cannot be empty'}
        if not password:
            return {'ok': False, 'error': 'Password cannot be empty'}

        username = username.strip()
        if self.user_repo.user_exists(username):
            return {'ok': False, 'error': 'User already exists'}

        user_id = self.user_repo.create_user(username, hash_password(password), is_admin)
        return {'ok': True, 'id': user_id, 'username': username, 'is_admin': is_admin}
