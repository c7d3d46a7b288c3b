# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula todo el acceso a la colección "users".
# Formato de documento:
#   {"_id": ObjectId, "username": "admin", "password_hash": "scrypt:...", "is_admin": true}
# ==============================================================================

from typing import Optional

from foxy_admin import config
from foxy_admin.models import User
from foxy_admin.repositories.base import BaseRepository
from foxy_admin.repositories.interfaces import IDocumentStore


class UserRepository(BaseRepository):
    """Repositorio para gestión de usuarios."""

    def __init__(self, store: IDocumentStore, collection: str = config.USERS_COLLECTION):
        super().__init__(store, collection)

    def get_by_username(self, username: str) -> Optional[User]:
        """
        Obtiene un usuario por coincidencia exacta de nombre.

        Args:
            username: Nombre de usuario

        Returns:
            User o None
        """
        doc = self.store.find_one(self.collection, {'username': username})
        return User.from_dict(doc) if doc else None

    def user_exists(self, username: str) -> bool:
        return self.store.count(self.collection, {'username': username}) > 0

    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> str:
        """
        Crea un nuevo usuario.

        Returns:
            ID (hex) del documento creado
        """
        return self.store.insert_one(self.collection, {
            'username': username,
            'password_hash': password_hash,
            'is_admin': is_admin,
        })

    # NOTA: La verificación de contraseñas se hace SOLO en UserService.
    # El repositorio solo maneja persistencia, no lógica de autenticación.
