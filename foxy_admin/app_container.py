# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único para obtener repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (se inyecta un MemoryDocumentStore o un almacén que falla)
#   - Cambiar de almacenamiento sin tocar servicios
#
# ═══════════════════════════════════════════════════════════════════════════════
# ALMACENAMIENTO
# ═══════════════════════════════════════════════════════════════════════════════
# STORAGE_BACKEND=mongo  → MongoDocumentStore (MONGODB_URI / MONGODB_DATABASE)
# STORAGE_BACKEND=memory → MemoryDocumentStore (datos se pierden al reiniciar)
#
# Los repositorios solo dependen de IDocumentStore: cualquier objeto que
# implemente el protocolo sirve.
# ==============================================================================

from typing import Optional

from foxy_admin import config
from foxy_admin.performance_logger import log_event
from foxy_admin.repositories import (
    IDocumentStore,
    MemoryDocumentStore,
    MongoDocumentStore,
    OrderRepository,
    ProductRepository,
    QuoteRepository,
    UserRepository,
)
from foxy_admin.services import (
    BadgeImageService,
    OrderService,
    ProductService,
    QuoteService,
    UserService,
)


def create_store(backend: str = None) -> IDocumentStore:
    """
    Crea el almacén de documentos según la configuración.

    La conexión a MongoDB es perezosa: no falla aquí si el servidor
    no está disponible, sino en la primera consulta (StoreError).
    """
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == 'memory':
        return MemoryDocumentStore()
    if backend != 'mongo':
        log_event('WARNING', f"STORAGE_BACKEND desconocido '{backend}', se usa mongo")
    return MongoDocumentStore.from_uri(config.MONGODB_URI, config.MONGODB_DATABASE)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = get_container()
        products = container.product_service.list_products()
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, store: IDocumentStore = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, store: IDocumentStore = None):
        """
        Inicializa el contenedor.

        Args:
            store: Almacén a usar (None = según STORAGE_BACKEND)
        """
        if self._initialized:
            return

        self._store: Optional[IDocumentStore] = store

        # Repositorios (lazy loading)
        self._user_repo: Optional[UserRepository] = None
        self._product_repo: Optional[ProductRepository] = None
        self._order_repo: Optional[OrderRepository] = None
        self._quote_repo: Optional[QuoteRepository] = None

        # Servicios (lazy loading)
        self._user_service: Optional[UserService] = None
        self._product_service: Optional[ProductService] = None
        self._order_service: Optional[OrderService] = None
        self._quote_service: Optional[QuoteService] = None
        self._badge_image_service: Optional[BadgeImageService] = None

        self._initialized = True

    @property
    def store(self) -> IDocumentStore:
        if self._store is None:
            self._store = create_store()
        return self._store

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def user_repo(self) -> UserRepository:
        if self._user_repo is None:
            self._user_repo = UserRepository(self.store)
        return self._user_repo

    @property
    def product_repo(self) -> ProductRepository:
        if self._product_repo is None:
            self._product_repo = ProductRepository(self.store)
        return self._product_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository(self.store)
        return self._order_repo

    @property
    def quote_repo(self) -> QuoteRepository:
        if self._quote_repo is None:
            self._quote_repo = QuoteRepository(self.store)
        return self._quote_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def user_service(self) -> UserService:
        """Servicio de usuarios (singleton)."""
        if self._user_service is None:
            self._user_service = UserService(self.user_repo)
        return self._user_service

    @property
    def product_service(self) -> ProductService:
        """Servicio de productos (singleton)."""
        if self._product_service is None:
            self._product_service = ProductService(self.product_repo)
        return self._product_service

    @property
    def order_service(self) -> OrderService:
        """Servicio de pedidos (singleton)."""
        if self._order_service is None:
            self._order_service = OrderService(self.order_repo)
        return self._order_service

    @property
    def quote_service(self) -> QuoteService:
        """Servicio de presupuestos (singleton)."""
        if self._quote_service is None:
            self._quote_service = QuoteService(self.quote_repo)
        return self._quote_service

    @property
    def badge_image_service(self) -> BadgeImageService:
        if self._badge_image_service is None:
            self._badge_image_service = BadgeImageService(config.PRIVATE_UPLOADS_DIR)
        return self._badge_image_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """Reinicia repositorios y servicios (el almacén se conserva)."""
        self._user_repo = None
        self._product_repo = None
        self._order_repo = None
        self._quote_repo = None

        self._user_service = None
        self._product_service = None
        self._order_service = None
        self._quote_service = None
        self._badge_image_service = None

    @classmethod
    def get_instance(cls, store: IDocumentStore = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            store: Almacén (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            return cls(store)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(store: IDocumentStore = None) -> AppContainer:
    """Obtiene el contenedor de dependencias global."""
    return AppContainer.get_instance(store)
