# ==============================================================================
# SERVICIO DE PRODUCTOS
# ==============================================================================
# Alta, edición, borrado y listado de productos para el panel.
#
# REGLAS:
# - El formulario se valida COMPLETO antes de cualquier escritura
# - Un ID mal formado es un error de validación (400), nunca un crash
# - Un fallo de lectura deja la página vacía con mensaje (no error HTTP)
# ==============================================================================

from typing import Any, Dict, Mapping

from foxy_admin.performance_logger import log_event, profile_function
from foxy_admin.repositories.base import InvalidIdError, StoreError
from foxy_admin.repositories.interfaces import IProductRepository
from foxy_admin.services.display_service import (
    ProductValidationError,
    product_to_display,
    validate_product_form,
)

DEFAULT_IMAGE_URL = '/static/images/placeholder.png'


def _form_value(form: Mapping[str, Any], key: str) -> str:
    return form.get(key) or ''


class ProductService:
    """
    Servicio para gestión de productos.

    Los métodos devuelven diccionarios de resultado (nunca lanzan
    StoreError ni InvalidIdError hacia las rutas).
    """

    def __init__(self, product_repo: IProductRepository):
        self.product_repo = product_repo

    # =========================================================================
    # LECTURA
    # =========================================================================

    @profile_function(name="Listar productos")
    def list_products(self) -> Dict[str, Any]:
        """
        Todos los productos listos para la plantilla.

        Returns:
            {'products': [ProductDisplay], 'error_message': str}
        """
        try:
            products = self.product_repo.list_all()
        except StoreError as e:
            log_event('ERROR', f"Listado de productos fallido: {e}")
            return {'products': [], 'error_message': f"Database error: {e}"}
        return {
            'products': [product_to_display(p) for p in products],
            'error_message': '',
        }

    def get_product(self, product_id: str) -> Dict[str, Any]:
        """
        Un producto para el formulario de edición.

        Returns:
            {'ok': True, 'product': ProductDisplay} o
            {'ok': False, 'status': 400|404|500, 'error': str}
        """
        try:
            product = self.product_repo.get_by_id(product_id)
        except InvalidIdError:
            return {'ok': False, 'status': 400, 'error': 'Invalid product ID'}
        except StoreError as e:
            log_event('ERROR', f"Lectura del producto {product_id} fallida: {e}")
            return {'ok': False, 'status': 500, 'error': f"Database error: {e}"}

        if product is None:
            return {'ok': False, 'status': 404, 'error': 'Product not found'}
        return {'ok': True, 'product': product_to_display(product)}

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    @staticmethod
    def _validated_fields(form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Valida el formulario y arma los campos a guardar.

        Raises:
            ProductValidationError
        """
        name = _form_value(form, 'name')
        price = _form_value(form, 'price')
        description = _form_value(form, 'description')
        _, quantity = validate_product_form(name, price, _form_value(form, 'quantity'), description)
        return {
            'name': name,
            'price': price.strip(),
            'quantity': quantity,
            'description': description,
            # Checkbox HTML: presente ("on") solo si está marcado
            'adoptable': bool(form.get('adoptable')),
        }

    @profile_function(name="Crear producto")
    def create_product(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Crea un producto desde el formulario.

        Returns:
            {'ok': True, 'product_id': str} o {'ok': False, 'error': str}
        """
        try:
            fields = self._validated_fields(form)
        except ProductValidationError as e:
            return {'ok': False, 'error': str(e)}

        fields['image_url'] = _form_value(form, 'image_url').strip() or DEFAULT_IMAGE_URL

        try:
            product_id = self.product_repo.create(fields)
        except StoreError as e:
            log_event('ERROR', f"Alta de producto '{fields['name']}' fallida: {e}")
            return {'ok': False, 'error': f"Database error: {e}"}
        return {'ok': True, 'product_id': product_id}

    @profile_function(name="Editar producto")
    def update_product(self, product_id: str, form: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Reemplaza nombre, precio, cantidad, descripción y adopción.

        Returns:
            {'ok': True} o {'ok': False, 'status': int, 'error': str}
            status 200 = re-mostrar el formulario con el error
        """
        try:
            fields = self._validated_fields(form)
        except ProductValidationError as e:
            return {'ok': False, 'status': 200, 'error': str(e)}

        try:
            matched = self.product_repo.update_fields(product_id, fields)
        except InvalidIdError:
            return {'ok': False, 'status': 400, 'error': 'Invalid product ID'}
        except StoreError as e:
            log_event('ERROR', f"Edición del producto {product_id} fallida: {e}")
            return {'ok': False, 'status': 200, 'error': f"Database error: {e}"}

        if not matched:
            return {'ok': False, 'status': 404, 'error': 'Product not found'}
        return {'ok': True}

    @profile_function(name="Eliminar producto")
    def delete_product(self, product_id: str) -> Dict[str, Any]:
        """
        Elimina un producto. Eliminar un ID inexistente informa el fallo.

        Returns:
            {'success': bool, 'message': str, 'product_id': str | None}
        """
        try:
            deleted = self.product_repo.delete(product_id)
        except InvalidIdError:
            return {'success': False, 'message': 'Invalid product ID', 'product_id': None}
        except StoreError as e:
            log_event('ERROR', f"Borrado del producto {product_id} fallido: {e}")
            return {'success': False, 'message': f"Database error: {e}", 'product_id': None}

        if not deleted:
            return {'success': False, 'message': 'Product not found', 'product_id': None}
        return {'success': True, 'message': 'Product deleted successfully', 'product_id': product_id}
