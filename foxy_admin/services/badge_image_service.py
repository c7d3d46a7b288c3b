# ==============================================================================
# IMÁGENES DE PRESUPUESTOS
# ==============================================================================
# Las imágenes que suben los clientes al pedir un presupuesto se guardan en
# PRIVATE_UPLOADS_DIR (fuera de /static). Solo se sirven a admins y solo
# archivos "badge_*" de ese directorio, sin subcarpetas.
# ==============================================================================

import os
from typing import Any, Dict

from foxy_admin import config

BADGE_PREFIX = 'badge_'
CACHE_CONTROL = 'private, max-age=3600'

CONTENT_TYPES = {
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def is_safe_badge_filename(filename: str) -> bool:
    if not filename or not filename.startswith(BADGE_PREFIX):
        return False
    return '..' not in filename and '/' not in filename and '\\' not in filename


def content_type_for(filename: str) -> str:
    extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


class BadgeImageService:

    def __init__(self, uploads_dir: str = None):
        self.uploads_dir = uploads_dir or config.PRIVATE_UPLOADS_DIR

    def read_badge_image(self, filename: str) -> Dict[str, Any]:
        """
        Lee una imagen de presupuesto.

        Returns:
            {'ok': True, 'content': bytes, 'content_type': str, 'cache_control': str}
            o {'ok': False, 'status': 400|404}
        """
        if not is_safe_badge_filename(filename):
            return {'ok': False, 'status': 400}

        path = os.path.join(self.uploads_dir, filename)
        try:
            with open(path, 'rb') as f:
                content = f.read()
        except OSError:
            return {'ok': False, 'status': 404}

        return {
            'ok': True,
            'content': content,
            'content_type': content_type_for(filename),
            'cache_control': CACHE_CONTROL,
        }
