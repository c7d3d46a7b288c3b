# ==============================================================================
# INFORMACIÓN DEL SERVICIO - /info y /health
# ==============================================================================

import os
from typing import Dict, Optional

from foxy_admin import config

UNKNOWN = 'unknown'


def read_version_info(path: Optional[str] = None) -> Dict[str, str]:
    """
    Versión desplegada, leída de version.txt (lo escribe el CI/CD).

    Formato: "imagen:tag,build_time,git_commit". Sin comas, todo el
    contenido se toma como imagen.
    """
    path = path or config.VERSION_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read().strip()
    except OSError:
        content = UNKNOWN

    if ',' in content:
        parts = content.split(',', 2)
        parts += [UNKNOWN] * (3 - len(parts))
        image, build_time, git_commit = parts
    else:
        image, build_time, git_commit = content, UNKNOWN, UNKNOWN

    return {
        'service': config.SERVICE_NAME,
        'image': image,
        'build_time': build_time,
        'git_commit': git_commit,
        'environment': os.environ.get('ENVIRONMENT', UNKNOWN),
    }


def health_status() -> Dict[str, str]:
    return {'status': 'healthy', 'service': config.SERVICE_NAME}
