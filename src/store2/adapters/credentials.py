"""Resolución de credenciales para Basic-Auth.

Orden:
1) valores explícitos (entorno / .env vía `StoreSettings`);
2) entrada de `~/.netrc` para el host de la URL base.

Si no hay nada, se devuelven cadenas vacías y las peticiones salen sin
cabecera `Authorization`.
"""

from __future__ import annotations

import logging
import netrc
from pathlib import Path
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def netrc_host(base_url: str) -> str:
    return urlparse(base_url).netloc.rsplit("@", 1)[-1]


def lookup_netrc(base_url: str, netrc_path: Path | None = None) -> tuple[str, str] | None:
    """Busca login/password en .netrc para el host de `base_url`.

    El nombre de máquina incluye el puerto si la URL lo lleva
    (`localhost:8080`), sin la parte de usuario.
    """

    host = netrc_host(base_url)
    if not host:
        return None

    path = netrc_path or Path.home() / ".netrc"
    if not path.is_file():
        return None

    try:
        auth = netrc.netrc(str(path)).authenticators(host)
    except (netrc.NetrcParseError, OSError) as exc:
        logger.warning("ignoring unreadable netrc file %s: %s", path, exc)
        return None
    if auth is None:
        return None

    login, _account, password = auth
    return login or "", password or ""


def resolve_credentials(
    *,
    base_url: str,
    user: str | None,
    password: str | None,
    netrc_path: Path | None = None,
) -> tuple[str, str]:
    if user or password:
        return user or "", password or ""

    found = lookup_netrc(base_url, netrc_path)
    if found is None:
        logger.debug("no credentials configured for %s", base_url)
        return "", ""
    logger.debug("using netrc credentials for %s", netrc_host(base_url))
    return found
