"""Cliente Python para la API v2 de Meplato Store."""

__version__ = "2.2.0"

from store2.client import StoreClient  # noqa: E402
from store2.core.config import ClientConfig, StoreSettings  # noqa: E402
from store2.core.domain.area import Area  # noqa: E402
from store2.core.errors import (  # noqa: E402
    DecodeError,
    HTTPStatusError,
    MissingVariableError,
    ScrollProtocolError,
    StoreError,
    TemplateSyntaxError,
    TransportError,
    TransportReason,
)

__all__ = [
    "Area",
    "ClientConfig",
    "DecodeError",
    "HTTPStatusError",
    "MissingVariableError",
    "ScrollProtocolError",
    "StoreClient",
    "StoreError",
    "StoreSettings",
    "TemplateSyntaxError",
    "TransportError",
    "TransportReason",
    "__version__",
]
