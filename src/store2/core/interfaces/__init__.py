"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from store2.core.interfaces.gateway import RequestGateway

__all__ = ["RequestGateway"]
