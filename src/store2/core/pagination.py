"""Protocolo de scroll (paginación por cursor).

Por qué separado de `search`:
- `search` pagina por offset (`skip`/`take`), sin estado.
- `scroll` recorre *todo* el catálogo con un token opaco del servidor. El
  token se devuelve tal cual en la siguiente petición; un token vacío marca
  el final.

Notas:
- Si el token caduca (unos 2 minutos sin uso), el servidor reinicia el
  recorrido desde la primera página sin avisar. No es un error: el llamador
  verá productos repetidos.
- Un token repetido dentro del mismo recorrido es una anomalía del protocolo
  y aborta con `ScrollProtocolError` en lugar de entrar en bucle.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, Protocol, TypeVar

from store2.core.errors import ScrollProtocolError

logger = logging.getLogger(__name__)


class ScrollState(str, Enum):
    START = "start"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ScrollPage(Protocol):
    page_token: str | None


PageT = TypeVar("PageT", bound=ScrollPage)


class ScrollCursor:
    """Máquina de estados START -> IN_PROGRESS -> DONE.

    No hace I/O: solo decide qué token enviar y cuándo parar.
    """

    def __init__(self) -> None:
        self._state = ScrollState.START
        self._token: str | None = None
        self._seen: set[str] = set()
        self._pages = 0

    @property
    def state(self) -> ScrollState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is ScrollState.DONE

    @property
    def pages(self) -> int:
        return self._pages

    def next_token(self) -> str | None:
        """Token para la próxima petición; `None` en la primera (sin `pageToken`)."""

        if self._state is ScrollState.DONE:
            raise ScrollProtocolError("scroll already finished")
        return self._token

    def advance(self, page_token: str | None) -> ScrollState:
        """Registra el token de la página recibida y devuelve el nuevo estado."""

        if self._state is ScrollState.DONE:
            raise ScrollProtocolError("cannot advance a finished scroll")

        self._pages += 1
        if not page_token:
            self._state = ScrollState.DONE
            self._token = None
            return self._state

        if page_token in self._seen:
            raise ScrollProtocolError(
                f"server returned page token {page_token!r} twice (after {self._pages} pages)"
            )
        self._seen.add(page_token)
        self._token = page_token
        self._state = ScrollState.IN_PROGRESS
        return self._state


async def scroll_pages(
    fetch: Callable[[str | None], Awaitable[PageT]],
    cursor: ScrollCursor | None = None,
) -> AsyncIterator[PageT]:
    """Itera páginas llamando a `fetch(token)` hasta que el cursor termina.

    `fetch` recibe `None` en la primera llamada y después el token anterior,
    sin modificar. La última página (la del token vacío) también se entrega.
    """

    cursor = cursor or ScrollCursor()
    while not cursor.done:
        page = await fetch(cursor.next_token())
        cursor.advance(page.page_token)
        logger.debug("scroll page %d (%s)", cursor.pages, cursor.state.value)
        yield page
