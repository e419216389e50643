"""Construcción, ejecución y decodificación de peticiones.

Responsabilidad:
- `build`: método + plantilla expandida + cabeceras + cuerpo JSON + auth.
- `execute`: envía por el transporte y drena el cuerpo siempre, en cualquier
  rama, para que la conexión vuelva al pool.
- `decode`: 2xx -> modelo tipado; no-2xx -> `HTTPStatusError` con envelope.

En esta capa los errores se *devuelven* como valores (`execute` y `decode`);
los servicios de recursos deciden lanzarlos.
"""

from __future__ import annotations

import asyncio
import base64
import contextlib
import json
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from store2.core.config import ClientConfig
from store2.core.errors import (
    DecodeError,
    ErrorEnvelope,
    ErrorReply,
    HTTPStatusError,
    TransportError,
    TransportReason,
)
from store2.core.uritemplate import ParameterSet, Template

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CallOptions:
    """Opciones por llamada: deadline y token de cancelación.

    - `timeout`: segundos; sustituye al timeout por defecto del transporte.
    - `cancel`: un `asyncio.Event`; si se activa antes o durante la llamada, se
      aborta la espera del transporte y la llamada termina con
      `TransportError(reason=CANCELLED)`.
    """

    timeout: float | None = None
    cancel: asyncio.Event | None = None


@dataclass(frozen=True)
class Response:
    """Respuesta ya drenada: el stream del transporte está cerrado."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def basic_authorization(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class RequestBuilder:
    """Puente entre operaciones tipadas y el transporte HTTP."""

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> ClientConfig:
        return self._config

    def headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Charset": "utf-8",
            "Content-Type": "application/json",
            "User-Agent": self._config.user_agent,
        }
        if self._config.has_credentials:
            headers["Authorization"] = basic_authorization(self._config.user, self._config.password)
        return headers

    def build(
        self,
        method: str,
        template: Template,
        params: ParameterSet,
        body: Mapping[str, Any] | None = None,
        *,
        call: CallOptions | None = None,
    ) -> httpx.Request:
        """Lanza `MissingVariableError` si falta una variable de ruta."""

        url = self._config.url_for(template.expand(params))
        content = None
        if body is not None:
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")

        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if call is not None and call.timeout is not None:
            timeout = call.timeout

        return self._client.build_request(
            method.upper(),
            url,
            headers=self.headers(),
            content=content,
            timeout=timeout,
        )

    @contextlib.asynccontextmanager
    async def _open(self, request: httpx.Request) -> AsyncIterator[httpx.Response]:
        response = await self._client.send(request, stream=True)
        try:
            yield response
        finally:
            await response.aclose()

    async def _send(self, request: httpx.Request) -> Response:
        async with self._open(request) as response:
            body = await response.aread()
            return Response(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=body,
            )

    async def execute(
        self, request: httpx.Request, call: CallOptions | None = None
    ) -> Response | TransportError:
        cancel = call.cancel if call is not None else None
        url = str(request.url)

        if cancel is not None and cancel.is_set():
            return TransportError(TransportReason.CANCELLED, "cancelled before sending", url=url)

        logger.debug("%s %s", request.method, url)
        try:
            if cancel is None:
                response = await self._send(request)
            else:
                response = await self._send_cancellable(request, cancel)
                if response is None:
                    logger.debug("%s %s cancelled", request.method, url)
                    return TransportError(TransportReason.CANCELLED, "cancelled by caller", url=url)
        except httpx.TimeoutException as exc:
            return TransportError(TransportReason.TIMEOUT, str(exc) or type(exc).__name__, url=url)
        except httpx.RequestError as exc:
            return TransportError(TransportReason.NETWORK, str(exc) or type(exc).__name__, url=url)

        logger.debug("%s %s -> %d", request.method, url, response.status_code)
        return response

    async def _send_cancellable(self, request: httpx.Request, cancel: asyncio.Event) -> Response | None:
        send = asyncio.ensure_future(self._send(request))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _pending = await asyncio.wait({send, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            send.cancel()
            raise
        finally:
            waiter.cancel()

        if send in done:
            return send.result()

        # Cancelar la tarea dispara el `finally` de `_open`, que cierra el stream.
        send.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await send
        return None

    def decode(
        self, response: Response, result_type: type[ModelT] | None
    ) -> ModelT | None | HTTPStatusError | DecodeError:
        if not response.ok:
            return self.decode_error(response)
        if result_type is None:
            return None

        try:
            data = json.loads(response.body)
        except ValueError as exc:
            return DecodeError(str(exc), status_code=response.status_code, raw_body=response.text)
        try:
            return result_type.model_validate(data)
        except ValidationError as exc:
            return DecodeError(
                f"unexpected {result_type.__name__} payload: {exc.error_count()} validation error(s)",
                status_code=response.status_code,
                raw_body=response.text,
            )

    def decode_error(self, response: Response) -> HTTPStatusError:
        raw = response.text
        try:
            reply = ErrorReply.model_validate(json.loads(response.body))
        except (ValueError, ValidationError):
            reply = None

        if reply is not None and reply.error is not None:
            envelope = reply.error.model_copy(
                update={
                    "code": reply.error.code or response.status_code,
                    "raw_body": raw,
                }
            )
        else:
            logger.warning("HTTP %d without error envelope", response.status_code)
            envelope = ErrorEnvelope(code=response.status_code, raw_body=raw)
        return HTTPStatusError(response.status_code, envelope)
