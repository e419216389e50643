"""Pytest fixtures: configuración de prueba y una API falsa sobre MockTransport."""

from __future__ import annotations

import json
from collections import defaultdict, deque
from pathlib import Path

import httpx
import pytest

from store2.client import StoreClient
from store2.core.config import ClientConfig

TESTDATA = Path(__file__).parent / "testdata"

BASE_URL = "https://store.example.test/api/v2"


def load(name: str) -> dict:
    return json.loads((TESTDATA / f"{name}.json").read_text(encoding="utf-8"))


class FakeAPI:
    """Respuestas en cola por (método, ruta); la última se repite.

    Las rutas se registran relativas a la URL base y sin query.
    """

    prefix = "/api/v2"

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], deque[tuple[int, dict]]] = defaultdict(deque)

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        fixture: str | None = None,
        json_body: object = None,
        content: bytes | None = None,
    ) -> None:
        if fixture is not None:
            kwargs: dict = {"json": load(fixture)}
        elif json_body is not None:
            kwargs = {"json": json_body}
        else:
            kwargs = {"content": content or b""}
        self._routes[(method.upper(), self.prefix + path)].append((status, kwargs))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"error": {"code": 404, "message": f"no route {path}"}})
        status, kwargs = queue.popleft() if len(queue) > 1 else queue[0]
        return httpx.Response(status, **kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, user="token", password="")


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
async def store(config: ClientConfig, api: FakeAPI):
    async with StoreClient(config, transport=httpx.MockTransport(api.handler)) as client:
        yield client
