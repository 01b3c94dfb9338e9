from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.tumblr_client import TumblrClient

Handler = Callable[[httpx.Request], httpx.Response]

OK_META = {"status": 200, "msg": "OK"}


def envelope_json(response: object, status: int = 200, msg: str = "OK") -> dict:
    return {"meta": {"status": status, "msg": msg}, "response": response}


class Recorder:
    """Transport falso: guarda las requests y responde con `handler`."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[TumblrClient, Recorder]]:
    clients: list[httpx.Client] = []

    def factory(handler: Handler | None = None, **kwargs: object) -> tuple[TumblrClient, Recorder]:
        recorder = Recorder(handler or (lambda request: httpx.Response(200, json=envelope_json({}))))
        http_client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(http_client)
        return TumblrClient(http_client, **kwargs), recorder  # type: ignore[arg-type]

    yield factory

    for http_client in clients:
        http_client.close()
