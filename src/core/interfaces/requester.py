"""Contrato del par construir-request / despachar.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los servicios (`BlogService`, `UsersService`, `TaggedService`) solo
  necesitan estas dos operaciones, así que se pueden testear con un doble.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from core.domain.models import Envelope


@runtime_checkable
class Requester(Protocol):
    """Contrato mínimo que consumen los servicios por recurso.

    Reglas de diseño:
    - `new_request` no hace I/O.
    - `do` hace exactamente un round trip y devuelve un envelope por llamada
      (o `None` si no se pidió forma de payload).
    """

    def new_request(self, method: str, url: str, body: str = "") -> httpx.Request:
        ...

    def do(
        self,
        request: httpx.Request,
        payload_type: Any = None,
    ) -> tuple[httpx.Response, Envelope[Any] | None]:
        ...
