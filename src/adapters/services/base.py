"""Base de los servicios por recurso.

Cada servicio solo arma la ruta (y el query/form) y delega en el
`Requester` (normalmente `TumblrClient`) para construir y despachar.
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote, urlencode

from core.domain.models import Envelope
from core.interfaces.requester import Requester


def encode_form(params: Mapping[str, Any]) -> str:
    """Codifica un mapping como `application/x-www-form-urlencoded`.

    - Omite valores `None`.
    - Los bool se envían como `true`/`false`.
    - Listas/tuplas generan la clave repetida.
    """

    items: list[tuple[str, Any]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        items.append((key, value))
    return urlencode(items, doseq=True)


def blog_identifier(blog: str) -> str:
    """`staff` -> `staff.tumblr.com`; dominios propios se dejan igual."""

    blog = blog.strip().strip("/")
    if not blog:
        raise ValueError("blog identifier must not be empty")
    if "." not in blog:
        blog = f"{blog}.tumblr.com"
    return quote(blog, safe=".-_~")


def with_query(path: str, params: Mapping[str, Any]) -> str:
    query = encode_form(params)
    return f"{path}?{query}" if query else path


class BaseService:
    def __init__(self, client: Requester) -> None:
        self._client = client

    def _get(self, path: str, payload_type: Any, **params: Any) -> Envelope[Any]:
        request = self._client.new_request("GET", with_query(path, params))
        _, envelope = self._client.do(request, payload_type)
        assert envelope is not None
        return envelope

    def _post(self, path: str, payload_type: Any, **form: Any) -> Envelope[Any]:
        request = self._client.new_request("POST", path, encode_form(form))
        _, envelope = self._client.do(request, payload_type)
        assert envelope is not None
        return envelope
