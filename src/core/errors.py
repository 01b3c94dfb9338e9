"""Errores del cliente.

Taxonomía:
- `URLParseError`: la ruta relativa no es una referencia URL válida.
- `RequestBuildError`: no se puede construir la request (p.ej. método inválido).
- Errores de transporte: se propagan tal cual (`httpx.TransportError`).
- `DecodeError`: el body no encaja con el envelope/payload pedido.
- `ApiError`: respuesta no-2xx (solo con `check_response` o modo estricto).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from core.domain.models import Envelope, ResponseMeta


class TumblrError(Exception):
    """Base de todos los errores propios del cliente."""


class URLParseError(TumblrError, ValueError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid URL reference {url!r}: {reason}")
        self.url = url


class RequestBuildError(TumblrError, ValueError):
    pass


class DecodeError(TumblrError):
    """El round trip HTTP funcionó pero el body no se pudo decodificar.

    `response` siempre está presente para inspeccionar status/headers.
    """

    def __init__(self, message: str, response: httpx.Response) -> None:
        super().__init__(message)
        self.response = response


class ApiError(TumblrError):
    def __init__(
        self,
        response: httpx.Response,
        envelope: Envelope[Any] | None = None,
    ) -> None:
        self.response = response
        self.envelope = envelope
        self.status_code = response.status_code
        self.meta: ResponseMeta | None = envelope.meta if envelope is not None else None
        msg = self.meta.msg if self.meta is not None else response.reason_phrase
        super().__init__(f"tumblr API error {self.status_code}: {msg}")
