"""Cliente de la API v2 de Tumblr.

Dos piezas:
- `new_request`: resuelve la ruta relativa contra la base, inyecta
  credenciales en el query string (sin pisar las del llamador) y arma headers.
- `do`: envía la request por el transporte y decodifica el envelope JSON
  en la forma de payload que elija el llamador.

Sin reintentos, sin rate limiting, sin caché y sin paginación.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from adapters.services import BlogService, TaggedService, UsersService
from adapters.services.base import encode_form
from core.config import BASE_URL, USER_AGENT, TumblrSettings
from core.domain.models import Envelope
from core.errors import ApiError, DecodeError, RequestBuildError, URLParseError

__all__ = ["TumblrClient", "check_response", "encode_form"]

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
CREDENTIAL_PARAMS = ("access_token", "client_id", "client_secret")

# RFC 7230 token
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_BODYLESS_METHODS = frozenset({"GET", "HEAD"})
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def check_response(response: httpx.Response, envelope: Envelope[Any] | None = None) -> None:
    """Lanza `ApiError` si la respuesta HTTP es 4xx/5xx.

    Los 3xx no son error: `blog/<id>/avatar` responde 301 con el envelope.

    `do` no la llama salvo en modo estricto: por defecto el llamador
    inspecciona `envelope.meta` por su cuenta.
    """

    if not response.is_error:
        return
    raise ApiError(response, envelope)


def _redacted(url: httpx.URL) -> str:
    params = url.params
    hidden = [key for key in CREDENTIAL_PARAMS if key in params]
    if not hidden:
        return str(url)
    for key in hidden:
        params = params.set(key, "***")
    return str(url.copy_with(params=params))


class TumblrClient:
    """Gestiona la comunicación con Tumblr.

    Los atributos de credenciales (`client_id`, `client_secret`,
    `access_token`) y `user_agent` son públicos y se pueden cambiar después
    de construir el cliente.

    `last_response` guarda el último envelope decodificado. Es un único slot
    compartido: con llamadas concurrentes sobre el mismo cliente no hay
    garantía de qué envelope se observa ahí. Usar el valor devuelto por `do`.
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        *,
        base_url: str = BASE_URL,
        user_agent: str = USER_AGENT,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        strict: bool = False,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client()

        self.base_url = httpx.URL(base_url)
        self.user_agent = user_agent
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token
        self.strict = strict

        self.last_response: Envelope[Any] | None = None

        self.blog = BlogService(self)
        self.users = UsersService(self)
        self.tagged = TaggedService(self)

    @classmethod
    def from_settings(cls, settings: TumblrSettings | None = None) -> "TumblrClient":
        """Construye un cliente con transporte y credenciales de `TumblrSettings`."""

        settings = settings or TumblrSettings()
        client = cls(
            build_client(settings),
            base_url=settings.base_url,
            user_agent=settings.user_agent,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            access_token=settings.access_token,
            strict=settings.strict_status,
        )
        client._owns_client = True
        return client

    def close(self) -> None:
        """Cierra el transporte solo si lo creó este cliente."""

        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TumblrClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def new_request(self, method: str, url: str, body: str = "") -> httpx.Request:
        """Crea una request para la API.

        `url` es relativa a `base_url` y debe ir sin `/` inicial; puede
        traer su propio query string, que se conserva. No hace I/O.
        """

        method = method.upper()
        if not _METHOD_RE.fullmatch(method):
            raise RequestBuildError(f"invalid HTTP method {method!r}")

        bad_escape = _BAD_ESCAPE_RE.search(url)
        if bad_escape:
            raise URLParseError(url, f"invalid URL escape at position {bad_escape.start()}")

        try:
            rel = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise URLParseError(url, str(exc)) from exc

        resolved = self.base_url.join(rel)

        params = resolved.params
        credentials = (
            ("access_token", self.access_token),
            ("client_id", self.client_id),
            ("client_secret", self.client_secret),
        )
        for key, value in credentials:
            if value and not params.get(key):
                params = params.set(key, value)
        params = httpx.QueryParams(sorted(params.multi_items(), key=lambda item: item[0]))
        resolved = resolved.copy_with(params=params)

        headers = {"User-Agent": self.user_agent}
        if method == "POST":
            headers["Content-Type"] = FORM_CONTENT_TYPE

        content = None if method in _BODYLESS_METHODS else body.encode("utf-8")

        try:
            request = httpx.Request(method, resolved, headers=headers, content=content)
        except (ValueError, httpx.InvalidURL) as exc:
            raise RequestBuildError(f"cannot build {method} request: {exc}") from exc

        logger.debug("built %s %s", method, _redacted(request.url))
        return request

    def do(
        self,
        request: httpx.Request,
        payload_type: Any = None,
    ) -> tuple[httpx.Response, Envelope[Any] | None]:
        """Envía la request y decodifica el envelope.

        - Sin `payload_type` no se lee ni se decodifica el body: devuelve
          `(response, None)`.
        - Con `payload_type` el body se decodifica en `Envelope[payload_type]`
          sea cual sea el status HTTP. Un JSON inválido o con otra forma
          lanza `DecodeError` (con `.response`).
        - Los errores de transporte de httpx se propagan tal cual.

        La respuesta se cierra siempre antes de volver.
        """

        response = self._client.send(request, stream=True)
        try:
            logger.debug("%s %s -> %s", request.method, _redacted(request.url), response.status_code)
            if payload_type is None:
                return response, None

            raw = response.read()
            try:
                envelope = Envelope[payload_type].model_validate_json(raw)
            except ValidationError as exc:
                raise DecodeError(
                    f"cannot decode response (HTTP {response.status_code}): {exc}",
                    response,
                ) from exc
            envelope._http_response = response
            self.last_response = envelope
        finally:
            response.close()

        if self.strict:
            check_response(response, envelope)
        return response, envelope
