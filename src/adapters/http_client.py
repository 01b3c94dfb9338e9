"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y redirects para el transporte del cliente.
- Facilita testeo: `TumblrClient` acepta cualquier `httpx.Client`
  (p.ej. uno con `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import TumblrSettings


def build_client(
    settings: TumblrSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza el timeout para que todos los servicios se comporten igual.
    - Los headers (User-Agent, Content-Type) los pone `TumblrClient.new_request`,
      no el transporte: `send()` no mezcla los headers por defecto del cliente.
    - Sin seguir redirects: la API responde 3xx con el envelope en el body
      (p.ej. `blog/<id>/avatar`), y seguirlo llevaría a la imagen.
    - `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or TumblrSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        transport=transport,
    )
