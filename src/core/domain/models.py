"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El envelope de Tumblr (`meta` + `response`) se valida de forma estricta y
  el payload queda tipado por el llamador (`Envelope[BlogInfo]`).
- Los payloads aceptan campos extra: la API añade campos sin avisar.

Nota:
- Estos modelos describen *qué* devuelve la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, Field, PrivateAttr, ValidationInfo, field_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


class ResponseMeta(BaseModel):
    """Par status/mensaje que acompaña a cada respuesta de la API."""

    model_config = ConfigDict(extra="ignore")

    status: int = Field(
        ...,
        description="Código de estado a nivel API (normalmente igual al HTTP status).",
    )
    msg: str = Field(
        default="",
        description="Mensaje legible ('OK', 'Not Found', 'Unauthorized', ...).",
    )


class ApiErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    code: int | None = None
    detail: str = ""


class Envelope(BaseModel, Generic[T]):
    """Envelope JSON devuelto por cada llamada.

    Por qué genérico:
    - El llamador elige la forma del payload antes de decodificar
      (`Envelope[BlogInfo]`, `Envelope[list[Post]]`, `Envelope[dict[str, Any]]`).
    - Un envelope por llamada; la respuesta HTTP cruda viaja en un atributo
      privado para inspección (status/headers).
    """

    model_config = ConfigDict(extra="ignore")

    meta: ResponseMeta | None = Field(
        default=None,
        description="Estado a nivel API.",
    )
    response: T | None = Field(
        default=None,
        description="Payload con la forma elegida por el llamador.",
    )
    errors: list[ApiErrorDetail] = Field(
        default_factory=list,
        description="Detalle de errores (solo presente en algunas respuestas de error).",
    )

    _http_response: httpx.Response | None = PrivateAttr(default=None)

    @field_validator("response", mode="before")
    @classmethod
    def error_payload_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # Tumblr responde `"response": []` en los errores, sea cual sea la forma.
        meta = info.data.get("meta")
        if value == [] and isinstance(meta, ResponseMeta) and meta.status >= 400:
            return None
        return value

    @property
    def http_response(self) -> httpx.Response | None:
        return self._http_response

    @property
    def ok(self) -> bool:
        """True si `meta` existe y no es un error (status < 400).

        Incluye 3xx: `avatar` devuelve 301 con un payload válido.
        """

        return self.meta is not None and self.meta.status < 400


class Blog(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Nombre corto del blog.")
    title: str = ""
    url: str = ""
    description: str = ""
    posts: int = 0
    updated: int = Field(default=0, description="Último update (epoch, segundos).")
    likes: int | None = None
    ask: bool = False
    is_nsfw: bool = False


class Post(BaseModel):
    """Post de cualquier tipo.

    Los campos específicos de cada tipo (body, photos, caption...) se
    conservan como extra.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    blog_name: str = ""
    post_url: str = ""
    type: str = ""
    timestamp: int = 0
    date: str = ""
    tags: list[str] = Field(default_factory=list)
    reblog_key: str = ""
    summary: str = ""
    note_count: int = 0


class BlogInfo(BaseModel):
    blog: Blog


class BlogAvatar(BaseModel):
    avatar_url: str


class BlogPosts(BaseModel):
    blog: Blog | None = None
    posts: list[Post] = Field(default_factory=list)
    total_posts: int = 0


class Likes(BaseModel):
    liked_posts: list[Post] = Field(default_factory=list)
    liked_count: int = 0


class Follower(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    url: str = ""
    updated: int = 0
    following: bool = False


class Followers(BaseModel):
    total_users: int = 0
    users: list[Follower] = Field(default_factory=list)


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    likes: int = 0
    following: int = 0
    default_post_format: str = ""
    blogs: list[Blog] = Field(default_factory=list)


class UserInfo(BaseModel):
    user: User


class Dashboard(BaseModel):
    posts: list[Post] = Field(default_factory=list)


class Following(BaseModel):
    total_blogs: int = 0
    blogs: list[Blog] = Field(default_factory=list)


class PostId(BaseModel):
    """Respuesta de create/delete: solo el id del post afectado."""

    id: int
