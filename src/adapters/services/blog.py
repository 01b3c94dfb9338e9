"""Servicio: endpoints `blog/<blog-identifier>/...`."""

from __future__ import annotations

from typing import Any

from adapters.services.base import BaseService, blog_identifier
from core.domain.models import BlogAvatar, BlogInfo, BlogPosts, Envelope, Followers, Likes, PostId

POST_TYPES = ("text", "quote", "link", "answer", "video", "audio", "photo", "chat")
AVATAR_SIZES = (16, 24, 30, 40, 48, 64, 96, 128, 512)


class BlogService(BaseService):
    """Operaciones sobre un blog concreto."""

    def info(self, blog: str) -> Envelope[BlogInfo]:
        return self._get(f"blog/{blog_identifier(blog)}/info", BlogInfo)

    def avatar(self, blog: str, size: int = 64) -> Envelope[BlogAvatar]:
        if size not in AVATAR_SIZES:
            raise ValueError(f"avatar size must be one of {AVATAR_SIZES}, got {size}")
        return self._get(f"blog/{blog_identifier(blog)}/avatar/{size}", BlogAvatar)

    def likes(
        self, blog: str, *, limit: int | None = None, offset: int | None = None
    ) -> Envelope[Likes]:
        return self._get(f"blog/{blog_identifier(blog)}/likes", Likes, limit=limit, offset=offset)

    def followers(
        self, blog: str, *, limit: int | None = None, offset: int | None = None
    ) -> Envelope[Followers]:
        return self._get(
            f"blog/{blog_identifier(blog)}/followers", Followers, limit=limit, offset=offset
        )

    def posts(self, blog: str, *, type: str | None = None, **filters: Any) -> Envelope[BlogPosts]:
        """Posts publicados.

        Filtros habituales: `id`, `tag`, `limit`, `offset`, `reblog_info`,
        `notes_info`, `filter`.
        """

        path = f"blog/{blog_identifier(blog)}/posts"
        if type is not None:
            if type not in POST_TYPES:
                raise ValueError(f"unknown post type {type!r}")
            path = f"{path}/{type}"
        return self._get(path, BlogPosts, **filters)

    def create_post(self, blog: str, **fields: Any) -> Envelope[PostId]:
        """Crea un post (form POST). `type` por defecto: `text`."""

        fields.setdefault("type", "text")
        return self._post(f"blog/{blog_identifier(blog)}/post", PostId, **fields)

    def delete_post(self, blog: str, post_id: int) -> Envelope[PostId]:
        return self._post(f"blog/{blog_identifier(blog)}/post/delete", PostId, id=post_id)
