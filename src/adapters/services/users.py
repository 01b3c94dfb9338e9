"""Servicio: endpoints `user/...` (requieren `access_token`)."""

from __future__ import annotations

from typing import Any

from adapters.services.base import BaseService
from core.domain.models import Dashboard, Envelope, Following, Likes, UserInfo


class UsersService(BaseService):
    def info(self) -> Envelope[UserInfo]:
        return self._get("user/info", UserInfo)

    def dashboard(self, **filters: Any) -> Envelope[Dashboard]:
        return self._get("user/dashboard", Dashboard, **filters)

    def likes(self, *, limit: int | None = None, offset: int | None = None) -> Envelope[Likes]:
        return self._get("user/likes", Likes, limit=limit, offset=offset)

    def following(
        self, *, limit: int | None = None, offset: int | None = None
    ) -> Envelope[Following]:
        return self._get("user/following", Following, limit=limit, offset=offset)

    # follow/unfollow/like/unlike no tienen payload útil (a menudo `[]`).

    def follow(self, url: str) -> Envelope[Any]:
        return self._post("user/follow", Any, url=url)

    def unfollow(self, url: str) -> Envelope[Any]:
        return self._post("user/unfollow", Any, url=url)

    def like(self, post_id: int, reblog_key: str) -> Envelope[Any]:
        return self._post("user/like", Any, id=post_id, reblog_key=reblog_key)

    def unlike(self, post_id: int, reblog_key: str) -> Envelope[Any]:
        return self._post("user/unlike", Any, id=post_id, reblog_key=reblog_key)
