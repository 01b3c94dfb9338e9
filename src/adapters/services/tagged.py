"""Servicio: `tagged?tag=...` (posts públicos por tag)."""

from __future__ import annotations

from adapters.services.base import BaseService
from core.domain.models import Envelope, Post


class TaggedService(BaseService):
    def get(
        self,
        tag: str,
        *,
        before: int | None = None,
        limit: int | None = None,
        filter: str | None = None,
    ) -> Envelope[list[Post]]:
        """Posts con `tag`. `before` es un timestamp epoch para paginar a mano."""

        if not tag:
            raise ValueError("tag must not be empty")
        return self._get("tagged", list[Post], tag=tag, before=before, limit=limit, filter=filter)
