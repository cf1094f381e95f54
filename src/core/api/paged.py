"""Paginación por marker para endpoints de listado.

Presenta una colección paginada del servidor como una única lista finita:

    servers = await paged(ListServers(), Pagination.limit(50)).query(session)

Estados: FETCHING -> EXHAUSTED. Se agota cuando:
- la página llega vacía o más corta que el `limit` pedido,
- el total acumulado alcanza `max_items`,
- el último elemento no tiene `id` (no hay marker con el que seguir),
- el servidor devuelve como siguiente marker el mismo que se envió
  (paginación rota: se registra un warning y se corta).

El orden es el del servidor; no se reordena ni se deduplica. Un fallo en
cualquier página se propaga inmediatamente.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator

from core.api.endpoint import Pageable, RestEndpoint
from core.api.query import ensure_list, query
from core.interfaces.session import OpenStackSession

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """Techo de elementos: `None` significa toda la colección."""

    max_items: int | None = None

    @classmethod
    def all(cls) -> "Pagination":
        return cls()

    @classmethod
    def limit(cls, max_items: int) -> "Pagination":
        if max_items < 0:
            raise ValueError("max_items must be >= 0")
        return cls(max_items=max_items)


class PagerState(str, Enum):
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"


class Paged:
    def __init__(
        self,
        endpoint: RestEndpoint,
        pagination: Pagination,
        page_size: int | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._pagination = pagination
        self._page_size = page_size
        self.state = PagerState.FETCHING

    def _remaining(self, yielded: int) -> int | None:
        if self._pagination.max_items is None:
            return None
        return self._pagination.max_items - yielded

    async def iter_items(self, session: OpenStackSession) -> AsyncIterator[Any]:
        self.state = PagerState.FETCHING
        endpoint = self._endpoint
        if not isinstance(endpoint, Pageable):
            # Sin soporte de marker: una sola petición recortada al techo.
            items = ensure_list(await query(endpoint, session))
            self.state = PagerState.EXHAUSTED
            for item in items[: self._pagination.max_items]:
                yield item
            return

        page_size = endpoint.limit or self._page_size or DEFAULT_PAGE_SIZE
        marker = endpoint.marker
        yielded = 0

        while self.state is PagerState.FETCHING:
            remaining = self._remaining(yielded)
            if remaining is not None and remaining <= 0:
                self.state = PagerState.EXHAUSTED
                break

            request_size = page_size if remaining is None else min(page_size, remaining)
            page_endpoint = endpoint.model_copy(update={"limit": request_size, "marker": marker})
            page = ensure_list(await query(page_endpoint, session))
            logger.debug(
                "page marker=%s limit=%s -> %s item(s)", marker, request_size, len(page)
            )

            for item in page[:request_size]:
                yield item
                yielded += 1

            if len(page) < request_size:
                self.state = PagerState.EXHAUSTED
                break
            remaining = self._remaining(yielded)
            if remaining is not None and remaining <= 0:
                self.state = PagerState.EXHAUSTED
                break

            last = page[request_size - 1]
            next_marker = last.get("id") if isinstance(last, dict) else None
            if next_marker is None or next_marker == "":
                self.state = PagerState.EXHAUSTED
                break
            next_marker = str(next_marker)
            if next_marker == marker:
                logger.warning(
                    "Server returned the same pagination marker '%s' twice; stopping", marker
                )
                self.state = PagerState.EXHAUSTED
                break
            marker = next_marker

    async def query(self, session: OpenStackSession) -> list[Any]:
        return [item async for item in self.iter_items(session)]


def paged(
    endpoint: RestEndpoint,
    pagination: Pagination | None = None,
    page_size: int | None = None,
) -> Paged:
    return Paged(endpoint, pagination or Pagination.all(), page_size=page_size)
