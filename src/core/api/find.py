"""Resolución nombre-o-ID de recursos.

Algoritmo:
1. GET directo por id.
2. Si el servicio responde 404 (o 400 en servicios que validan el formato
   UUID), listar filtrando por nombre y quedarse con coincidencias exactas.
3. Cero coincidencias -> `ResourceNotFound`; dos o más -> `MultipleResourcesFound`.

Cualquier otro error (401, 500, transporte...) se propaga sin fallback.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.api.endpoint import RestEndpoint, build_model
from core.api.query import ensure_list, query
from core.errors import DecodeError, HttpError, MultipleResourcesFound, ResourceNotFound
from core.interfaces.session import OpenStackSession

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Findable")

_FALLBACK_STATUSES = frozenset({400, 404})


class Findable(BaseModel):
    """Petición de búsqueda: sabe construir el GET por id y el listado por nombre."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Nombre o ID indicado por el usuario.")
    extra_headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def build(cls: type[F], **fields: Any) -> F:
        return build_model(cls, **fields)

    @abstractmethod
    def get_ep(self) -> RestEndpoint: ...

    @abstractmethod
    def list_ep(self) -> RestEndpoint: ...


async def find(findable: Findable, session: OpenStackSession) -> dict[str, Any]:
    """Devuelve el recurso (JSON) que corresponde al nombre o ID."""

    try:
        data = await query(findable.get_ep(), session)
    except HttpError as exc:
        if exc.status_code not in _FALLBACK_STATUSES:
            raise
        logger.debug("'%s' is not an id (HTTP %s); searching by name", findable.id, exc.status_code)
    else:
        if not isinstance(data, dict):
            raise DecodeError(f"Expected an object for '{findable.id}'")
        return data

    items = ensure_list(await query(findable.list_ep(), session))
    matches = [item for item in items if isinstance(item, dict) and item.get("name") == findable.id]

    if not matches:
        raise ResourceNotFound(findable.id)
    if len(matches) > 1:
        raise MultipleResourcesFound(findable.id, [str(m.get("id")) for m in matches])
    return matches[0]


async def find_id(findable: Findable, session: OpenStackSession) -> str:
    resource = await find(findable, session)
    resource_id = resource.get("id")
    if not resource_id:
        raise DecodeError(f"Resource '{findable.id}' has no id")
    return str(resource_id)
