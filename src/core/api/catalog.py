"""Catálogo de servicios de Keystone v3.

Por qué en el Core:
- Resolver la URL de un servicio es lógica pura sobre el cuerpo del token;
  la petición a Keystone la hace `adapters.session`.

Formato esperado (`POST /v3/auth/tokens`):
    {"token": {"catalog": [{"type": "compute", "endpoints": [
        {"interface": "public", "region": "RegionOne", "url": "..."}]}]}}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from core.domain.service_type import ServiceType
from core.errors import CatalogError

_VERSION_SEGMENT = re.compile(r"/v\d+(\.\d+)?(/|$)")


@dataclass(frozen=True)
class CatalogEndpoint:
    service_type: str
    interface: str
    region: str | None
    url: str


def _normalize_interface(value: str) -> str:
    # Keystone v2 usaba publicURL/internalURL/adminURL.
    value = value.strip().lower()
    return value[:-3] if value.endswith("url") else value


class ServiceCatalog:
    def __init__(self, endpoints: list[CatalogEndpoint] | None = None) -> None:
        self._endpoints = list(endpoints or [])

    @classmethod
    def from_token_body(cls, body: dict[str, Any]) -> "ServiceCatalog":
        token = body.get("token") if isinstance(body, dict) else None
        catalog = token.get("catalog") if isinstance(token, dict) else None
        endpoints: list[CatalogEndpoint] = []
        for service in catalog or []:
            if not isinstance(service, dict):
                continue
            service_type = str(service.get("type") or "").lower()
            for ep in service.get("endpoints") or []:
                if not isinstance(ep, dict) or not ep.get("url"):
                    continue
                endpoints.append(
                    CatalogEndpoint(
                        service_type=service_type,
                        interface=_normalize_interface(str(ep.get("interface") or "public")),
                        region=ep.get("region_id") or ep.get("region"),
                        url=str(ep["url"]),
                    )
                )
        return cls(endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def endpoint_for(
        self,
        service_type: ServiceType,
        *,
        interface: str = "public",
        region: str | None = None,
    ) -> str:
        """URL del servicio; los alias de catálogo se prueban por orden de preferencia."""

        wanted = _normalize_interface(interface)
        for catalog_type in service_type.catalog_types():
            for ep in self._endpoints:
                if ep.service_type != catalog_type or ep.interface != wanted:
                    continue
                if region is not None and ep.region != region:
                    continue
                return ep.url

        where = f" in region '{region}'" if region else ""
        raise CatalogError(
            f"No {wanted} endpoint for service '{service_type.value}'{where} in the catalog"
        )


def versioned_base_url(url: str, service_type: ServiceType) -> str:
    """Añade el prefijo de versión si la URL del catálogo no trae ninguno.

    Nova/Cinder suelen registrar `.../v2.1` o `.../v3/<project>`; Neutron
    y Glance registran la raíz del servicio.
    """

    base = url.rstrip("/")
    if _VERSION_SEGMENT.search(urlparse(base).path + "/"):
        return base
    version = service_type.default_version()
    return f"{base}/{version}" if version else base
