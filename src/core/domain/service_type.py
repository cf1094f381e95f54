"""OpenStack service types.

This module centralizes the service families the client can talk to.
Keeping it in the domain layer lets endpoint descriptors, the catalog
resolver and the CLI share a single source of truth without importing
adapters.
"""

from __future__ import annotations

from enum import Enum


class ServiceType(str, Enum):
    """Service families addressable through the Keystone catalog."""

    COMPUTE = "compute"
    IDENTITY = "identity"
    IMAGE = "image"
    NETWORK = "network"
    BLOCK_STORAGE = "block-storage"
    OBJECT_STORE = "object-store"
    PLACEMENT = "placement"

    def catalog_types(self) -> tuple[str, ...]:
        """Catalog `type` values accepted for this service, preferred first."""

        return _CATALOG_TYPES[self]

    def default_version(self) -> str:
        """Version prefix appended when a catalog URL carries none."""

        return _DEFAULT_VERSIONS[self]

    def microversion_name(self) -> str:
        """Service name used in the `OpenStack-API-Version` header."""

        return "volume" if self is ServiceType.BLOCK_STORAGE else self.value

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.replace("-", " ").title()


_CATALOG_TYPES: dict[ServiceType, tuple[str, ...]] = {
    ServiceType.COMPUTE: ("compute",),
    ServiceType.IDENTITY: ("identity",),
    ServiceType.IMAGE: ("image",),
    ServiceType.NETWORK: ("network",),
    # Cinder se ha registrado con varios nombres a lo largo de los releases.
    ServiceType.BLOCK_STORAGE: ("block-storage", "volumev3", "block-store", "volume"),
    ServiceType.OBJECT_STORE: ("object-store",),
    ServiceType.PLACEMENT: ("placement",),
}

_DEFAULT_VERSIONS: dict[ServiceType, str] = {
    ServiceType.COMPUTE: "v2.1",
    ServiceType.IDENTITY: "v3",
    ServiceType.IMAGE: "v2",
    ServiceType.NETWORK: "v2.0",
    ServiceType.BLOCK_STORAGE: "v3",
    ServiceType.OBJECT_STORE: "v1",
    ServiceType.PLACEMENT: "",
}
