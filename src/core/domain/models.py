"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las APIs de OpenStack añaden campos con cada microversión: todos los
  modelos de respuesta ignoran campos desconocidos (`extra="ignore"`).

Nota:
- Estos modelos describen *qué* devuelve cada servicio, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict


class ResourceModel(BaseModel):
    """Base de los modelos de respuesta.

    Por qué una base:
    - Un único lugar para la política de decodificación (ignorar extras,
      aceptar alias con ':' tipo `OS-EXT-STS:vm_state`).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Server(ResourceModel):
    """Servidor de Nova (`GET /servers/detail`, `GET /servers/{id}`)."""

    id: str = Field(..., description="UUID del servidor.")
    name: str = Field(default="", description="Nombre del servidor.")
    status: str | None = Field(default=None, description="Estado (ACTIVE, SHUTOFF, ERROR...).")
    flavor: dict[str, Any] | None = Field(
        default=None,
        description="Flavor embebido (id en microversiones antiguas, detalle desde 2.47).",
    )
    image: dict[str, Any] | str | None = Field(
        default=None,
        description="Imagen de arranque; Nova devuelve '' para boot-from-volume.",
    )
    addresses: dict[str, Any] = Field(default_factory=dict)
    key_name: str | None = None
    tenant_id: str | None = None
    user_id: str | None = None
    created: str | None = None
    updated: str | None = None
    locked: bool | None = None
    vm_state: str | None = Field(default=None, alias="OS-EXT-STS:vm_state")
    task_state: str | None = Field(default=None, alias="OS-EXT-STS:task_state")
    availability_zone: str | None = Field(default=None, alias="OS-EXT-AZ:availability_zone")


class Flavor(ResourceModel):
    id: str
    name: str = ""
    vcpus: int | None = None
    ram: int | None = Field(default=None, description="Memoria en MiB.")
    disk: int | None = Field(default=None, description="Disco raíz en GiB.")
    swap: int | str | None = None
    is_public: bool | None = Field(default=None, alias="os-flavor-access:is_public")
    description: str | None = None


class Keypair(ResourceModel):
    name: str
    fingerprint: str | None = None
    type: str | None = None
    public_key: str | None = None


class Project(ResourceModel):
    """Proyecto de Keystone v3."""

    id: str
    name: str = ""
    domain_id: str | None = None
    description: str | None = None
    enabled: bool | None = None
    is_domain: bool | None = None
    parent_id: str | None = None
    tags: list[str] = Field(default_factory=list)


class User(ResourceModel):
    """Usuario de Keystone v3."""

    id: str
    name: str = ""
    domain_id: str | None = None
    enabled: bool | None = None
    email: str | None = None
    description: str | None = None
    default_project_id: str | None = None
    password_expires_at: str | None = None


class Image(ResourceModel):
    """Imagen de Glance v2 (los campos de primer nivel son propiedades)."""

    id: str
    name: str | None = None
    status: str | None = None
    visibility: str | None = None
    size: int | None = None
    disk_format: str | None = None
    container_format: str | None = None
    min_disk: int | None = None
    min_ram: int | None = None
    checksum: str | None = None
    owner: str | None = None
    protected: bool | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class Network(ResourceModel):
    """Red de Neutron."""

    id: str
    name: str = ""
    status: str | None = None
    admin_state_up: bool | None = None
    shared: bool | None = None
    external: bool | None = Field(default=None, alias="router:external")
    mtu: int | None = None
    subnets: list[str] = Field(default_factory=list)
    project_id: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)


class Port(ResourceModel):
    id: str
    name: str = ""
    network_id: str | None = None
    mac_address: str | None = None
    status: str | None = None
    fixed_ips: list[dict[str, Any]] = Field(default_factory=list)
    device_id: str | None = None
    device_owner: str | None = None


class Volume(ResourceModel):
    """Volumen de Cinder v3."""

    id: str
    name: str | None = None
    status: str | None = None
    size: int | None = Field(default=None, description="Tamaño en GiB.")
    volume_type: str | None = None
    bootable: str | bool | None = None
    availability_zone: str | None = None
    multiattach: bool | None = None
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    description: str | None = None
    created_at: str | None = None


class CloudProfile(BaseModel):
    """Perfil de conexión a una nube (una entrada de `clouds.yaml` o `OS_*`).

    Por qué un modelo propio:
    - `clouds.yaml` y las variables de entorno se normalizan a un único
      contrato que consume la sesión.
    - Los secretos se guardan como `SecretStr` para no filtrarlos en logs/tablas.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="envvars", description="Nombre del cloud en clouds.yaml.")
    auth_type: str = Field(
        default="password",
        description="password | token | v3applicationcredential | none.",
    )
    auth_url: str | None = Field(default=None, description="URL de Keystone (con o sin /v3).")

    username: str | None = None
    user_id: str | None = None
    password: SecretStr | None = None
    token: SecretStr | None = None
    application_credential_id: str | None = None
    application_credential_secret: SecretStr | None = None

    project_name: str | None = None
    project_id: str | None = None
    user_domain_name: str | None = None
    user_domain_id: str | None = None
    project_domain_name: str | None = None
    project_domain_id: str | None = None
    domain_name: str | None = None
    domain_id: str | None = None

    region_name: str | None = None
    interface: str | None = None
    verify: bool = True

    endpoint_override: dict[str, str] = Field(
        default_factory=dict,
        description="URL fija por service type (p.ej. {'compute': 'http://nova:8774/v2.1'}).",
    )
