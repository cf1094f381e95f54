"""Carga del perfil de conexión (`clouds.yaml` / variables `OS_*`).

Reglas:
- Si se indica un cloud (`--os-cloud` o `OS_CLOUD`), se busca en `clouds.yaml`
  (y se mezcla con `secure.yaml` si existe). Un cloud inexistente es un error.
- Si no, el perfil se construye con las variables de entorno `OS_*`.

Orden de búsqueda de ficheros:
1) `OSC_CLOUDS_YAML_PATH` / `settings.clouds_yaml_path`
2) ./clouds.yaml
3) ~/.config/openstack/clouds.yaml
4) /etc/openstack/clouds.yaml
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.models import CloudProfile
from core.domain.service_type import ServiceType
from core.errors import ConfigError

logger = logging.getLogger(__name__)

_AUTH_KEYS = (
    "auth_url",
    "username",
    "user_id",
    "password",
    "token",
    "application_credential_id",
    "application_credential_secret",
    "project_name",
    "project_id",
    "user_domain_name",
    "user_domain_id",
    "project_domain_name",
    "project_domain_id",
    "domain_name",
    "domain_id",
)


def _config_dirs() -> list[Path]:
    return [
        Path.cwd(),
        Path.home() / ".config" / "openstack",
        Path("/etc/openstack"),
    ]


def find_config_file(filename: str, *, explicit: Path | None = None) -> Path | None:
    if explicit is not None and filename == "clouds.yaml":
        return explicit if explicit.is_file() else None
    for directory in _config_dirs():
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} does not contain a mapping")
    return data


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _endpoint_overrides(raw: Mapping[str, Any], *, suffix: str) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for service in ServiceType:
        key = service.value.replace("-", "_") + suffix
        value = raw.get(key)
        if value:
            overrides[service.value] = str(value)
    return overrides


def profile_from_cloud_entry(name: str, entry: Mapping[str, Any]) -> CloudProfile:
    auth = entry.get("auth") or {}
    if not isinstance(auth, Mapping):
        raise ConfigError(f"Cloud '{name}': 'auth' must be a mapping")

    data: dict[str, Any] = {k: auth[k] for k in _AUTH_KEYS if auth.get(k) is not None}
    data["name"] = name
    data["auth_type"] = str(entry.get("auth_type") or ("token" if auth.get("token") else "password"))
    for key in ("region_name", "interface"):
        if entry.get(key):
            data[key] = entry[key]
    if "verify" in entry:
        data["verify"] = bool(entry["verify"])
    data["endpoint_override"] = _endpoint_overrides(entry, suffix="_endpoint_override")

    try:
        return CloudProfile.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Cloud '{name}' is invalid: {exc}") from exc


def profile_from_environ(environ: Mapping[str, str]) -> CloudProfile:
    data: dict[str, Any] = {"name": "envvars"}
    for key in _AUTH_KEYS:
        value = environ.get(f"OS_{key.upper()}")
        if value:
            data[key] = value
    # Nombres heredados de Keystone v2.
    data.setdefault("project_name", environ.get("OS_TENANT_NAME"))
    data.setdefault("project_id", environ.get("OS_TENANT_ID"))

    if environ.get("OS_AUTH_TYPE"):
        data["auth_type"] = environ["OS_AUTH_TYPE"]
    elif data.get("token") and not data.get("password"):
        data["auth_type"] = "token"
    if environ.get("OS_REGION_NAME"):
        data["region_name"] = environ["OS_REGION_NAME"]
    if environ.get("OS_INTERFACE"):
        data["interface"] = environ["OS_INTERFACE"]
    if environ.get("OS_INSECURE", "").lower() in ("1", "true", "yes"):
        data["verify"] = False

    env_upper = {k.upper(): v for k, v in environ.items()}
    overrides: dict[str, str] = {}
    for service in ServiceType:
        value = env_upper.get(f"OS_{service.value.replace('-', '_').upper()}_ENDPOINT_OVERRIDE")
        if value:
            overrides[service.value] = value
    data["endpoint_override"] = overrides

    return CloudProfile.model_validate({k: v for k, v in data.items() if v is not None})


def load_cloud_profile(
    cloud: str | None = None,
    *,
    settings: AppSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> CloudProfile:
    """Resuelve el perfil de conexión activo."""

    settings = settings or AppSettings()
    environ = os.environ if environ is None else environ
    cloud = cloud or environ.get("OS_CLOUD") or None

    if not cloud:
        logger.info("No cloud selected; using OS_* environment variables")
        return profile_from_environ(environ)

    clouds_path = find_config_file("clouds.yaml", explicit=settings.clouds_yaml_path)
    if clouds_path is None:
        raise ConfigError(f"Cloud '{cloud}' requested but no clouds.yaml was found")

    clouds = _read_yaml(clouds_path).get("clouds") or {}
    secure_path = find_config_file("secure.yaml")
    if secure_path is not None:
        clouds = _merge(clouds, _read_yaml(secure_path).get("clouds") or {})

    entry = clouds.get(cloud)
    if not isinstance(entry, Mapping):
        available = ", ".join(sorted(clouds)) or "none"
        raise ConfigError(f"Cloud '{cloud}' not found in {clouds_path} (available: {available})")

    logger.info("Using cloud '%s' from %s", cloud, clouds_path)
    return profile_from_cloud_entry(cloud, entry)
