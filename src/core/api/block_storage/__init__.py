"""Block Storage (Cinder) v3."""

from core.api.block_storage.volumes import (
    CreateVolume,
    DeleteVolume,
    FindVolume,
    GetVolume,
    ListVolumes,
    NewVolume,
)

__all__ = [
    "CreateVolume",
    "DeleteVolume",
    "FindVolume",
    "GetVolume",
    "ListVolumes",
    "NewVolume",
]
