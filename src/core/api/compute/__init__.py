"""Compute (Nova) v2.1.

Cada módulo agrupa los descriptores de un recurso (servers, flavors, keypairs).
"""

from core.api.compute.flavors import FindFlavor, GetFlavor, ListFlavors
from core.api.compute.keypairs import ListKeypairs
from core.api.compute.servers import (
    DeleteServer,
    FindServer,
    GetServer,
    ListServers,
    LockServer,
    RebootServer,
    UnlockServer,
)

__all__ = [
    "DeleteServer",
    "FindFlavor",
    "FindServer",
    "GetFlavor",
    "GetServer",
    "ListFlavors",
    "ListKeypairs",
    "ListServers",
    "LockServer",
    "RebootServer",
    "UnlockServer",
]
