"""Network (Neutron) v2.0."""

from core.api.network.networks import (
    CreateNetwork,
    DeleteNetwork,
    FindNetwork,
    GetNetwork,
    ListNetworks,
    NewNetwork,
)
from core.api.network.ports import ListPorts

__all__ = [
    "CreateNetwork",
    "DeleteNetwork",
    "FindNetwork",
    "GetNetwork",
    "ListNetworks",
    "ListPorts",
    "NewNetwork",
]
