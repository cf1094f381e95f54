"""Identity (Keystone) v3."""

from core.api.identity.projects import (
    CreateProject,
    DeleteProject,
    FindProject,
    GetProject,
    ListProjects,
    NewProject,
)
from core.api.identity.users import CreateUser, FindUser, GetUser, ListUsers, NewUser

__all__ = [
    "CreateProject",
    "CreateUser",
    "DeleteProject",
    "FindProject",
    "FindUser",
    "GetProject",
    "GetUser",
    "ListProjects",
    "ListUsers",
    "NewProject",
    "NewUser",
]
