from typing import Union

from ..enums import ResourceType
from .database import Database, DatabaseSpec
from .resource import CREATE, NO_CHANGE, UPDATE, Reconciler, ResourceSpec, diff
from .user import User, UserSpec
from .warehouse import Warehouse, WarehouseSpec

AnySpec = Union[WarehouseSpec, DatabaseSpec, UserSpec]


def reconciler_for(target: Union[ResourceSpec, ResourceType, str]) -> Reconciler:
    if isinstance(target, ResourceSpec):
        resource_type = target.resource_type
    else:
        try:
            resource_type = ResourceType(target)
        except ValueError as err:
            raise TypeError(f"Unsupported resource type: {target!r}") from err

    if resource_type == ResourceType.WAREHOUSE:
        return Warehouse()
    elif resource_type == ResourceType.DATABASE:
        return Database()
    elif resource_type == ResourceType.USER:
        return User()
    raise TypeError(f"Unsupported resource type: {resource_type}")


__all__ = [
    "AnySpec",
    "CREATE",
    "Database",
    "DatabaseSpec",
    "NO_CHANGE",
    "Reconciler",
    "ResourceSpec",
    "UPDATE",
    "User",
    "UserSpec",
    "Warehouse",
    "WarehouseSpec",
    "diff",
    "reconciler_for",
]
