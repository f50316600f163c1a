"""Map directory group memberships onto internal role tiers."""

from rolemap.core import (
    ConfigStore,
    Permission,
    PermissionSet,
    RoleConfiguration,
    RoleResolver,
    Tier,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "Permission",
    "PermissionSet",
    "RoleConfiguration",
    "RoleResolver",
    "Tier",
    "__version__",
    "resolve",
]
