"""Role tiers, configuration snapshots and group resolution."""

from .config import EMPTY_CONFIGURATION, ConfigStore, RoleConfiguration
from .permissions import (
    EMPTY_PERMISSIONS,
    TIER_ORDER,
    TIER_PERMISSIONS,
    Permission,
    PermissionSet,
    Tier,
    permissions_for,
)
from .resolver import RoleResolver, normalize_group, normalize_membership, resolve, resolve_tier

__all__ = [
    "EMPTY_CONFIGURATION",
    "EMPTY_PERMISSIONS",
    "TIER_ORDER",
    "TIER_PERMISSIONS",
    "ConfigStore",
    "Permission",
    "PermissionSet",
    "RoleConfiguration",
    "RoleResolver",
    "Tier",
    "normalize_group",
    "normalize_membership",
    "permissions_for",
    "resolve",
    "resolve_tier",
]
