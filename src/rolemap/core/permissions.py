"""Role tiers and the permission lists bound to them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Final

DEFAULT_AUTHORITY_PREFIX: Final[str] = "ROLE_"


class Permission(StrEnum):
    """Internal capability identifiers handed to the host."""

    READ = "read"
    WRITE = "write"
    COMMIT = "commit"
    PROMOTE = "promote"
    ADMIN = "admin"


class Tier(Enum):
    """Privilege tiers, declared from highest to lowest."""

    ADMIN = "admin"
    COMMIT = "commit"
    WRITE = "write"
    READ = "read"

    @property
    def rank(self) -> int:
        return len(TIER_ORDER) - TIER_ORDER.index(self)


#: Resolution order, highest privilege first.
TIER_ORDER: Final[tuple[Tier, ...]] = (Tier.ADMIN, Tier.COMMIT, Tier.WRITE, Tier.READ)

TIER_PERMISSIONS: Final[dict[Tier, tuple[Permission, ...]]] = {
    Tier.ADMIN: (
        Permission.READ,
        Permission.WRITE,
        Permission.COMMIT,
        Permission.PROMOTE,
        Permission.ADMIN,
    ),
    Tier.COMMIT: (Permission.READ, Permission.WRITE, Permission.COMMIT, Permission.PROMOTE),
    Tier.WRITE: (Permission.READ, Permission.WRITE),
    Tier.READ: (Permission.READ,),
}


@dataclass(frozen=True)
class PermissionSet:
    """Ordered, immutable permissions granted for a single tier.

    ``tier`` is ``None`` for the empty set, which signals an authenticated
    principal without any internal permission.
    """

    tier: Tier | None
    permissions: tuple[Permission, ...] = ()

    def __iter__(self) -> Iterator[Permission]:
        return iter(self.permissions)

    def __len__(self) -> int:
        return len(self.permissions)

    def __contains__(self, item: object) -> bool:
        return item in self.permissions

    def authorities(self, prefix: str = DEFAULT_AUTHORITY_PREFIX) -> list[str]:
        """Render the permissions as host authority strings, e.g. ``ROLE_READ``."""

        return [f"{prefix}{permission.value.upper()}" for permission in self.permissions]

    def as_dict(self) -> dict[str, object]:
        return {
            "tier": self.tier.value if self.tier else None,
            "permissions": [permission.value for permission in self.permissions],
        }


EMPTY_PERMISSIONS: Final[PermissionSet] = PermissionSet(None, ())

PERMISSION_SETS: Final[dict[Tier, PermissionSet]] = {
    tier: PermissionSet(tier, permissions) for tier, permissions in TIER_PERMISSIONS.items()
}


def permissions_for(tier: Tier | None) -> PermissionSet:
    """Return the fixed permission set of ``tier`` (empty for ``None``)."""

    if tier is None:
        return EMPTY_PERMISSIONS
    return PERMISSION_SETS[tier]
