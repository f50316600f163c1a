"""Resolve directory group memberships to the internal permission set.

The host authentication layer hands over the groups of an authenticated
principal, usually as authorities such as ``ROLE_ops-admins``. Each name is
stripped of the prefix, lower-cased and compared against the configured
groups, tier by tier from admin down to read. Only the first matching tier's
permissions are returned; nothing matching yields the empty set.

Resolution is a pure lookup and never raises.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Union

from .config import ConfigStore, RoleConfiguration
from .permissions import (
    DEFAULT_AUTHORITY_PREFIX,
    EMPTY_PERMISSIONS,
    TIER_ORDER,
    PermissionSet,
    Tier,
    permissions_for,
)

ConfigSource = Union[RoleConfiguration, ConfigStore, Callable[[], RoleConfiguration]]


def normalize_group(identifier: Any, prefix: str = DEFAULT_AUTHORITY_PREFIX) -> str | None:
    """Strip ``prefix`` when present and lower-case; ``None`` for unusable input."""

    if not isinstance(identifier, str):
        return None
    name = identifier.strip().lower()
    lowered_prefix = prefix.lower()
    if lowered_prefix and name.startswith(lowered_prefix):
        name = name[len(lowered_prefix) :]
    return name or None


def normalize_membership(
    membership: Iterable[Any] | str | None, prefix: str = DEFAULT_AUTHORITY_PREFIX
) -> frozenset[str]:
    if membership is None:
        return frozenset()
    if isinstance(membership, str):
        membership = (membership,)
    try:
        entries = list(membership)
    except TypeError:
        return frozenset()
    names = (normalize_group(entry, prefix) for entry in entries)
    return frozenset(name for name in names if name)


def _tier_matches(tier: Tier, groups: frozenset[str], config: RoleConfiguration) -> bool:
    if not groups.isdisjoint(config.groups_for(tier)):
        return True
    if tier is Tier.ADMIN and config.legacy_admin_group:
        return config.legacy_admin_group in groups
    return False


def resolve_tier(
    membership: Iterable[Any] | str | None,
    config: RoleConfiguration | None,
    prefix: str = DEFAULT_AUTHORITY_PREFIX,
) -> Tier | None:
    """Return the highest tier any membership entry is bound to."""

    if config is None:
        return None
    groups = normalize_membership(membership, prefix)
    if not groups:
        return None
    for tier in TIER_ORDER:
        if _tier_matches(tier, groups, config):
            return tier
    return None


def resolve(
    membership: Iterable[Any] | str | None,
    config: RoleConfiguration | None,
    prefix: str = DEFAULT_AUTHORITY_PREFIX,
) -> PermissionSet:
    """Return the permission set of the highest matching tier, or the empty set."""

    tier = resolve_tier(membership, config, prefix)
    if tier is None:
        return EMPTY_PERMISSIONS
    return permissions_for(tier)


class RoleResolver:
    """Strategy the host calls after a directory login succeeded.

    ``source`` is a fixed :class:`RoleConfiguration`, a :class:`ConfigStore`
    or any zero-argument callable returning the current configuration. The
    snapshot is read once per call.
    """

    def __init__(self, source: ConfigSource, prefix: str = DEFAULT_AUTHORITY_PREFIX) -> None:
        self._source = source
        self.prefix = prefix

    def configuration(self) -> RoleConfiguration:
        source = self._source
        if isinstance(source, RoleConfiguration):
            return source
        if isinstance(source, ConfigStore):
            return source.current()
        return source()

    def resolve(self, membership: Iterable[Any] | str | None) -> PermissionSet:
        return resolve(membership, self.configuration(), self.prefix)

    __call__ = resolve

    def authorities(self, membership: Iterable[Any] | str | None) -> list[str]:
        """Resolve and render the result as prefixed authority strings."""

        return self.resolve(membership).authorities(self.prefix)
