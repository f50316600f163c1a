"""Immutable group-to-tier bindings and the holder that swaps them on reload."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from threading import Lock
from typing import TYPE_CHECKING, Any

from .permissions import TIER_ORDER, Tier

if TYPE_CHECKING:
    from rolemap.settings import AppSettings

log = logging.getLogger("rolemap.config")


def _comparison_set(groups: Iterable[Any] | None) -> frozenset[str]:
    if groups is None or isinstance(groups, str):
        groups = [groups] if groups else []
    return frozenset(
        group.strip().lower() for group in groups if isinstance(group, str) and group.strip()
    )


@dataclass(frozen=True)
class RoleConfiguration:
    """Directory groups bound to each tier, lower-cased once at construction.

    ``legacy_admin_group`` is the deprecated single admin group setting; it
    still grants the admin tier so older deployments keep working.
    """

    admin_groups: frozenset[str] = field(default_factory=frozenset)
    commit_groups: frozenset[str] = field(default_factory=frozenset)
    write_groups: frozenset[str] = field(default_factory=frozenset)
    read_groups: frozenset[str] = field(default_factory=frozenset)
    legacy_admin_group: str | None = None

    def __post_init__(self) -> None:
        for name in ("admin_groups", "commit_groups", "write_groups", "read_groups"):
            object.__setattr__(self, name, _comparison_set(getattr(self, name)))
        legacy = self.legacy_admin_group
        if isinstance(legacy, str) and legacy.strip():
            object.__setattr__(self, "legacy_admin_group", legacy.strip().lower())
        else:
            object.__setattr__(self, "legacy_admin_group", None)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> RoleConfiguration:
        return cls(
            admin_groups=settings.ldap_roles_admin,
            commit_groups=settings.ldap_roles_commit,
            write_groups=settings.ldap_roles_write,
            read_groups=settings.ldap_roles_read,
            legacy_admin_group=settings.ldap_admin_group,
        )

    def groups_for(self, tier: Tier) -> frozenset[str]:
        """Return the comparison set of ``tier``, excluding the legacy admin group."""

        return {
            Tier.ADMIN: self.admin_groups,
            Tier.COMMIT: self.commit_groups,
            Tier.WRITE: self.write_groups,
            Tier.READ: self.read_groups,
        }[tier]

    @property
    def is_empty(self) -> bool:
        return self.legacy_admin_group is None and not any(
            self.groups_for(tier) for tier in TIER_ORDER
        )

    def overlaps(self) -> dict[str, list[Tier]]:
        """Group names bound to more than one tier.

        Legal, since the highest tier wins, but usually a configuration slip.
        """
        seen: dict[str, list[Tier]] = {}
        for tier in TIER_ORDER:
            groups = set(self.groups_for(tier))
            if tier is Tier.ADMIN and self.legacy_admin_group:
                groups.add(self.legacy_admin_group)
            for group in sorted(groups):
                seen.setdefault(group, []).append(tier)
        return {group: tiers for group, tiers in seen.items() if len(tiers) > 1}

    def as_dict(self) -> dict[str, Any]:
        return {
            "admin": sorted(self.admin_groups),
            "commit": sorted(self.commit_groups),
            "write": sorted(self.write_groups),
            "read": sorted(self.read_groups),
            "legacy_admin_group": self.legacy_admin_group,
        }


EMPTY_CONFIGURATION = RoleConfiguration()


class ConfigStore:
    """Holds the current configuration snapshot.

    Readers call :meth:`current` without locking; writers replace the whole
    snapshot under a lock, so a reader sees either the old or the new
    configuration, never a mix.
    """

    def __init__(self, initial: RoleConfiguration | None = None) -> None:
        self._lock = Lock()
        self._config = initial if initial is not None else EMPTY_CONFIGURATION

    def current(self) -> RoleConfiguration:
        return self._config

    def replace(self, config: RoleConfiguration) -> RoleConfiguration:
        """Install ``config`` and return the snapshot it replaced."""

        with self._lock:
            previous = self._config
            self._config = config
        log.info(
            "role configuration replaced admin=%d commit=%d write=%d read=%d",
            len(config.admin_groups),
            len(config.commit_groups),
            len(config.write_groups),
            len(config.read_groups),
        )
        if config.legacy_admin_group:
            log.warning(
                "LDAP_ADMIN_GROUP is deprecated; add %r to LDAP_ROLES_ADMIN instead",
                config.legacy_admin_group,
            )
        return previous

    def reload(self, settings: AppSettings | None = None) -> RoleConfiguration:
        """Rebuild the snapshot from settings and install it."""

        if settings is None:
            from rolemap.settings import get_settings

            get_settings.cache_clear()
            settings = get_settings()
        config = RoleConfiguration.from_settings(settings)
        self.replace(config)
        return config
