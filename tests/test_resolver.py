from __future__ import annotations

import pytest

from rolemap.core.config import ConfigStore, RoleConfiguration
from rolemap.core.permissions import EMPTY_PERMISSIONS, PERMISSION_SETS, Permission, Tier
from rolemap.core.resolver import (
    RoleResolver,
    normalize_group,
    normalize_membership,
    resolve,
    resolve_tier,
)


@pytest.fixture()
def config() -> RoleConfiguration:
    return RoleConfiguration(
        admin_groups=frozenset({"ops-admins"}),
        commit_groups=frozenset(),
        write_groups=frozenset({"ops-writers"}),
        read_groups=frozenset({"ops-readers"}),
    )


def test_normalize_group_strips_prefix_and_lowercases() -> None:
    assert normalize_group("ROLE_Ops-Admins") == "ops-admins"
    assert normalize_group("role_ops-admins") == "ops-admins"
    assert normalize_group("Ops-Admins") == "ops-admins"
    assert normalize_group("ROLE_") is None
    assert normalize_group("") is None
    assert normalize_group(42) is None
    assert normalize_group("GRP-x", prefix="grp-") == "x"


def test_normalize_membership_drops_duplicates_and_junk() -> None:
    groups = normalize_membership(["ROLE_a", "role_A", "a", None, 7, "  "])
    assert groups == frozenset({"a"})
    assert normalize_membership("ROLE_single") == frozenset({"single"})
    assert normalize_membership(None) == frozenset()


def test_documented_examples(config: RoleConfiguration) -> None:
    assert resolve({"ROLE_ops-writers"}, config) == PERMISSION_SETS[Tier.WRITE]
    assert resolve({"ROLE_OPS-ADMINS"}, config) == PERMISSION_SETS[Tier.ADMIN]
    assert resolve({"ROLE_unknown"}, config) == EMPTY_PERMISSIONS


def test_admin_match_with_or_without_prefix(config: RoleConfiguration) -> None:
    for group in ("ops-admins", "OPS-ADMINS", "ROLE_Ops-Admins"):
        assert resolve_tier([group], config) is Tier.ADMIN


def test_commit_match_is_not_unioned_with_lower_tiers() -> None:
    config = RoleConfiguration(
        commit_groups=frozenset({"Committers"}),
        read_groups=frozenset({"readers"}),
    )
    result = resolve(["ROLE_committers", "ROLE_readers"], config)
    assert result.tier is Tier.COMMIT
    assert result.permissions == (
        Permission.READ,
        Permission.WRITE,
        Permission.COMMIT,
        Permission.PROMOTE,
    )


def test_highest_tier_wins(config: RoleConfiguration) -> None:
    result = resolve(["ROLE_ops-writers", "ROLE_ops-admins", "ROLE_ops-readers"], config)
    assert result is PERMISSION_SETS[Tier.ADMIN]


def test_legacy_admin_group_grants_admin() -> None:
    config = RoleConfiguration(legacy_admin_group="Legacy-Admins")
    assert resolve(["ROLE_LEGACY-ADMINS"], config).tier is Tier.ADMIN
    assert resolve(["legacy-admins"], config).tier is Tier.ADMIN
    assert resolve(["ROLE_other"], config) == EMPTY_PERMISSIONS


def test_legacy_admin_group_outranks_other_tiers() -> None:
    config = RoleConfiguration(
        read_groups=frozenset({"staff"}),
        legacy_admin_group="root",
    )
    assert resolve(["ROLE_staff", "ROLE_root"], config).tier is Tier.ADMIN


def test_empty_inputs_resolve_to_empty_set(config: RoleConfiguration) -> None:
    assert resolve([], config) == EMPTY_PERMISSIONS
    assert resolve(None, config) == EMPTY_PERMISSIONS
    assert resolve(["ROLE_ops-admins"], RoleConfiguration()) == EMPTY_PERMISSIONS
    assert resolve(["ROLE_ops-admins"], None) == EMPTY_PERMISSIONS
    assert not resolve([], config)


def test_odd_input_shapes_never_raise(config: RoleConfiguration) -> None:
    assert resolve([None, 3, b"ROLE_ops-admins", ""], config) == EMPTY_PERMISSIONS
    assert resolve(12345, config) == EMPTY_PERMISSIONS  # type: ignore[arg-type]
    assert resolve("ROLE_ops-readers", config).tier is Tier.READ


def test_resolution_is_idempotent(config: RoleConfiguration) -> None:
    membership = {"ROLE_ops-writers", "ROLE_ops-readers"}
    first = resolve(membership, config)
    second = resolve(membership, config)
    assert first == second
    assert membership == {"ROLE_ops-writers", "ROLE_ops-readers"}


def test_resolver_strategy_reads_current_snapshot(config: RoleConfiguration) -> None:
    store = ConfigStore(config)
    resolver = RoleResolver(store)
    assert resolver(["ROLE_ops-writers"]).tier is Tier.WRITE

    store.replace(RoleConfiguration(admin_groups=frozenset({"ops-writers"})))
    assert resolver(["ROLE_ops-writers"]).tier is Tier.ADMIN


def test_resolver_accepts_plain_config_and_callable(config: RoleConfiguration) -> None:
    assert RoleResolver(config).resolve(["ROLE_ops-readers"]).tier is Tier.READ
    assert RoleResolver(lambda: config).resolve(["ROLE_ops-readers"]).tier is Tier.READ


def test_resolver_authorities_use_prefix(config: RoleConfiguration) -> None:
    resolver = RoleResolver(config, prefix="GRP_")
    assert resolver.authorities(["grp_ops-writers"]) == ["GRP_READ", "GRP_WRITE"]
    assert resolver.authorities(["grp_nobody"]) == []
