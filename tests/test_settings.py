"""Tests for the settings loader."""
from __future__ import annotations

from pathlib import Path
from shutil import copyfile

import pytest

from rolemap.settings import AppSettings, get_settings


def test_env_example_loads(tmp_path, monkeypatch) -> None:
    project_root = Path(__file__).resolve().parent.parent
    copyfile(project_root / ".env.example", tmp_path / ".env")
    monkeypatch.chdir(tmp_path)

    settings = AppSettings()

    assert settings.ldap_roles_admin == ["ops-admins"]
    assert settings.ldap_roles_write == ["ops-writers"]
    assert settings.ldap_roles_commit == []
    assert settings.ldap_admin_group is None
    assert settings.authority_prefix == "ROLE_"


def test_environment_lists(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LDAP_ROLES_ADMIN", '["Admins","Root"]')
    monkeypatch.setenv("LDAP_ROLES_READ", "Readers,Guests")
    monkeypatch.setenv("LDAP_ROLES_WRITE", "[not json")
    monkeypatch.setenv("LDAP_ADMIN_GROUP", "")

    settings = get_settings()

    assert settings.ldap_roles_admin == ["Admins", "Root"]
    assert settings.ldap_roles_read == ["Readers", "Guests"]
    assert settings.ldap_roles_write == []
    assert settings.ldap_admin_group is None
    assert get_settings() is settings


def test_role_configuration(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LDAP_ADMIN_GROUP", "Legacy")

    config = AppSettings().role_configuration()

    assert config.legacy_admin_group == "legacy"
    assert config.admin_groups == frozenset()
