"""Environment-backed settings for rolemap."""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from rolemap.core.config import RoleConfiguration
from rolemap.core.permissions import DEFAULT_AUTHORITY_PREFIX
from rolemap.utils.env import parse_group_list

GroupList = Annotated[list[str], NoDecode]


class AppSettings(BaseSettings):
    """Directory group bindings sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ldap_roles_admin: GroupList = Field(default_factory=list)
    ldap_roles_commit: GroupList = Field(default_factory=list)
    ldap_roles_write: GroupList = Field(default_factory=list)
    ldap_roles_read: GroupList = Field(default_factory=list)
    # Deprecated: single admin group, superseded by ldap_roles_admin.
    ldap_admin_group: str | None = None

    authority_prefix: str = DEFAULT_AUTHORITY_PREFIX
    log_level: str = "INFO"

    @field_validator(
        "ldap_roles_admin",
        "ldap_roles_commit",
        "ldap_roles_write",
        "ldap_roles_read",
        mode="before",
    )
    @classmethod
    def _parse_groups(cls, value: Any, info: ValidationInfo) -> list[str]:
        return parse_group_list(value, (info.field_name or "group list").upper())

    @field_validator("ldap_admin_group", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def role_configuration(self) -> RoleConfiguration:
        return RoleConfiguration.from_settings(self)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of application settings."""

    return AppSettings()
