from __future__ import annotations

from collections.abc import Iterator

import pytest

from rolemap.settings import get_settings

_ENV_KEYS = (
    "LDAP_ROLES_ADMIN",
    "LDAP_ROLES_COMMIT",
    "LDAP_ROLES_WRITE",
    "LDAP_ROLES_READ",
    "LDAP_ADMIN_GROUP",
    "AUTHORITY_PREFIX",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]
