"""rolemap command-line interface."""

from __future__ import annotations

import json
from typing import Any

import typer

from rolemap.core.config import RoleConfiguration
from rolemap.core.logging import log_event
from rolemap.core.permissions import TIER_ORDER
from rolemap.core.resolver import RoleResolver, normalize_membership
from rolemap.settings import get_settings
from rolemap.utils.logging_setup import setup_logging

from . import __version__

app = typer.Typer(name="rolemap", help="Inspect directory group to role bindings.")
config_app = typer.Typer(help="Inspect the loaded role configuration.")

app.add_typer(config_app, name="config")


def _load() -> tuple[RoleConfiguration, str]:
    settings = get_settings()
    setup_logging(settings.log_level)
    return settings.role_configuration(), settings.authority_prefix


@app.command()
def version() -> None:
    """Print the rolemap version."""

    typer.echo(__version__)


@app.command("resolve")
def resolve_cmd(
    groups: list[str] = typer.Argument(..., help="External group identifiers, e.g. ROLE_ops-admins."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text."),
) -> None:
    """Dry-run a resolution for the given groups."""

    config, prefix = _load()
    resolver = RoleResolver(config, prefix=prefix)
    result = resolver.resolve(groups)
    tier_text = result.tier.value if result.tier else "none"

    if as_json:
        payload: dict[str, Any] = result.as_dict()
        payload["groups"] = sorted(normalize_membership(groups, prefix))
        payload["authorities"] = result.authorities(prefix)
        typer.echo(json.dumps(payload, separators=(",", ":")))
    else:
        typer.echo(f"tier={tier_text}")
        typer.echo(f"permissions={','.join(p.value for p in result) or '-'}")
    log_event("cli.resolve", "resolution dry-run", groups=len(groups), tier=tier_text)


@config_app.command("show")
def config_show() -> None:
    """Print the group bindings per tier."""

    config, prefix = _load()
    payload = config.as_dict()
    payload["authority_prefix"] = prefix
    typer.echo(json.dumps(payload, indent=2))


@config_app.command("check")
def config_check() -> None:
    """Report unusable or suspicious bindings; exit 1 when nothing is bound."""

    config, _ = _load()
    notices: list[str] = []

    for tier in TIER_ORDER:
        if not config.groups_for(tier):
            notices.append(f"no groups bound to {tier.value}")
    if config.legacy_admin_group:
        notices.append("LDAP_ADMIN_GROUP is deprecated; move it to LDAP_ROLES_ADMIN")
    for group, tiers in sorted(config.overlaps().items()):
        listed = ",".join(tier.value for tier in tiers)
        notices.append(f"{group} bound to {listed}; {tiers[0].value} wins")

    ok = not config.is_empty
    typer.echo(json.dumps({"ok": ok, "notices": notices}, indent=2))
    log_event(
        "cli.config.check",
        "configuration checked",
        level="INFO" if ok else "ERROR",
        notices=len(notices),
    )
    if not ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
