"""``pishield shield [on|off|status|toggle]`` — Manage the runtime shield flag.

The flag is stored in the per-project settings file. ``toggle`` (the
default action) flips the persisted value.

Exit Codes:
    0 — Flag shown or persisted.
    1 — The settings file could not be written.
"""

from __future__ import annotations

import sys

import click

from pishield.config import ShieldConfigStore, ShieldSession
from pishield.exceptions import ShieldConfigError


def _state_label(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"


@click.command("shield")
@click.argument(
    "action",
    type=click.Choice(["on", "off", "status", "toggle"]),
    required=False,
    default="toggle",
)
@click.pass_context
def shield_command(ctx: click.Context, action: str) -> None:
    """Show or change whether runtime interception is active.

    ACTION is one of on, off, status or toggle (default).
    """
    store = ShieldConfigStore((ctx.obj or {}).get("config_path"))
    session = ShieldSession(store)
    enabled = session.load()

    if action == "status":
        click.echo(f"Security shield is {_state_label(enabled)} ({store.path}).")
        return

    try:
        if action == "toggle":
            enabled = session.toggle()
        else:
            enabled = action == "on"
            session.set_enabled(enabled)
    except ShieldConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Security shield {_state_label(enabled)}.")
