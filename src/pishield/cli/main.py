"""pishield CLI — Extension scanning and runtime tool-call shielding.

Entry point for the ``pishield`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan       — Discover and analyze installed extension sources.
    shield     — Show, toggle or set the runtime shield flag.
    intercept  — Evaluate one tool-invocation event and print a verdict.

Usage::

    pishield scan                               # Scan all default roots
    pishield scan --path ./my-extension         # Scan a specific directory
    pishield shield                             # Toggle the shield
    pishield shield status
    pishield intercept --event-file event.json  # Prompt before risky calls
    cat event.json | pishield intercept --no    # Non-interactive hook mode
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from pishield import __version__
from pishield.cli.intercept_cmd import intercept_command
from pishield.cli.scan import scan_command
from pishield.cli.shield_cmd import shield_command


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="PISHIELD_CONFIG",
    default=None,
    help="Shield settings file (default: ./.pi-security-shield.json).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """pishield: Security scanning and runtime shielding for agent extensions.

    Scan installed extensions for dangerous code and prompt-injection
    phrasing, and intercept risky shell commands and sensitive file writes
    before they run.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(shield_command)
cli.add_command(intercept_command)
