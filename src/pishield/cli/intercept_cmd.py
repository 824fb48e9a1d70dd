"""``pishield intercept [EVENT_JSON]`` — Evaluate one tool-invocation event.

Designed to be wired in as a pre-tool-use hook. The event is read from the
EVENT_JSON argument, from ``--event-file``, or from stdin. Matched events
are confirmed interactively unless ``--yes`` or ``--no`` is given. The
answer is read from stdin, so a hook that pipes the event on stdin must
pass the event as EVENT_JSON or ``--event-file`` to be asked, or answer up
front with ``--yes``/``--no``. When no answer can be read, the event is
blocked.

Output: the verdict as a single JSON line on stdout.

Exit Codes:
    0 — Event allowed.
    2 — Event blocked, or the event payload is malformed.
"""

from __future__ import annotations

import json
import logging
import sys

import click

from pishield.config import ShieldConfigStore, ShieldSession
from pishield.core.interception import (
    ConfirmationRequest,
    Confirmer,
    InterceptionEngine,
    ToolEvent,
)
from pishield.exceptions import EventError

logger = logging.getLogger(__name__)


def _interactive_confirm(request: ConfirmationRequest) -> bool:
    click.echo(f"[{request.title}]", err=True)
    for reason in request.reasons:
        click.echo(f"  - {reason}", err=True)
    try:
        return click.confirm(request.message, default=False, err=True)
    except click.Abort:
        # Close the prompt line before the verdict is printed.
        click.echo(err=True)
        raise


def _fixed_answer(answer: bool) -> Confirmer:
    def confirm(request: ConfirmationRequest) -> bool:
        logger.info("Auto-answering %s for: %s", "yes" if answer else "no", request.subject)
        return answer

    return confirm


@click.command("intercept")
@click.argument("event_json", required=False, default=None)
@click.option(
    "--event-file",
    type=click.File("r"),
    default=None,
    help="Read the event from a file ('-' for stdin).",
)
@click.option(
    "--yes/--no", "answer",
    default=None,
    help="Answer confirmation prompts without asking.",
)
@click.pass_context
def intercept_command(
    ctx: click.Context,
    event_json: str | None,
    event_file,
    answer: bool | None,
) -> None:
    """Evaluate a tool event against the runtime shield rules.

    Prompts read from stdin: when the event itself arrives on stdin, pass
    --yes or --no, otherwise every matched event is blocked.

    Exit code 0 if the event is allowed, 2 if it is blocked.
    """
    if event_json is None:
        stream = event_file if event_file is not None else click.get_text_stream("stdin")
        event_json = stream.read()

    try:
        event = ToolEvent.from_dict(json.loads(event_json))
    except (json.JSONDecodeError, EventError) as exc:
        click.echo(json.dumps({"allow": False, "block": True, "reason": f"invalid event: {exc}"}))
        sys.exit(2)

    session = ShieldSession(ShieldConfigStore((ctx.obj or {}).get("config_path")))
    session.load()
    if session.enabled:
        click.echo("Security shield activated.", err=True)
    logger.debug("Shield enabled=%s (%s)", session.enabled, session.store.path)

    confirm = _fixed_answer(answer) if answer is not None else _interactive_confirm
    verdict = InterceptionEngine(session, confirm).evaluate(event)

    click.echo(json.dumps(verdict.to_dict()))
    sys.exit(0 if verdict.allow else 2)
