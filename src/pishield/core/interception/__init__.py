"""Runtime interception engine for live tool-invocation events.

The ``InterceptionEngine`` classifies shell commands and file writes/edits
against the dangerous-command and sensitive-file rule sets, asks the user
to confirm anything that matches, and returns a ``Verdict``.

Public API::

    from pishield.core.interception import InterceptionEngine, ToolEvent

    engine = InterceptionEngine(session, confirm=lambda request: False)
    verdict = engine.evaluate(ToolEvent.from_dict(payload))
"""

from pishield.core.interception.models import (
    BLOCKED_BY_COMMAND,
    BLOCKED_BY_SENSITIVE_PATH,
    ActionKind,
    ConfirmationRequest,
    ToolEvent,
    Verdict,
)
from pishield.core.interception.engine import Confirmer, InterceptionEngine

__all__ = [
    "BLOCKED_BY_COMMAND",
    "BLOCKED_BY_SENSITIVE_PATH",
    "ActionKind",
    "ConfirmationRequest",
    "Confirmer",
    "InterceptionEngine",
    "ToolEvent",
    "Verdict",
]
