"""Runtime interception of tool-invocation events.

Each event goes through the same steps:

1. **Disabled check** -- a disabled shield allows everything.
2. **Classification** -- commands are tested against the dangerous-command
   rules, write/edit targets against the sensitive-file rules. Other actions
   are allowed.
3. **Escalation** -- any match asks the user through the confirmer. This
   is the only point where the engine blocks.
4. **Verdict** -- confirmed events are allowed unmodified, declined events
   get a block verdict with a fixed reason.

Events are evaluated independently; the engine keeps no memory between them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pishield.config import ShieldSession
from pishield.core.analyzer.models import Category, PatternRule
from pishield.core.analyzer.patterns import RuleCatalog, default_catalog
from pishield.core.interception.models import (
    ALLOW,
    BLOCKED_BY_COMMAND,
    BLOCKED_BY_SENSITIVE_PATH,
    ActionKind,
    ConfirmationRequest,
    ToolEvent,
    Verdict,
)

logger = logging.getLogger(__name__)

Confirmer = Callable[[ConfirmationRequest], bool]


class InterceptionEngine:
    """Evaluates tool events and returns allow/block verdicts.

    Args:
        session: Holds the shield-enabled flag for this session.
        confirm: Blocking callable that asks the user a yes/no question.
            Any exception it raises (EOF, abort, timeout, session teardown)
            is treated as a decline.
        catalog: Rule catalog. Defaults to the built-in catalog.

    Usage::

        engine = InterceptionEngine(session, confirm=ask_user)
        verdict = engine.evaluate(ToolEvent(ActionKind.COMMAND, command="git push"))
        if not verdict.allow:
            abort(verdict.reason)
    """

    def __init__(
        self,
        session: ShieldSession,
        confirm: Confirmer,
        catalog: RuleCatalog | None = None,
    ) -> None:
        self.session = session
        self._confirm = confirm
        self.catalog = catalog if catalog is not None else default_catalog()

    def evaluate(self, event: ToolEvent) -> Verdict:
        """Return the verdict for a single event."""
        if not self.session.enabled:
            return ALLOW

        if event.kind is ActionKind.COMMAND:
            subject = event.command
            category = Category.DANGEROUS_COMMAND
        elif event.kind in (ActionKind.WRITE, ActionKind.EDIT):
            subject = event.path.replace("\\", "/")
            category = Category.SENSITIVE_FILE
        else:
            return ALLOW

        matched = self.match(category, subject)
        if not matched:
            return ALLOW

        request = self._build_request(event, category, matched)
        logger.info("Escalating %s event: %s", event.tool or event.kind.value, request.subject)
        if self._ask(request):
            logger.info("User allowed: %s", request.subject)
            return Verdict(allow=True, matched=matched)

        reason = (
            BLOCKED_BY_COMMAND if category is Category.DANGEROUS_COMMAND
            else BLOCKED_BY_SENSITIVE_PATH
        )
        logger.info("User blocked: %s", request.subject)
        return Verdict(allow=False, reason=reason, matched=matched)

    def match(self, category: Category, subject: str) -> tuple[PatternRule, ...]:
        """Return every rule of ``category`` that matches ``subject``."""
        if not subject:
            return ()
        return tuple(
            rule for rule in self.catalog.for_category(category) if rule.matches(subject)
        )

    def _ask(self, request: ConfirmationRequest) -> bool:
        try:
            return bool(self._confirm(request))
        except Exception:
            logger.warning(
                "Confirmation failed for %s; treating as declined",
                request.subject, exc_info=True,
            )
            return False

    @staticmethod
    def _build_request(
        event: ToolEvent,
        category: Category,
        matched: tuple[PatternRule, ...],
    ) -> ConfirmationRequest:
        reasons = tuple(rule.description for rule in matched)
        if category is Category.DANGEROUS_COMMAND:
            return ConfirmationRequest(
                title="Suspicious command",
                category=category,
                subject=event.command,
                message=(
                    f'Suspicious bash command detected: "{event.command}". '
                    "Allow execution?"
                ),
                reasons=reasons,
            )
        return ConfirmationRequest(
            title="Sensitive file",
            category=category,
            subject=event.path,
            message=f'Attempting to modify sensitive file: "{event.path}". Allow?',
            reasons=reasons,
        )
