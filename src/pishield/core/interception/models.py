"""Data models for runtime interception: events, confirmation requests, verdicts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pishield.core.analyzer.models import Category, PatternRule
from pishield.exceptions import EventError

BLOCKED_BY_COMMAND = "blocked by command pattern"
BLOCKED_BY_SENSITIVE_PATH = "blocked by sensitive-path pattern"


class ActionKind(str, Enum):
    """Discriminates tool-invocation events."""

    COMMAND = "command"
    WRITE = "write"
    EDIT = "edit"
    OTHER = "other"


# Host tool names mapped to action kinds. Unknown tools are OTHER.
_TOOL_KINDS: dict[str, ActionKind] = {
    "bash": ActionKind.COMMAND,
    "shell": ActionKind.COMMAND,
    "command": ActionKind.COMMAND,
    "write": ActionKind.WRITE,
    "edit": ActionKind.EDIT,
    "multiedit": ActionKind.EDIT,
}


@dataclass(frozen=True)
class ToolEvent:
    """A single tool invocation awaiting a verdict.

    Attributes:
        kind: Action type.
        tool: Tool name as reported by the host.
        command: Shell command string (COMMAND events).
        path: Target file path (WRITE/EDIT events).
    """

    kind: ActionKind
    tool: str = ""
    command: str = ""
    path: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ToolEvent:
        """Decode a host event payload.

        Accepts ``{"tool": ..., "args": {...}}`` as well as the
        ``tool_name`` / ``tool_input`` spelling. The path may be given as
        ``path`` or ``file_path``.

        Raises:
            EventError: If the payload is not an object or has no tool name.
        """
        if not isinstance(data, dict):
            raise EventError("Event must be a JSON object")
        tool = data.get("tool", data.get("tool_name"))
        if not isinstance(tool, str) or not tool:
            raise EventError("Event has no tool name")
        args = data.get("args", data.get("tool_input")) or {}
        if not isinstance(args, dict):
            raise EventError("Event arguments must be a JSON object")

        kind = _TOOL_KINDS.get(tool.lower(), ActionKind.OTHER)
        command = args.get("command") or ""
        path = args.get("path") or args.get("file_path") or ""
        return cls(kind=kind, tool=tool, command=str(command), path=str(path))


@dataclass(frozen=True)
class ConfirmationRequest:
    """What the user is asked before a matched event may proceed.

    Attributes:
        title: Short prompt title.
        category: Category of the rule set that matched.
        subject: The offending command or path.
        message: Full question shown to the user.
        reasons: Descriptions of every matched rule.
    """

    title: str
    category: Category
    subject: str
    message: str
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class Verdict:
    """Outcome for one evaluated event.

    Attributes:
        allow: Whether the caller may proceed with the action.
        reason: Fixed machine-readable reason when blocked.
        matched: Rules that matched the event (empty if none).
    """

    allow: bool
    reason: str | None = None
    matched: tuple[PatternRule, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"allow": self.allow, "reason": self.reason}
        if not self.allow:
            out["block"] = True
        if self.matched:
            out["rules"] = [rule.rule_id for rule in self.matched]
        return out


ALLOW = Verdict(allow=True)
