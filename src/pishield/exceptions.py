"""pishield exception hierarchy.

All public exceptions inherit from PiShieldError, giving callers a single
base class to catch when they want to handle any pishield-specific failure
without swallowing unrelated errors.
"""


class PiShieldError(Exception):
    """Base exception for all pishield errors."""


class ShieldConfigError(PiShieldError):
    """Raised when the shield settings file cannot be written.

    Reads never raise: a missing or corrupt settings file resolves to the
    enabled default. A failed write leaves the in-memory flag out of sync
    with disk, so it is surfaced to the caller.
    """


class RuleCatalogError(PiShieldError):
    """Raised when a user-supplied rule file is malformed.

    Covers unreadable files, invalid YAML, unknown severities or
    categories, and regular expressions that fail to compile.
    """


class EventError(PiShieldError):
    """Raised when a tool-invocation event payload cannot be decoded."""
