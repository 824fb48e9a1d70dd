"""Persisted shield settings and the per-session shield flag.

Public API::

    from pishield.config import ShieldConfigStore, ShieldSession

    session = ShieldSession(ShieldConfigStore())
    session.load()
    session.set_enabled(False)
"""

from __future__ import annotations

from pishield.config.shield_config import (
    CONFIG_FILENAME,
    SHIELD_ENABLED_KEY,
    ShieldConfigStore,
    ShieldSession,
)

__all__ = [
    "CONFIG_FILENAME",
    "SHIELD_ENABLED_KEY",
    "ShieldConfigStore",
    "ShieldSession",
]
