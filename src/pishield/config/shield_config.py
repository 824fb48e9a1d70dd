"""Shield settings persistence.

The settings file is a small JSON object at a fixed per-project location
(``<cwd>/.pi-security-shield.json``). Only ``shieldEnabled`` is interpreted;
other keys are ignored on read and preserved on write.

Read and write fail differently:

- ``load()`` never raises. A missing file, invalid JSON, a non-object
  document or a non-boolean value all resolve to ``True`` (shield on).
- ``save()`` raises ``ShieldConfigError`` when the file cannot be written,
  so the toggle command can report that disk and memory disagree.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from pishield.exceptions import ShieldConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".pi-security-shield.json"
SHIELD_ENABLED_KEY = "shieldEnabled"


class ShieldConfigStore:
    """Loads and saves the shield-enabled flag.

    Args:
        path: Settings file location. Defaults to ``CONFIG_FILENAME`` in the
            current working directory, resolved at construction.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else Path.cwd() / CONFIG_FILENAME

    def _read(self) -> dict[str, Any] | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Cannot read shield settings %s: %s", self.path, exc)
            return None
        except UnicodeDecodeError as exc:
            logger.warning("Shield settings %s is not valid UTF-8: %s", self.path, exc)
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt shield settings %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Shield settings %s is not a JSON object", self.path)
            return None
        return data

    def load(self) -> bool:
        """Return the persisted flag, defaulting to ``True``.

        Only an explicit JSON ``false`` disables the shield.
        """
        data = self._read()
        if data is None:
            return True
        return data.get(SHIELD_ENABLED_KEY) is not False

    def save(self, enabled: bool) -> None:
        """Persist ``enabled``, keeping any other keys already in the file.

        Raises:
            ShieldConfigError: If the file cannot be written.
        """
        data = self._read() or {}
        data[SHIELD_ENABLED_KEY] = bool(enabled)
        try:
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ShieldConfigError(
                f"Cannot write shield settings {self.path}: {exc}"
            ) from exc
        logger.debug("Saved %s=%s to %s", SHIELD_ENABLED_KEY, enabled, self.path)


class ShieldSession:
    """Holds the shield flag for one agent session.

    The flag is loaded explicitly at session start and changed explicitly by
    the toggle operation. Access is serialized with a lock; no cross-process
    locking is done since persistence is a plain overwrite.

    Usage::

        session = ShieldSession(ShieldConfigStore())
        session.load()
        if session.enabled:
            ...
    """

    def __init__(self, store: ShieldConfigStore, enabled: bool = True) -> None:
        self.store = store
        self._enabled = enabled
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def load(self) -> bool:
        """Refresh the in-memory flag from disk and return it."""
        with self._lock:
            self._enabled = self.store.load()
            return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Persist ``enabled`` and then update the in-memory flag.

        Raises:
            ShieldConfigError: If persisting fails. The in-memory flag is
                left unchanged in that case.
        """
        with self._lock:
            self.store.save(enabled)
            self._enabled = enabled

    def toggle(self) -> bool:
        """Flip the flag, persist it, and return the new value."""
        with self._lock:
            new_value = not self._enabled
            self.store.save(new_value)
            self._enabled = new_value
            return new_value
