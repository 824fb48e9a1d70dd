"""pishield: Static pattern scanning and runtime tool-call shielding for agent extensions."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
