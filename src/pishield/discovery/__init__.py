"""Discovery of agent extension source files.

Public API::

    from pishield.discovery import ExtensionDiscovery, default_search_roots

    files = ExtensionDiscovery(default_search_roots()).discover()
"""

from __future__ import annotations

from pishield.discovery.search_roots import (
    EXCLUDED_DIR_NAMES,
    SOURCE_SUFFIXES,
    SearchRoot,
    default_search_roots,
    resolve_global_root,
)
from pishield.discovery.extension_scanner import ExtensionDiscovery

__all__ = [
    "EXCLUDED_DIR_NAMES",
    "ExtensionDiscovery",
    "SOURCE_SUFFIXES",
    "SearchRoot",
    "default_search_roots",
    "resolve_global_root",
]
