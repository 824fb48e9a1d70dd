"""Static registry of extension search roots.

Each ``SearchRoot`` names a directory where the coding agent loads
extensions or skills from. ``default_search_roots()`` expands the registry
against a home directory, a working directory and the global npm package
root.

The global root is resolved with ``npm root -g``. If that command is
missing, times out or fails, a platform fallback is used instead; the
resolution never raises.
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Recognized source file suffixes.
SOURCE_SUFFIXES: tuple[str, ...] = (".ts", ".js")

# Directory names never descended into, at any depth.
EXCLUDED_DIR_NAMES: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    ".hg",
    ".svn",
    "dist",
    "build",
    "coverage",
    ".cache",
    ".next",
    ".turbo",
})

NPM_ROOT_TIMEOUT = 10.0
FALLBACK_GLOBAL_ROOT = Path("/usr/local/lib/node_modules")


@dataclass(frozen=True)
class SearchRoot:
    """A directory to search for extension sources.

    Attributes:
        name: Short label used in logs and reports.
        path: Absolute directory path. It may not exist.
    """

    name: str
    path: Path


def _fallback_global_root() -> Path:
    if platform.system().lower() == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "npm" / "node_modules"
    return FALLBACK_GLOBAL_ROOT


def resolve_global_root() -> Path:
    """Return the global npm package root.

    Runs ``npm root -g``; falls back to ``/usr/local/lib/node_modules``
    (``%APPDATA%/npm/node_modules`` on Windows) on any failure.
    """
    try:
        completed = subprocess.run(
            ["npm", "root", "-g"],
            capture_output=True,
            text=True,
            timeout=NPM_ROOT_TIMEOUT,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        fallback = _fallback_global_root()
        logger.debug("npm root -g failed (%s); using %s", exc, fallback)
        return fallback

    output = completed.stdout.strip()
    if not output:
        return _fallback_global_root()
    return Path(output)


def _scoped_dirs(global_root: Path) -> list[SearchRoot]:
    """List ``@scope`` directories directly under the global root."""
    try:
        entries = sorted(global_root.iterdir())
    except (PermissionError, OSError):
        return []
    roots: list[SearchRoot] = []
    for entry in entries:
        if not entry.name.startswith("@"):
            continue
        try:
            if entry.is_dir():
                roots.append(SearchRoot(name=f"global:{entry.name}", path=entry))
        except (PermissionError, OSError):
            continue
    return roots


def default_search_roots(
    home: Path | None = None,
    cwd: Path | None = None,
    global_root: Path | None = None,
) -> list[SearchRoot]:
    """Build the ordered list of search roots.

    Args:
        home: Override the home directory (for testing).
        cwd: Override the project directory (for testing).
        global_root: Override the global package root. When None it is
            resolved with ``resolve_global_root()``.

    Returns:
        User extensions, project extensions, user skills, the global root,
        then each scoped-package directory under the global root.
    """
    home_dir = home if home is not None else Path.home()
    project_dir = cwd if cwd is not None else Path.cwd()
    npm_root = global_root if global_root is not None else resolve_global_root()

    roots = [
        SearchRoot(name="user-extensions", path=home_dir / ".pi" / "agent" / "extensions"),
        SearchRoot(name="project-extensions", path=project_dir / ".pi" / "extensions"),
        SearchRoot(name="skills", path=home_dir / ".pi" / "agent" / "skills"),
        SearchRoot(name="global", path=npm_root),
    ]
    roots.extend(_scoped_dirs(npm_root))
    return roots
