"""Shared test helpers for creating fake extension layouts.

Each helper creates a minimal but realistic directory structure under a
temporary home or project directory. These are used by
``test_extension_scanner.py`` and ``test_search_roots.py``.
"""

from __future__ import annotations

from pathlib import Path


def create_user_extensions(home: Path) -> Path:
    """Create ``~/.pi/agent/extensions`` with one TypeScript extension."""
    ext_dir = home / ".pi" / "agent" / "extensions"
    ext_dir.mkdir(parents=True, exist_ok=True)
    (ext_dir / "notes.ts").write_text("export function activate() {}\n")
    return ext_dir


def create_project_extensions(project: Path) -> Path:
    """Create ``<project>/.pi/extensions`` with a nested JS extension."""
    ext_dir = project / ".pi" / "extensions" / "lint"
    ext_dir.mkdir(parents=True, exist_ok=True)
    (ext_dir / "index.js").write_text("module.exports = {};\n")
    (ext_dir / "README.md").write_text("# Lint\n")
    return ext_dir


def create_skills(home: Path) -> Path:
    """Create ``~/.pi/agent/skills`` with one skill script."""
    skills = home / ".pi" / "agent" / "skills" / "deploy"
    skills.mkdir(parents=True, exist_ok=True)
    (skills / "run.ts").write_text("console.log('deploy');\n")
    return skills


def create_global_root(base: Path) -> Path:
    """Create a fake global npm root with a plain and a scoped package."""
    root = base / "global" / "node_modules"
    plain = root / "pi-helper"
    plain.mkdir(parents=True, exist_ok=True)
    (plain / "index.js").write_text("module.exports = 1;\n")
    (plain / "node_modules" / "dep").mkdir(parents=True)
    (plain / "node_modules" / "dep" / "index.js").write_text("eval(x)\n")
    scoped = root / "@acme" / "pi-ext"
    scoped.mkdir(parents=True, exist_ok=True)
    (scoped / "main.ts").write_text("export {};\n")
    return root
