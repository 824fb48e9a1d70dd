"""Shared fixtures for pishield tests."""

import pathlib

import pytest


@pytest.fixture
def extension_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary directory simulating an extension project."""
    ext_dir = tmp_path / "sample-extension"
    ext_dir.mkdir()
    return ext_dir


@pytest.fixture
def settings_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Location of a shield settings file (not created)."""
    return tmp_path / ".pi-security-shield.json"
