"""Tests for ``pishield shield``."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from pishield.cli.main import cli


def _invoke(runner: CliRunner, settings: Path, *args: str):
    return runner.invoke(cli, ["--config", str(settings), "shield", *args])


class TestShieldCommand:
    """Status, toggling and explicit on/off."""

    def test_status_defaults_to_enabled(self, runner: CliRunner, settings_path: Path) -> None:
        result = _invoke(runner, settings_path, "status")
        assert result.exit_code == 0
        assert "enabled" in result.output
        assert not settings_path.exists()

    def test_toggle_from_default(self, runner: CliRunner, settings_path: Path) -> None:
        result = _invoke(runner, settings_path)
        assert result.exit_code == 0
        assert "Security shield disabled." in result.output
        assert json.loads(settings_path.read_text()) == {"shieldEnabled": False}

    def test_toggle_twice(self, runner: CliRunner, settings_path: Path) -> None:
        _invoke(runner, settings_path, "toggle")
        result = _invoke(runner, settings_path, "toggle")
        assert "Security shield enabled." in result.output
        assert json.loads(settings_path.read_text()) == {"shieldEnabled": True}

    def test_off_then_status(self, runner: CliRunner, settings_path: Path) -> None:
        _invoke(runner, settings_path, "off")
        result = _invoke(runner, settings_path, "status")
        assert "disabled" in result.output

    def test_on_is_idempotent(self, runner: CliRunner, settings_path: Path) -> None:
        _invoke(runner, settings_path, "on")
        result = _invoke(runner, settings_path, "on")
        assert result.exit_code == 0
        assert "Security shield enabled." in result.output

    def test_corrupt_settings_treated_as_enabled(
        self, runner: CliRunner, settings_path: Path
    ) -> None:
        settings_path.write_text("not json")
        result = _invoke(runner, settings_path, "status")
        assert "enabled" in result.output

    def test_save_failure_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        settings = tmp_path / "missing" / "settings.json"
        result = _invoke(runner, settings, "off")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_config_from_environment(
        self, runner: CliRunner, settings_path: Path
    ) -> None:
        result = runner.invoke(
            cli, ["shield", "off"], env={"PISHIELD_CONFIG": str(settings_path)}
        )
        assert result.exit_code == 0
        assert json.loads(settings_path.read_text()) == {"shieldEnabled": False}

    def test_invalid_action(self, runner: CliRunner, settings_path: Path) -> None:
        result = _invoke(runner, settings_path, "maybe")
        assert result.exit_code == 2
