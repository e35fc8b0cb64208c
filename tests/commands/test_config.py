"""Tests for the config command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from ksdate.cli import cli


def test_defaults(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "config"])
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.stdout)
    assert parsed["op"] == "show_config"
    assert parsed["data"]["config_path"] is None
    assert parsed["data"]["date"] == {"default_format": "Y年m月d日", "timezone": "UTC"}
    assert parsed["data"]["preview"] == {"secret": "", "nonce_ttl": 86400}


def test_masks_secret(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "ksdate.toml").write_text('[preview]\nsecret = "hunter2"\n', encoding="utf-8")
    result = cli_runner.invoke(cli, ["--json", "config"])
    assert "hunter2" not in result.stdout
    assert json.loads(result.stdout)["data"]["preview"]["secret"] == "********"


def test_human_output(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "ksdate.toml").write_text('[date]\ntimezone = "Asia/Tokyo"\n', encoding="utf-8")
    result = cli_runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    assert "[date]" in result.stdout
    assert "timezone = Asia/Tokyo" in result.stdout
    assert "ksdate.toml" in result.stdout


def test_timezone_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--timezone", "Europe/Paris", "config"])
    assert json.loads(result.stdout)["data"]["date"]["timezone"] == "Europe/Paris"
