"""Tests for the ig command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from zhfhir.cli import cli

CS_URL = "https://health.zarishsphere.com/fhir/CodeSystem/bd-divisions"
VS_URL = "https://health.zarishsphere.com/fhir/ValueSet/bd-divisions"


class TestIgLoad:
    def test_load_from_configured_path(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "ig", "load"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["code_systems"] == 1
        assert data["value_sets"] == 1
        assert data["urls"] == [CS_URL, VS_URL]

    def test_ig_option_overrides_config(
        self, cli_runner: CliRunner, project_dir: Path, tmp_path: Path
    ) -> None:
        empty = tmp_path / "empty-ig"
        empty.mkdir()
        result = cli_runner.invoke(cli, ["--json", "ig", "load", "--ig", str(empty)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["code_systems"] == 0

    def test_human_output(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["ig", "load"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "OK: load"
        assert "  code_systems: 1" in result.stdout.splitlines()

    def test_unreadable_file_exits_1(
        self, cli_runner: CliRunner, project_dir: Path, ig_root: Path
    ) -> None:
        (ig_root / "input" / "fsh" / "codeSystems" / "Bad.fsh").write_bytes(b"\xff\xfe")
        result = cli_runner.invoke(cli, ["ig", "load"])
        assert result.exit_code == 1
        assert "Bad.fsh" in result.stderr


class TestIgLoadLogging:
    def test_log_lines_name_the_command(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["-v", "--log-json", "ig", "load"])
        assert result.exit_code == 0, result.stderr

        lines = [json.loads(line) for line in result.stderr.splitlines() if line.startswith("{")]
        events = {line["event"]: line for line in lines}
        loaded = events["Loaded 1 CodeSystems and 1 ValueSets"]
        assert loaded["command"].endswith("ig load")
        assert loaded["logger"] == "zhfhir.commands._context"

    def test_quiet_by_default(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["ig", "load"])
        assert result.exit_code == 0
        assert result.stderr == ""
