"""Tests for the terminology command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from zhfhir.cli import cli

CS_URL = "https://health.zarishsphere.com/fhir/CodeSystem/bd-divisions"


class TestExpand:
    def test_expand_code_system(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "terminology", "expand", CS_URL])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 3
        codes = [entry["code"] for entry in data["value_set"]["expansion"]["contains"]]
        assert codes == ["DH", "CH", "RJ"]

    def test_filter(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "terminology", "expand", CS_URL, "--filter", "RAJ"]
        )
        assert json.loads(result.stdout)["data"]["count"] == 1

    def test_case_sensitive_filter_from_config(
        self, cli_runner: CliRunner, project_dir: Path
    ) -> None:
        with (project_dir / "zhfhir.toml").open("a", encoding="utf-8") as fh:
            fh.write("[terminology]\ncase_sensitive_filter = true\n")
        result = cli_runner.invoke(
            cli, ["--json", "terminology", "expand", CS_URL, "--filter", "RAJ"]
        )
        assert json.loads(result.stdout)["data"]["count"] == 0

    def test_human_table(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["terminology", "expand", CS_URL])
        assert result.exit_code == 0
        assert "Chattogram" in result.stdout
        assert "  count: 3" in result.stdout.splitlines()

    def test_not_found(self, cli_runner: CliRunner, project_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["terminology", "expand", "http://example.org/none"])
        assert result.exit_code == 1
        assert "ERROR: expand - Terminology resource not found" in result.stderr

    def test_explicit_ig_path(self, cli_runner: CliRunner, ig_root: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "terminology", "expand", CS_URL, "--ig", str(ig_root)]
        )
        assert result.exit_code == 0
