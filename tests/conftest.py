"""Shared pytest fixtures and test helpers for zhfhir tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

DIVISIONS_CS_URL = "https://health.zarishsphere.com/fhir/CodeSystem/bd-divisions"
DIVISIONS_VS_URL = "https://health.zarishsphere.com/fhir/ValueSet/bd-divisions"

DIVISIONS_FSH = f"""\
// Administrative divisions
CodeSystem: BDDivisionsCS
Id: bd-divisions
Title: "Bangladesh Divisions"
Description: "Administrative divisions of Bangladesh"
* ^url = "{DIVISIONS_CS_URL}"
* ^status = #active
* ^date = "2024-05-01"
* #DH "Dhaka"
* #CH "Chattogram"
* #RJ "Rajshahi"
"""

DIVISIONS_VS_FSH = f"""\
ValueSet: BDDivisionsVS
Id: bd-divisions-vs
Title: "Bangladesh Divisions Value Set"
* ^url = "{DIVISIONS_VS_URL}"
* include codes from system BDDivisionsCS
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host ZHFHIR_* variables and logging handlers out of every test."""
    for name in list(os.environ):
        if name.startswith("ZHFHIR_"):
            monkeypatch.delenv(name)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    package_level = logging.getLogger("zhfhir").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("zhfhir").setLevel(package_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ig_root(tmp_path: Path) -> Path:
    """Implementation guide checkout with one code system and one value set."""
    root = tmp_path / "BD-Core-FHIR-IG"
    cs_dir = root / "input" / "fsh" / "codeSystems"
    vs_dir = root / "input" / "fsh" / "valueSets"
    cs_dir.mkdir(parents=True)
    vs_dir.mkdir(parents=True)
    (cs_dir / "BDDivisions.fsh").write_text(DIVISIONS_FSH, encoding="utf-8")
    (vs_dir / "BDDivisionsVS.fsh").write_text(DIVISIONS_VS_FSH, encoding="utf-8")
    return root


@pytest.fixture
def project_dir(tmp_path: Path, ig_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory holding a zhfhir.toml that points at ``ig_root``."""
    (tmp_path / "zhfhir.toml").write_text(f'[ig]\npath = "{ig_root.name}"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
