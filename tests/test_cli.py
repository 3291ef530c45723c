# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Command line tests driven through Typer's CliRunner."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import FakeAdapter

from qualitygate.analyzers.base import AnalyzerKind
from qualitygate.analyzers.registry import AnalyzerRegistry
from qualitygate.cli import app
from qualitygate.core.models import Violation
from qualitygate.core.severity import Severity
from qualitygate.discovery import GitChangeSource
from qualitygate.pipeline import QualityGate

runner = CliRunner()

PROJECT_CONFIG = """\
source_path = "src/"

[thresholds]
strict_new_files = true

[[file_types]]
name = "JavaScript"
analyzer = "eslint"
source_path = "src/"
file_extensions = [".js"]
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / ".qualitygate.toml").write_text(PROJECT_CONFIG, encoding="utf-8")
    changes = [
        {"filename": "src/new.js", "status": "added"},
        {"filename": "src/old.js", "status": "modified"},
    ]
    (tmp_path / "changes.json").write_text(json.dumps(changes), encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_gate(monkeypatch: pytest.MonkeyPatch, make_violation) -> list[Violation]:
    """Route the CLI through a fake ESLint adapter and a git runner that never spawns."""

    violations = [make_violation(file="src/new.js", line=3, severity=Severity.LOW)]
    registry = AnalyzerRegistry()
    registry.register(FakeAdapter(AnalyzerKind.ESLINT, {"src/new.js": violations}))

    def _build(options, config, logger) -> QualityGate:
        return QualityGate(
            config,
            root=options.root,
            logger=logger,
            registry=registry,
            change_source=GitChangeSource(runner=lambda cmd, root: ["src/new.js", "src/old.js"]),
            changes_file=options.changes_file,
        )

    monkeypatch.setattr(importlib.import_module("qualitygate.cli.app"), "_build_gate", _build)
    return violations


def test_config_command_prints_resolved_configuration(project: Path) -> None:
    result = runner.invoke(app, ["config", "--root", str(project), "--source-path", "lib/"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["source_path"] == "lib/"
    assert payload["thresholds"]["strict_new_files"] is True
    assert payload["file_types"][0]["analyzer"] == "eslint"


def test_invalid_configuration_exits_with_usage_code(tmp_path: Path) -> None:
    (tmp_path / ".qualitygate.toml").write_text("source_path = [oops\n", encoding="utf-8")

    result = runner.invoke(app, ["config", "--root", str(tmp_path)])

    assert result.exit_code == 2


def test_scan_fails_writes_reports_and_outputs(project: Path, fake_gate: list[Violation]) -> None:
    github_output = project / "github_output"

    result = runner.invoke(
        app,
        [
            "scan",
            "--root",
            str(project),
            "--changes-file",
            str(project / "changes.json"),
            "--fail",
            "--format",
            "json",
            "--format",
            "sarif",
            "--format",
            "html",
            "--format",
            "github",
            "--github-output",
            str(github_output),
            "--no-emoji",
        ],
    )

    assert result.exit_code == 1, result.output
    reports = project / "code-quality-reports"
    assert json.loads((reports / "violations.json").read_text(encoding="utf-8"))[0]["line"] == 3
    assert (reports / "violations.sarif").is_file()
    assert (reports / "violations.html").is_file()
    assert not (reports / "violations.txt").exists()
    outputs = github_output.read_text(encoding="utf-8").splitlines()
    assert "new-file-violations=1" in outputs
    assert "action-required=true" in outputs
    assert f"html-report-path={project.resolve() / 'code-quality-reports' / 'violations.html'}" in outputs
    assert any(line.startswith("violations=[") for line in outputs)
    assert "Quality gate failed" in result.output


def test_scan_without_fail_flag_exits_zero(project: Path, fake_gate: list[Violation]) -> None:
    result = runner.invoke(
        app,
        ["scan", "--root", str(project), "--changes-file", str(project / "changes.json"), "--no-fail"],
    )

    assert result.exit_code == 0, result.output
    assert (project / "code-quality-reports" / "violations.txt").is_file()


def test_scan_changed_only_without_base_ref_is_a_config_error(project: Path, fake_gate: list[Violation]) -> None:
    result = runner.invoke(app, ["scan", "--root", str(project), "--changed-only"])

    assert result.exit_code == 2


def test_baseline_command_records_current_violations(project: Path, fake_gate: list[Violation]) -> None:
    target = project / "baseline.json"

    result = runner.invoke(app, ["baseline", str(target), "--root", str(project), "--all-files"])

    assert result.exit_code == 0, result.output
    stored = json.loads(target.read_text(encoding="utf-8"))
    assert [(entry["file"], entry["line"], entry["rule"]) for entry in stored] == [("src/new.js", 3, "no-console")]
