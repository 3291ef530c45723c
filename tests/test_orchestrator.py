# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for analyzer orchestration."""

from __future__ import annotations

from pathlib import Path

from conftest import FakeAdapter, RecordingLogger

from qualitygate.analyzers.base import AnalyzerKind
from qualitygate.config.models import FileTypeConfig
from qualitygate.core.errors import AnalyzerInvocationError
from qualitygate.core.severity import Severity
from qualitygate.orchestration import (
    STATUS_FAILED,
    STATUS_SCANNED,
    STATUS_SKIPPED,
    STATUS_UNSUPPORTED,
    AnalysisOrchestrator,
)

JS_TYPE = FileTypeConfig(name="JavaScript", analyzer="eslint", source_path="src/", file_extensions=(".js",))
APEX_TYPE = FileTypeConfig(name="Apex", analyzer="pmd", source_path="classes/", file_extensions=(".cls",))


def test_analyze_concatenates_violations_in_file_type_order(
    tmp_path: Path,
    make_violation,
    recording_logger: RecordingLogger,
    fake_registry,
) -> None:
    eslint = FakeAdapter(
        AnalyzerKind.ESLINT,
        {"src/a.js": [make_violation(file="src/a.js", severity=Severity.HIGH)]},
    )
    pmd = FakeAdapter(
        AnalyzerKind.PMD,
        {"classes/A.cls": [make_violation(file="classes/A.cls", rule="ApexDoc", severity=Severity.LOW)]},
    )
    orchestrator = AnalysisOrchestrator(
        registry=fake_registry(eslint, pmd),
        logger=recording_logger,
        root=tmp_path,
        timeout=12.0,
    )

    result = orchestrator.analyze([APEX_TYPE, JS_TYPE], ["src/a.js", "classes/A.cls", "README.md"], cache_enabled=True)

    assert [violation.file for violation in result.violations] == ["classes/A.cls", "src/a.js"]
    assert [summary.status for summary in result.summaries] == [STATUS_SCANNED, STATUS_SCANNED]
    assert result.severity_counts[Severity.HIGH] == 1
    assert result.severity_counts[Severity.LOW] == 1
    (request,) = eslint.requests
    assert request.files == ("src/a.js",)
    assert request.cache_enabled is True
    assert request.timeout == 12.0
    assert request.root == tmp_path.resolve()
    assert eslint.contexts[0].source_path == "src/"
    assert pmd.contexts[0].source_path == "classes/"
    assert "Analyzing JavaScript files with eslint" in recording_logger.messages("subsection")
    assert "High: 1" in recording_logger.messages("warn")
    assert "Low: 1" in recording_logger.messages("info")
    assert "File: src/a.js" in recording_logger.messages("echo")


def test_file_type_without_files_is_skipped(
    tmp_path: Path,
    recording_logger: RecordingLogger,
    fake_registry,
) -> None:
    eslint = FakeAdapter(AnalyzerKind.ESLINT)
    orchestrator = AnalysisOrchestrator(registry=fake_registry(eslint), logger=recording_logger, root=tmp_path)

    result = orchestrator.analyze([JS_TYPE], ["docs/readme.md"])

    assert result.violations == []
    assert result.summaries[0].status == STATUS_SKIPPED
    assert eslint.requests == []
    assert "No JavaScript files to scan" in recording_logger.messages("ok")
    assert "No violations found across all file types" in recording_logger.messages("ok")


def test_unsupported_analyzer_yields_warning_not_exception(
    tmp_path: Path,
    make_violation,
    recording_logger: RecordingLogger,
    fake_registry,
) -> None:
    sonar_type = FileTypeConfig(name="Kotlin", analyzer="detekt", source_path="src/", file_extensions=(".kt",))
    eslint = FakeAdapter(AnalyzerKind.ESLINT, {"src/a.js": [make_violation()]})
    orchestrator = AnalysisOrchestrator(registry=fake_registry(eslint), logger=recording_logger, root=tmp_path)

    result = orchestrator.analyze([sonar_type, JS_TYPE], ["src/a.kt", "src/a.js"])

    assert [summary.status for summary in result.summaries] == [STATUS_UNSUPPORTED, STATUS_SCANNED]
    assert len(result.violations) == 1
    assert any("detekt" in message for message in recording_logger.messages("warn"))


def test_failing_analyzer_is_isolated_to_its_file_type(
    tmp_path: Path,
    make_violation,
    recording_logger: RecordingLogger,
    fake_registry,
) -> None:
    failing = FakeAdapter(
        AnalyzerKind.PMD,
        error=AnalyzerInvocationError("pmd timed out", analyzer="pmd", file_type="Apex"),
    )
    eslint = FakeAdapter(AnalyzerKind.ESLINT, {"src/a.js": [make_violation()]})
    orchestrator = AnalysisOrchestrator(registry=fake_registry(failing, eslint), logger=recording_logger, root=tmp_path)

    result = orchestrator.analyze([APEX_TYPE, JS_TYPE], ["classes/A.cls", "src/a.js"])

    assert [summary.status for summary in result.summaries] == [STATUS_FAILED, STATUS_SCANNED]
    assert result.summaries[0].files_scanned == 1
    assert len(result.violations) == 1
    assert "Error running pmd on Apex files: pmd timed out" in recording_logger.messages("warn")


def test_unexpected_errors_are_absorbed_too(tmp_path: Path, recording_logger: RecordingLogger, fake_registry) -> None:
    broken = FakeAdapter(AnalyzerKind.ESLINT, error=KeyError("filePath"))
    orchestrator = AnalysisOrchestrator(registry=fake_registry(broken), logger=recording_logger, root=tmp_path)

    assert orchestrator.run([JS_TYPE], ["src/a.js"]) == []
    assert any(message.startswith("Error running eslint on JavaScript files") for message in recording_logger.messages("warn"))
