# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end quality gate run: collect files, analyse, diff, evaluate."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .analyzers.registry import AnalyzerRegistry
from .compliance.baseline import BaselineComparison, BaselineDiffer
from .compliance.thresholds import evaluate, partition_by_change_class
from .config.models import GateConfig
from .core.errors import ConfigError
from .core.logging import GateLogger, build_logger
from .core.models import AnalysisResult, ClassifiedFileSet, Verdict, Violation
from .discovery.classifier import classify_changes, classify_repository
from .discovery.git import GitChangeSource, load_changes_file
from .filesystem.paths import PathNormalizationContext
from .orchestration.orchestrator import AnalysisOrchestrator


@dataclass(slots=True)
class ScanOutcome:
    """Everything produced by one gate run."""

    files: ClassifiedFileSet
    analysis: AnalysisResult
    violations: list[Violation]
    new_file_violations: list[Violation]
    modified_file_violations: list[Violation]
    verdict: Verdict
    baseline: BaselineComparison | None = field(default=None)


class QualityGate:
    """Drive a gate run for one repository.

    The gate owns no global state; the repository root, configuration and
    collaborators are supplied explicitly so tests can inject fakes.
    """

    def __init__(
        self,
        config: GateConfig,
        *,
        root: Path,
        logger: GateLogger | None = None,
        registry: AnalyzerRegistry | None = None,
        change_source: GitChangeSource | None = None,
        changes_file: Path | None = None,
    ) -> None:
        self._config = config
        self._root = root.resolve()
        self._logger = logger or build_logger()
        self._change_source = change_source or GitChangeSource()
        self._changes_file = changes_file
        self._orchestrator = AnalysisOrchestrator(
            registry=registry,
            logger=self._logger,
            path_context=PathNormalizationContext.for_root(
                self._root,
                workspace_prefixes=config.workspace_prefixes,
            ),
            root=self._root,
            timeout=config.timeout_seconds,
        )

    @property
    def config(self) -> GateConfig:
        return self._config

    def collect_files(self) -> ClassifiedFileSet:
        """Return the files selected for scanning.

        Raises:
            ConfigError: If changed-files mode has neither a change list nor a
                base ref to diff against.
        """

        source_path = self._config.source_path
        if self._changes_file is not None:
            changes = load_changes_file(self._resolve(self._changes_file))
            files = classify_changes(changes, source_path)
        elif self._config.scan_changed_files_only:
            if not self._config.base_ref:
                raise ConfigError("scanning changed files requires base_ref or a changes file")
            changes = self._change_source.changed_files(self._root, self._config.base_ref)
            files = classify_changes(changes, source_path)
        else:
            files = classify_repository(self._change_source.tracked_files(self._root), source_path)

        self._logger.info(
            f"Selected {len(files.filtered_files)} of {files.total_count} files "
            f"({len(files.new_files)} new, {len(files.modified_files)} modified)",
        )
        return files

    def analyze(self, files: ClassifiedFileSet) -> AnalysisResult:
        self._logger.section("Running Code Analysis")
        return self._orchestrator.analyze(
            self._config.file_types,
            files.filtered_files,
            self._config.enable_scan_cache,
        )

    def run(self) -> ScanOutcome:
        """Run the gate and return its outcome; a failing verdict is not an error."""

        files = self.collect_files()
        analysis = self.analyze(files)

        violations = analysis.violations
        comparison: BaselineComparison | None = None
        baseline_path = self._config.previous_violations_file
        if baseline_path is not None:
            resolved = self._resolve(baseline_path)
            self._logger.subsection(f"Comparing with baseline from {resolved}")
            comparison = BaselineDiffer(logger=self._logger).compare(violations, resolved)
            violations = comparison.violations
            self._logger.ok(f"Found {len(violations)} new or changed violations")

        new_file_violations, modified_file_violations = partition_by_change_class(violations, files)
        verdict = evaluate(violations, new_file_violations, modified_file_violations, self._config.thresholds)
        self._log_verdict(verdict)
        return ScanOutcome(
            files=files,
            analysis=analysis,
            violations=violations,
            new_file_violations=new_file_violations,
            modified_file_violations=modified_file_violations,
            verdict=verdict,
            baseline=comparison,
        )

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self._root / path

    def _log_verdict(self, verdict: Verdict) -> None:
        self._logger.section("Results Summary")
        self._logger.info(f"Total violations: {verdict.total_violations}")
        self._logger.info(f"Critical/high violations: {verdict.critical_count}")
        self._logger.info(f"Medium violations: {verdict.medium_count}")
        self._logger.info(f"Low/info violations: {verdict.low_count}")
        self._logger.info(f"New file violations: {verdict.new_file_violation_count}")
        self._logger.info(f"New file critical/high violations: {verdict.new_file_critical_count}")
        self._logger.info(f"Modified file violations: {verdict.modified_file_violation_count}")
        self._logger.info(f"Modified file critical/high violations: {verdict.modified_file_critical_count}")
        if verdict.should_fail:
            for reason in verdict.failure_reasons:
                self._logger.fail(reason)
        elif verdict.total_violations:
            self._logger.warn(f"Found {verdict.total_violations} code quality violations.")
        else:
            self._logger.ok("No violations found. Great job!")


__all__ = ["QualityGate", "ScanOutcome"]
