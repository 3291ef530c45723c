# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run the configured analyzers over the selected files."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..analyzers.base import AnalyzerAdapter, AnalyzerRequest, UnsupportedAnalyzer
from ..analyzers.registry import AnalyzerRegistry, default_registry
from ..config.models import FileTypeConfig
from ..core.logging import GateLogger, build_logger
from ..core.models import AnalysisResult, FileTypeSummary, Violation
from ..core.severity import BLOCKING_SEVERITIES, SEVERITY_ORDER, count_by_severity
from ..discovery.classifier import filter_by_file_type
from ..filesystem.paths import PathNormalizationContext
from ..reporting.console import violation_lines

STATUS_SCANNED: Final[str] = "scanned"
STATUS_SKIPPED: Final[str] = "skipped"
STATUS_UNSUPPORTED: Final[str] = "unsupported"
STATUS_FAILED: Final[str] = "failed"


class AnalysisOrchestrator:
    """Dispatch each file type to its analyzer and collect the violations.

    Failures are isolated per file type: an unknown analyzer or an error
    raised while invoking or normalising produces a warning and no
    violations for that type, and the remaining types still run.
    """

    def __init__(
        self,
        *,
        registry: AnalyzerRegistry | None = None,
        logger: GateLogger | None = None,
        path_context: PathNormalizationContext | None = None,
        root: Path | None = None,
        timeout: float | None = None,
    ) -> None:
        """Create an orchestrator.

        Args:
            registry: Analyzer registry; defaults to ESLint and PMD adapters.
            logger: Console logger receiving progress messages.
            path_context: Base path normalisation context; each file type's
                source path is layered on top.
            root: Directory analyzers are launched from.
            timeout: Per-invocation timeout in seconds, ``None`` for no limit.
        """

        self._registry = registry if registry is not None else default_registry()
        self._logger = logger or build_logger()
        self._root = (root or Path.cwd()).resolve()
        self._path_context = path_context or PathNormalizationContext.for_root(self._root)
        self._timeout = timeout

    def run(
        self,
        file_types: Sequence[FileTypeConfig],
        all_files: Sequence[str],
        cache_enabled: bool = False,
    ) -> list[Violation]:
        """Return every violation found across ``file_types`` in configuration order."""

        return self.analyze(file_types, all_files, cache_enabled).violations

    def analyze(
        self,
        file_types: Sequence[FileTypeConfig],
        all_files: Sequence[str],
        cache_enabled: bool = False,
    ) -> AnalysisResult:
        """Analyse ``all_files`` with every configured file type.

        Args:
            file_types: File types processed in order.
            all_files: Candidate files, typically the classified file set.
            cache_enabled: Whether analyzers should use their caches.

        Returns:
            AnalysisResult: Concatenated violations, per-type summaries and
            severity counts.
        """

        result = AnalysisResult()
        self._logger.info(f"Starting analysis of {len(file_types)} file types")
        for file_type in file_types:
            summary, violations = self._analyze_file_type(file_type, all_files, cache_enabled)
            result.summaries.append(summary)
            result.violations.extend(violations)

        result.severity_counts = count_by_severity(result.violations)
        self._log_severity_summary(result)
        return result

    def _analyze_file_type(
        self,
        file_type: FileTypeConfig,
        all_files: Sequence[str],
        cache_enabled: bool,
    ) -> tuple[FileTypeSummary, list[Violation]]:
        name = file_type.name
        self._logger.subsection(f"Analyzing {name} files with {file_type.analyzer}")
        files = filter_by_file_type(file_type, all_files)
        if not files:
            self._logger.ok(f"No {name} files to scan")
            return FileTypeSummary(name=name, analyzer=file_type.analyzer, status=STATUS_SKIPPED), []

        adapter = self._registry.resolve(file_type.analyzer)
        if isinstance(adapter, UnsupportedAnalyzer):
            self._logger.warn(f"{adapter.message} for {name} files")
            summary = FileTypeSummary(
                name=name,
                analyzer=file_type.analyzer,
                status=STATUS_UNSUPPORTED,
                message=adapter.message,
            )
            return summary, []

        self._logger.info(f"Running {file_type.analyzer} on {len(files)} {name} files")
        self._log_rules(file_type)
        try:
            violations = self._invoke(adapter, file_type, files, cache_enabled)
        except Exception as exc:  # noqa: BLE001 - one failing analyzer must not abort the others
            message = f"Error running {file_type.analyzer} on {name} files: {exc}"
            self._logger.warn(message)
            summary = FileTypeSummary(
                name=name,
                analyzer=file_type.analyzer,
                status=STATUS_FAILED,
                files_scanned=len(files),
                message=str(exc),
            )
            return summary, []

        if violations:
            for line in violation_lines(violations):
                self._logger.echo(line)
        else:
            self._logger.ok(f"No violations found in {name} files")
        summary = FileTypeSummary(
            name=name,
            analyzer=file_type.analyzer,
            status=STATUS_SCANNED,
            files_scanned=len(files),
            violation_count=len(violations),
        )
        return summary, violations

    def _invoke(
        self,
        adapter: AnalyzerAdapter,
        file_type: FileTypeConfig,
        files: Sequence[str],
        cache_enabled: bool,
    ) -> list[Violation]:
        request = AnalyzerRequest(
            file_type=file_type,
            files=tuple(files),
            cache_enabled=cache_enabled,
            root=self._root,
            timeout=self._timeout,
        )
        payload = adapter.invoke(request)
        context = self._path_context.with_source_path(file_type.source_path)
        return adapter.normalize(payload, context)

    def _log_rules(self, file_type: FileTypeConfig) -> None:
        if not file_type.rules_paths:
            self._logger.info(f"Using default {file_type.analyzer} rules")
            return
        for rules_path in file_type.rules_paths:
            self._logger.info(f"Using ruleset: {rules_path}")

    def _log_severity_summary(self, result: AnalysisResult) -> None:
        if not result.violations:
            self._logger.ok("No violations found across all file types")
            return
        self._logger.info("Summary of all violations:")
        for severity in SEVERITY_ORDER:
            count = result.severity_counts.get(severity, 0)
            if not count:
                continue
            label = f"{severity.value.capitalize()}: {count}"
            if severity in BLOCKING_SEVERITIES:
                self._logger.warn(label)
            else:
                self._logger.info(label)


__all__ = [
    "STATUS_FAILED",
    "STATUS_SCANNED",
    "STATUS_SKIPPED",
    "STATUS_UNSUPPORTED",
    "AnalysisOrchestrator",
]
