# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PMD adapter."""

from __future__ import annotations

from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..core.models import Violation
from ..core.serialization import JsonValue
from ..filesystem.paths import PathNormalizationContext
from ..parsers.java import parse_pmd
from .base import AnalyzerKind, AnalyzerRequest, CommandAdapter, read_result_file

_RESULT_NAME: Final[str] = "pmd-result.json"


class PmdAdapter(CommandAdapter):
    """Drive ``pmd check`` over a file list with a JSON report."""

    kind = AnalyzerKind.PMD

    def build_command(self, request: AnalyzerRequest, workdir: Path) -> list[str]:
        file_list = workdir / f"{request.file_type.name_key}-files-to-scan.txt"
        file_list.write_text("\n".join(request.files), encoding="utf-8")
        cmd = [
            "pmd",
            "check",
            "--file-list",
            str(file_list),
            "--format",
            "json",
            "--no-progress",
            "--report-file",
            str(workdir / _RESULT_NAME),
        ]
        if request.file_type.rules_paths:
            cmd.extend(["--rulesets", ",".join(request.file_type.rules_paths)])
        if request.cache_enabled:
            cmd.extend(["--cache", str(self.cache_location(request, "cache.bin"))])
        return cmd

    def read_payload(
        self,
        request: AnalyzerRequest,
        workdir: Path,
        completed: CompletedProcess[str],
    ) -> JsonValue:
        """Return the report file payload, falling back to a JSON document on stdout."""

        text = read_result_file(workdir / _RESULT_NAME)
        if text is not None:
            return self.decode(request, text, _RESULT_NAME)
        stdout = (completed.stdout or "").strip()
        if stdout.startswith("{"):
            return self.decode(request, stdout, "stdout")
        return {}

    def normalize(self, payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
        return parse_pmd(payload, context)


__all__ = ["PmdAdapter"]
