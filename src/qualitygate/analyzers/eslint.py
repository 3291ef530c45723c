# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint adapter."""

from __future__ import annotations

from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..core.models import Violation
from ..core.serialization import JsonValue
from ..filesystem.paths import PathNormalizationContext
from ..parsers.javascript import parse_eslint
from .base import AnalyzerKind, AnalyzerRequest, CommandAdapter, read_result_file

ESLINT_EXTENSIONS: Final[str] = ".js,.jsx,.ts,.tsx,.html,.css,.cmp,.app,.intf,.evt,.design"
_RESULT_NAME: Final[str] = "eslint-result.json"


class EslintAdapter(CommandAdapter):
    """Drive ``npx eslint`` with JSON output written to a scratch file."""

    kind = AnalyzerKind.ESLINT

    def build_command(self, request: AnalyzerRequest, workdir: Path) -> list[str]:
        cmd = [
            "npx",
            "eslint",
            "--ext",
            ESLINT_EXTENSIONS,
            "--format",
            "json",
            "--output-file",
            str(workdir / _RESULT_NAME),
            "--no-error-on-unmatched-pattern",
        ]
        # Only the first rules path is honoured; ESLint accepts a single config.
        if request.file_type.rules_paths:
            cmd.extend(["--config", request.file_type.rules_paths[0], "--no-eslintrc"])
        if request.cache_enabled:
            cmd.extend(["--cache", "--cache-location", str(self.cache_location(request, "cache"))])
        cmd.extend(request.files)
        return cmd

    def read_payload(
        self,
        request: AnalyzerRequest,
        workdir: Path,
        completed: CompletedProcess[str],
    ) -> JsonValue:
        del completed  # ESLint exits 1 whenever it reports problems
        text = read_result_file(workdir / _RESULT_NAME)
        if text is None:
            return []
        payload = self.decode(request, text, _RESULT_NAME)
        if not isinstance(payload, list):
            raise self.error(request, f"ESLint result in {_RESULT_NAME} is not an array")
        return payload

    def normalize(self, payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
        return parse_eslint(payload, context)


__all__ = ["ESLINT_EXTENSIONS", "EslintAdapter"]
