# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalise PMD JSON reports into violations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from ..core.models import Violation
from ..core.serialization import JsonValue, coerce_optional_int, coerce_optional_str, coerce_positive_int, iter_dicts
from ..core.severity import severity_from_pmd
from ..filesystem.paths import PathNormalizationContext, normalize_violation_path

PMD_ENGINE: Final[str] = "pmd"
_UNKNOWN_RULE: Final[str] = "unknown"


def parse_pmd(payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
    """Parse a PMD ``--format json`` report into violations.

    Args:
        payload: Decoded PMD report (an object with a ``files`` array).
        context: Path normalisation inputs for the file type being processed.

    Returns:
        list[Violation]: Violations in report order; file entries without a
        ``filename`` are skipped.
    """

    if not isinstance(payload, Mapping):
        return []
    results: list[Violation] = []
    for entry in iter_dicts(payload.get("files")):
        raw_path = coerce_optional_str(entry.get("filename"))
        if not raw_path:
            continue
        file_path = normalize_violation_path(raw_path, context)
        for violation in iter_dicts(entry.get("violations")):
            results.append(_build_violation(violation, file_path))
    return results


def _build_violation(violation: Mapping[str, object], file_path: str) -> Violation:
    line = coerce_positive_int(violation.get("beginline"), 1)
    column = coerce_positive_int(violation.get("begincolumn"), 1)
    return Violation(
        engine=PMD_ENGINE,
        rule=coerce_optional_str(violation.get("rule")) or _UNKNOWN_RULE,
        ruleset=coerce_optional_str(violation.get("ruleset")),
        severity=severity_from_pmd(coerce_optional_int(violation.get("priority"))),
        message=coerce_optional_str(violation.get("description")) or "",
        file=file_path,
        line=line,
        column=column,
        end_line=coerce_positive_int(violation.get("endline"), line),
        end_column=coerce_positive_int(violation.get("endcolumn"), column),
        doc_url=coerce_optional_str(violation.get("externalInfoUrl")) or "",
    )


__all__ = ["PMD_ENGINE", "parse_pmd"]
