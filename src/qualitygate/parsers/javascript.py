# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalise ESLint JSON output into violations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from ..core.models import Violation
from ..core.serialization import JsonValue, coerce_optional_int, coerce_optional_str, coerce_positive_int, iter_dicts
from ..core.severity import severity_from_eslint
from ..filesystem.paths import PathNormalizationContext, normalize_violation_path

ESLINT_ENGINE: Final[str] = "eslint"
UNKNOWN_RULE: Final[str] = "unknown"

ESLINT_RULES_DOC_ROOT: Final[str] = "https://eslint.org/docs/latest/rules/"
_PLUGIN_DOC_ROOTS: Final[tuple[tuple[str, str], ...]] = (
    ("@lwc/lwc/", "https://github.com/salesforce/eslint-plugin-lwc/tree/master/docs/rules/"),
    ("@salesforce/aura/", "https://github.com/forcedotcom/eslint-plugin-aura/tree/master/docs/rules/"),
)


def eslint_doc_url(rule_id: str | None) -> str:
    """Return the documentation URL for an ESLint rule identifier.

    Core rules (no ``/``) point at eslint.org, LWC and Aura plugin rules at
    their plugin repositories; any other plugin rule has no known URL.
    """

    if not rule_id or rule_id == UNKNOWN_RULE:
        return ""
    if "/" not in rule_id:
        return f"{ESLINT_RULES_DOC_ROOT}{rule_id}"
    for prefix, root in _PLUGIN_DOC_ROOTS:
        if rule_id.startswith(prefix):
            return f"{root}{rule_id[len(prefix):]}.md"
    return ""


def parse_eslint(payload: JsonValue, context: PathNormalizationContext) -> list[Violation]:
    """Parse ESLint ``--format json`` output into violations.

    Args:
        payload: Decoded ESLint result array.
        context: Path normalisation inputs for the file type being processed.

    Returns:
        list[Violation]: One violation per ESLint message, in report order.
    """

    results: list[Violation] = []
    for entry in iter_dicts(payload):
        messages = list(iter_dicts(entry.get("messages")))
        if not messages:
            continue
        raw_path = coerce_optional_str(entry.get("filePath")) or ""
        file_path = normalize_violation_path(raw_path, context)
        for message in messages:
            results.append(_build_violation(message, file_path))
    return results


def _build_violation(message: Mapping[str, object], file_path: str) -> Violation:
    rule = coerce_optional_str(message.get("ruleId")) or UNKNOWN_RULE
    line = coerce_positive_int(message.get("line"), 1)
    column = coerce_positive_int(message.get("column"), 1)
    return Violation(
        engine=ESLINT_ENGINE,
        rule=rule,
        severity=severity_from_eslint(coerce_optional_int(message.get("severity"))),
        message=coerce_optional_str(message.get("message")) or "",
        file=file_path,
        line=line,
        column=column,
        end_line=coerce_positive_int(message.get("endLine"), line),
        end_column=coerce_positive_int(message.get("endColumn"), column),
        doc_url=eslint_doc_url(rule),
    )


__all__ = ["ESLINT_ENGINE", "UNKNOWN_RULE", "eslint_doc_url", "parse_eslint"]
