# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit machine-readable reports for gate results."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from html import escape
from pathlib import Path
from typing import Final

from ..config.models import OutputFormat
from ..core.models import Verdict, Violation
from ..core.serialization import dump_json, jsonify
from ..core.severity import severity_to_sarif

SARIF_VERSION: Final[str] = "2.1.0"
SARIF_SCHEMA: Final[str] = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0.json"

REPORT_FILENAMES: Final[Mapping[str, str]] = {
    "json": "violations.json",
    "text": "violations.txt",
    "html": "violations.html",
    "sarif": "violations.sarif",
}


def _group_by_file(violations: Sequence[Violation]) -> dict[str, list[Violation]]:
    grouped: dict[str, list[Violation]] = {}
    for violation in violations:
        grouped.setdefault(violation.file, []).append(violation)
    return grouped


def write_json_report(violations: Sequence[Violation], path: Path) -> None:
    """Write the violations as a JSON array, the same shape a baseline uses."""
    path.write_text(dump_json(list(violations)), encoding="utf-8")


def write_text_report(violations: Sequence[Violation], path: Path) -> None:
    """Write a plain-text report grouping violations by file, sorted by line."""
    grouped = _group_by_file(violations)
    lines = [
        "Code Quality Report",
        "===================",
        "",
        f"Total violations: {len(violations)}",
        f"Files with violations: {len(grouped)}",
        "",
        "Violations by File",
        "------------------",
        "",
    ]
    for file_path, entries in grouped.items():
        lines.append(f"File: {file_path}")
        lines.append(f"Violations: {len(entries)}")
        lines.append("")
        for violation in sorted(entries, key=lambda item: item.line):
            lines.append(f"Line {violation.line}: [{violation.severity.value}] {violation.rule}")
            lines.append(f"  {violation.message or 'No message provided'}")
            if violation.doc_url:
                lines.append(f"  Documentation: {violation.doc_url}")
            lines.append("")
        lines.append("")
    path.write_text("\n".join(lines), encoding="utf-8")


_HTML_STYLE: Final[str] = """
    body { font-family: sans-serif; margin: 20px; }
    h1 { color: #333; }
    .summary { margin-bottom: 20px; }
    .file-section { margin-bottom: 30px; }
    table { border-collapse: collapse; width: 100%; }
    th, td { text-align: left; padding: 8px; border-bottom: 1px solid #ddd; }
    th { background-color: #f2f2f2; }
    .critical { background-color: #ffdddd; }
    .high { background-color: #ffeecc; }
    .medium { background-color: #ffffcc; }
    .low { background-color: #e6f3ff; }
    .info { background-color: #f0f0f0; }
"""


def write_html_report(violations: Sequence[Violation], path: Path) -> None:
    """Write a standalone HTML page with one table per file, rows sorted by line.

    Every analyzer supplied value is HTML escaped.
    """
    grouped = _group_by_file(violations)
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '  <meta charset="utf-8">',
        "  <title>Code Quality Report</title>",
        f"  <style>{_HTML_STYLE}  </style>",
        "</head>",
        "<body>",
        "  <h1>Code Quality Report</h1>",
        '  <div class="summary">',
        "    <h2>Summary</h2>",
        f"    <p>Total violations: {len(violations)}</p>",
        f"    <p>Files with violations: {len(grouped)}</p>",
        "  </div>",
        "  <h2>Violations by File</h2>",
    ]
    for file_path, entries in grouped.items():
        parts.extend(
            [
                '  <div class="file-section">',
                f"    <h3>{escape(file_path)}</h3>",
                f"    <p>Violations: {len(entries)}</p>",
                "    <table>",
                "      <tr><th>Line</th><th>Rule</th><th>Severity</th><th>Message</th><th>Documentation</th></tr>",
            ],
        )
        for violation in sorted(entries, key=lambda item: item.line):
            doc_link = (
                f'<a href="{escape(violation.doc_url)}" target="_blank">View</a>' if violation.doc_url else ""
            )
            parts.append(
                f'      <tr class="{violation.severity.value}">'
                f"<td>{violation.line}</td>"
                f"<td>{escape(violation.rule)}</td>"
                f"<td>{violation.severity.value}</td>"
                f"<td>{escape(violation.message or 'No message provided')}</td>"
                f"<td>{doc_link}</td></tr>",
            )
        parts.extend(["    </table>", "  </div>"])
    parts.extend(["</body>", "</html>", ""])
    path.write_text("\n".join(parts), encoding="utf-8")


def write_sarif_report(violations: Sequence[Violation], path: Path) -> None:
    """Emit a SARIF document with one run per analyzer engine."""
    by_engine: dict[str, list[Violation]] = {}
    for violation in violations:
        by_engine.setdefault(violation.engine, []).append(violation)

    sarif_doc = {
        "version": SARIF_VERSION,
        "$schema": SARIF_SCHEMA,
        "runs": [_build_sarif_run(engine, entries) for engine, entries in sorted(by_engine.items())],
    }
    path.write_text(json.dumps(sarif_doc, indent=2), encoding="utf-8")


def _build_sarif_run(engine: str, violations: Sequence[Violation]) -> dict[str, object]:
    """Construct the SARIF run dictionary for a single engine."""
    rules: dict[str, dict[str, object]] = {}
    results: list[dict[str, object]] = []

    for violation in violations:
        if violation.rule not in rules:
            rule: dict[str, object] = {
                "id": violation.rule,
                "name": violation.rule,
                "shortDescription": {"text": violation.message[:120]},
            }
            if violation.doc_url:
                rule["helpUri"] = violation.doc_url
            rules[violation.rule] = rule

        results.append(
            {
                "ruleId": violation.rule,
                "level": severity_to_sarif(violation.severity),
                "message": {"text": violation.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": violation.file},
                            "region": {
                                "startLine": violation.line,
                                "startColumn": violation.column,
                                "endLine": violation.end_line,
                                "endColumn": violation.end_column,
                            },
                        },
                    },
                ],
            },
        )

    return {
        "tool": {"driver": {"name": engine, "rules": list(rules.values())}},
        "results": results,
    }


_WRITERS = {
    "json": write_json_report,
    "text": write_text_report,
    "html": write_html_report,
    "sarif": write_sarif_report,
}

# Formats handled outside the report directory; requesting them writes no file.
_PASSIVE_FORMATS: Final[frozenset[str]] = frozenset({"github"})


def write_reports(
    violations: Sequence[Violation],
    output_dir: Path,
    formats: Sequence[OutputFormat],
) -> dict[str, Path]:
    """Write every requested report format into ``output_dir``.

    ``github`` is accepted and skipped; its results travel through step outputs.

    Returns:
        dict[str, Path]: Report path keyed by format, in request order.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for fmt in formats:
        if fmt in written or fmt in _PASSIVE_FORMATS:
            continue
        path = output_dir / REPORT_FILENAMES[fmt]
        _WRITERS[fmt](violations, path)
        written[fmt] = path
    return written


def github_outputs(
    verdict: Verdict,
    *,
    violations: Sequence[Violation] = (),
    report_paths: Mapping[str, Path] | None = None,
) -> dict[str, str]:
    """Return the step outputs published for a verdict.

    Args:
        verdict: Threshold verdict for the run.
        violations: Final violation set, published as single-line JSON.
        report_paths: Written reports keyed by format; each adds ``<format>-report-path``.

    Returns:
        dict[str, str]: Output values keyed by output name.
    """

    outputs = {
        "violations": json.dumps(jsonify(list(violations)), separators=(",", ":")),
        "total-violations": str(verdict.total_violations),
        "critical-violations": str(verdict.critical_count),
        "medium-violations": str(verdict.medium_count),
        "new-file-violations": str(verdict.new_file_violation_count),
        "modified-file-violations": str(verdict.modified_file_violation_count),
        "action-required": "true" if verdict.should_fail else "false",
    }
    for fmt, path in (report_paths or {}).items():
        outputs[f"{fmt}-report-path"] = str(path)
    return outputs


def write_github_outputs(
    verdict: Verdict,
    path: Path,
    *,
    violations: Sequence[Violation] = (),
    report_paths: Mapping[str, Path] | None = None,
) -> None:
    """Append ``name=value`` step outputs for ``verdict`` to ``path``."""
    outputs = github_outputs(verdict, violations=violations, report_paths=report_paths)
    with path.open("a", encoding="utf-8") as handle:
        for name, value in outputs.items():
            handle.write(f"{name}={value}\n")


__all__ = [
    "REPORT_FILENAMES",
    "SARIF_SCHEMA",
    "SARIF_VERSION",
    "github_outputs",
    "write_github_outputs",
    "write_html_report",
    "write_json_report",
    "write_reports",
    "write_sarif_report",
    "write_text_report",
]
