# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering for violations and gate results."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.table import Table

from ..core.models import FileTypeSummary, Verdict, Violation
from ..core.severity import SEVERITY_ORDER, Severity

_SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.INFO: "dim",
}

# Wide enough that table titles render on a single line.
_TABLE_MIN_WIDTH = 40


def violation_lines(violations: Iterable[Violation]) -> list[str]:
    """Return violations grouped by file in first-seen order.

    Each file contributes a ``File: <path>`` header followed by one
    ``Line N: message (rule)`` entry per violation and, when known, an
    indented ``Documentation: url`` line.
    """

    grouped: dict[str, list[Violation]] = {}
    for violation in violations:
        grouped.setdefault(violation.file, []).append(violation)

    lines: list[str] = []
    for path, entries in grouped.items():
        lines.append(f"File: {path}")
        for violation in entries:
            lines.append(f"  Line {violation.line}: {violation.message} ({violation.rule})")
            if violation.doc_url:
                lines.append(f"    Documentation: {violation.doc_url}")
    return lines


def summary_table(verdict: Verdict, summaries: Sequence[FileTypeSummary] = ()) -> Table:
    """Build the end-of-run summary table."""

    table = Table(title="Code quality summary", show_lines=False, min_width=_TABLE_MIN_WIDTH)
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Total violations", str(verdict.total_violations))
    table.add_row("Critical/high", str(verdict.critical_count), style=_SEVERITY_STYLES[Severity.HIGH])
    table.add_row("Medium", str(verdict.medium_count), style=_SEVERITY_STYLES[Severity.MEDIUM])
    table.add_row("Low/info", str(verdict.low_count))
    table.add_row("New file violations", str(verdict.new_file_violation_count))
    table.add_row("Modified file violations", str(verdict.modified_file_violation_count))
    if summaries:
        table.add_section()
        for summary in summaries:
            table.add_row(f"{summary.name} ({summary.analyzer}, {summary.status})", str(summary.violation_count))
    return table


def severity_table(counts: dict[Severity, int]) -> Table:
    table = Table(title="Violations by severity", min_width=_TABLE_MIN_WIDTH)
    table.add_column("Severity")
    table.add_column("Count", justify="right")
    for severity in SEVERITY_ORDER:
        table.add_row(severity.value, str(counts.get(severity, 0)), style=_SEVERITY_STYLES[severity])
    return table


def render_summary(
    console: Console,
    verdict: Verdict,
    summaries: Sequence[FileTypeSummary] = (),
    severity_counts: dict[Severity, int] | None = None,
) -> None:
    """Print the summary tables followed by the verdict and its reasons.

    The severity breakdown is shown only while at least one violation remains.
    """

    console.print(summary_table(verdict, summaries))
    if severity_counts and any(severity_counts.values()):
        console.print(severity_table(severity_counts))
    if verdict.should_fail:
        console.print("[bold red]Quality gate failed[/]")
        for reason in verdict.failure_reasons:
            console.print(f"  - {reason}")
    else:
        console.print("[bold green]Quality gate passed[/]")


__all__ = ["render_summary", "severity_table", "summary_table", "violation_lines"]
