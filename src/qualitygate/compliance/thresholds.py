# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Evaluate violations against the configured thresholds."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..config.models import ThresholdConfig
from ..core.models import ClassifiedFileSet, Verdict, Violation
from ..core.severity import Severity, is_blocking


def _blocking_count(violations: Iterable[Violation]) -> int:
    return sum(1 for violation in violations if is_blocking(violation.severity))


def _belongs_to(violation: Violation, files: Sequence[str]) -> bool:
    return any(violation.file == path or violation.file.endswith(path) for path in files)


def partition_by_change_class(
    violations: Sequence[Violation],
    files: ClassifiedFileSet,
) -> tuple[list[Violation], list[Violation]]:
    """Split ``violations`` into those reported against new and modified files.

    A violation belongs to a file when its path equals the file or ends with
    it. A violation can land in both lists when suffix matching hits a file
    from each group.

    Returns:
        tuple[list[Violation], list[Violation]]: New-file and modified-file
        violations, each in input order.
    """

    new_file_violations = [violation for violation in violations if _belongs_to(violation, files.new_files)]
    modified_file_violations = [violation for violation in violations if _belongs_to(violation, files.modified_files)]
    return new_file_violations, modified_file_violations


def evaluate(
    all_violations: Sequence[Violation],
    new_file_violations: Sequence[Violation],
    modified_file_violations: Sequence[Violation],
    thresholds: ThresholdConfig,
) -> Verdict:
    """Decide whether the violations breach ``thresholds``.

    The strict new-file check and both modified-file checks always run.
    The overall critical/high and medium maxima are consulted only when
    ``fail_on_quality_issues`` is set and nothing earlier failed. Critical
    and high share one bucket; low and info never fail the gate.

    Args:
        all_violations: Every reportable violation.
        new_file_violations: Violations in newly added files.
        modified_file_violations: Violations in modified files.
        thresholds: Limits to apply.

    Returns:
        Verdict: Counts, the failure decision and its reasons in check order.
    """

    critical_count = _blocking_count(all_violations)
    medium_count = sum(1 for violation in all_violations if violation.severity is Severity.MEDIUM)
    new_critical = _blocking_count(new_file_violations)
    modified_critical = _blocking_count(modified_file_violations)

    reasons: list[str] = []
    if thresholds.strict_new_files and new_file_violations:
        reasons.append(f"New files have {len(new_file_violations)} violations (strict mode requires 0)")

    limit = thresholds.max_critical_violations_for_modified_files
    if modified_critical > limit:
        reasons.append(f"Modified files have {modified_critical} critical/high violations (threshold: {limit})")

    limit = thresholds.max_violations_for_modified_files
    if len(modified_file_violations) > limit:
        reasons.append(
            f"Modified files have {len(modified_file_violations)} total violations (threshold: {limit})",
        )

    if thresholds.fail_on_quality_issues and not reasons:
        if critical_count > thresholds.max_critical_violations:
            reasons.append(
                f"Overall critical/high violations: {critical_count} "
                f"(threshold: {thresholds.max_critical_violations})",
            )
        if medium_count > thresholds.max_medium_violations:
            reasons.append(
                f"Overall medium violations: {medium_count} (threshold: {thresholds.max_medium_violations})",
            )

    return Verdict(
        total_violations=len(all_violations),
        critical_count=critical_count,
        medium_count=medium_count,
        low_count=len(all_violations) - critical_count - medium_count,
        new_file_violation_count=len(new_file_violations),
        new_file_critical_count=new_critical,
        modified_file_violation_count=len(modified_file_violations),
        modified_file_critical_count=modified_critical,
        should_fail=bool(reasons),
        failure_reasons=tuple(reasons),
    )


__all__ = ["evaluate", "partition_by_change_class"]
