# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import pytest

from qualitygate.core.severity import (
    Severity,
    count_by_severity,
    is_blocking,
    severity_from_eslint,
    severity_from_pmd,
    severity_to_sarif,
)


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (2, Severity.HIGH),
        (1, Severity.MEDIUM),
        (0, Severity.INFO),
        (3, Severity.INFO),
        (None, Severity.INFO),
    ],
)
def test_severity_from_eslint(level: int | None, expected: Severity) -> None:
    assert severity_from_eslint(level) is expected


@pytest.mark.parametrize(
    ("priority", "expected"),
    [
        (1, Severity.CRITICAL),
        (2, Severity.HIGH),
        (3, Severity.MEDIUM),
        (4, Severity.LOW),
        (5, Severity.INFO),
        (0, Severity.INFO),
        (None, Severity.INFO),
    ],
)
def test_severity_from_pmd(priority: int | None, expected: Severity) -> None:
    assert severity_from_pmd(priority) is expected


def test_critical_and_high_share_the_blocking_bucket() -> None:
    assert is_blocking(Severity.CRITICAL)
    assert is_blocking(Severity.HIGH)
    assert not is_blocking(Severity.MEDIUM)
    assert not is_blocking(Severity.LOW)
    assert not is_blocking(Severity.INFO)


def test_count_by_severity_includes_empty_buckets(make_violation) -> None:
    counts = count_by_severity(
        [
            make_violation(severity=Severity.HIGH),
            make_violation(line=2, severity=Severity.HIGH),
            make_violation(line=3, severity=Severity.LOW),
        ],
    )

    assert counts == {
        Severity.CRITICAL: 0,
        Severity.HIGH: 2,
        Severity.MEDIUM: 0,
        Severity.LOW: 1,
        Severity.INFO: 0,
    }


def test_severity_to_sarif_levels() -> None:
    assert severity_to_sarif(Severity.CRITICAL) == "error"
    assert severity_to_sarif(Severity.MEDIUM) == "warning"
    assert severity_to_sarif(Severity.INFO) == "note"
