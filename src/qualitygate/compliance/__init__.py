# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Baseline suppression and threshold evaluation."""

from __future__ import annotations

from .baseline import (
    BaselineComparison,
    BaselineDiffer,
    BaselineLoad,
    BaselineStatus,
    diff_against_baseline,
    load_baseline,
    read_baseline,
    write_baseline,
)
from .thresholds import evaluate, partition_by_change_class

__all__ = [
    "BaselineComparison",
    "BaselineDiffer",
    "BaselineLoad",
    "BaselineStatus",
    "diff_against_baseline",
    "evaluate",
    "load_baseline",
    "partition_by_change_class",
    "read_baseline",
    "write_baseline",
]
