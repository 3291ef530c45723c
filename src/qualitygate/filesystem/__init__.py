# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem path helpers."""

from __future__ import annotations

from .paths import PathNormalizationContext, normalize_violation_path

__all__ = ["PathNormalizationContext", "normalize_violation_path"]
