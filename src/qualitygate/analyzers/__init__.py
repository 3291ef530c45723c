# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer adapters for ESLint and PMD."""

from __future__ import annotations

from .base import AnalyzerAdapter, AnalyzerKind, AnalyzerRequest, CommandAdapter, UnsupportedAnalyzer
from .eslint import EslintAdapter
from .pmd import PmdAdapter
from .registry import AnalyzerRegistry, default_registry

__all__ = [
    "AnalyzerAdapter",
    "AnalyzerKind",
    "AnalyzerRegistry",
    "AnalyzerRequest",
    "CommandAdapter",
    "EslintAdapter",
    "PmdAdapter",
    "UnsupportedAnalyzer",
    "default_registry",
]
