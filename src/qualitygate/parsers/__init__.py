# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers translating analyzer payloads into :class:`~qualitygate.core.models.Violation`."""

from __future__ import annotations

from .java import PMD_ENGINE, parse_pmd
from .javascript import ESLINT_ENGINE, UNKNOWN_RULE, eslint_doc_url, parse_eslint

__all__ = [
    "ESLINT_ENGINE",
    "PMD_ENGINE",
    "UNKNOWN_RULE",
    "eslint_doc_url",
    "parse_eslint",
    "parse_pmd",
]
