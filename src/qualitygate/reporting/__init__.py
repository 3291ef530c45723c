# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers for files and the console."""

from __future__ import annotations

from .console import render_summary, severity_table, summary_table, violation_lines
from .emitters import (
    REPORT_FILENAMES,
    github_outputs,
    write_github_outputs,
    write_html_report,
    write_json_report,
    write_reports,
    write_sarif_report,
    write_text_report,
)

__all__ = [
    "REPORT_FILENAMES",
    "github_outputs",
    "render_summary",
    "severity_table",
    "summary_table",
    "violation_lines",
    "write_github_outputs",
    "write_html_report",
    "write_json_report",
    "write_reports",
    "write_sarif_report",
    "write_text_report",
]
