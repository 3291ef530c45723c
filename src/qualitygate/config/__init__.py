# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from ..core.errors import ConfigError
from .loader import ConfigLoader, load_config, parse_file_types_json
from .models import (
    DEFAULT_WORKSPACE_PREFIXES,
    FileTypeConfig,
    GateConfig,
    OutputFormat,
    ThresholdConfig,
)

__all__ = [
    "DEFAULT_WORKSPACE_PREFIXES",
    "ConfigError",
    "ConfigLoader",
    "FileTypeConfig",
    "GateConfig",
    "OutputFormat",
    "ThresholdConfig",
    "load_config",
    "parse_file_types_json",
]
