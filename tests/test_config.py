# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from qualitygate.cli.options import ScanCLIOptions
from qualitygate.config import ConfigError, ConfigLoader, GateConfig, load_config, parse_file_types_json
from qualitygate.config.loader import MappingConfigSource, deep_merge


def _write(path: Path, text: str) -> Path:
    path.write_text(dedent(text), encoding="utf-8")
    return path


def test_defaults_without_any_configuration(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == GateConfig()
    assert config.output_formats == ("json", "text")
    assert config.timeout_seconds == 900.0
    assert config.thresholds.max_medium_violations == 10


def test_project_file_overrides_pyproject_section(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.qualitygate]
        source_path = "force-app/"
        enable_scan_cache = true

        [tool.qualitygate.thresholds]
        strict_new_files = true
        max_critical_violations = 1
        """,
    )
    _write(
        tmp_path / ".qualitygate.toml",
        """
        source_path = "force-app/main/"
        outputFormats = "json, sarif"

        [thresholds]
        maxMediumViolations = 3

        [[file_types]]
        name = "Apex"
        analyzer = " PMD "
        sourcePath = "force-app/main/default/classes/"
        fileExtensions = ".cls,.trigger"
        rulesPaths = ["rulesets/apex.xml"]
        """,
    )

    config = load_config(tmp_path)

    assert config.source_path == "force-app/main/"
    assert config.enable_scan_cache is True
    assert config.output_formats == ("json", "sarif")
    assert config.thresholds.strict_new_files is True
    assert config.thresholds.max_medium_violations == 3
    assert config.thresholds.max_critical_violations == 1
    (apex,) = config.file_types
    assert apex.analyzer == "pmd"
    assert apex.file_extensions == (".cls", ".trigger")
    assert apex.name_key == "apex"


def test_pyproject_without_tool_section_is_ignored(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    assert load_config(tmp_path) == GateConfig()


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    _write(tmp_path / ".qualitygate.toml", "source_path = [unterminated\n")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_action_output_formats_include_html_and_github(tmp_path: Path) -> None:
    _write(tmp_path / ".qualitygate.toml", 'outputFormats = "github, HTML,json"\n')

    config = load_config(tmp_path)

    assert config.output_formats == ("github", "html", "json")


@pytest.mark.parametrize(
    "document",
    [
        "[thresholds]\nmax_medium_violations = -1\n",
        'output_formats = ["xml"]\n',
        "unknown_key = 1\n",
        '[[file_types]]\nname = "JS"\nanalyzer = "eslint"\nfile_extensions = []\n',
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, document: str) -> None:
    _write(tmp_path / ".qualitygate.toml", document)

    with pytest.raises(ConfigError, match="invalid configuration"):
        load_config(tmp_path)


def test_explicit_config_file_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path, config_file=tmp_path / "missing.toml")


def test_explicit_config_file_replaces_project_file(tmp_path: Path) -> None:
    _write(tmp_path / ".qualitygate.toml", 'source_path = "ignored/"\n')
    explicit = _write(tmp_path / "ci.toml", 'source_path = "lib/"\nanalyzer_timeout = 0\n')

    config = load_config(tmp_path, config_file=explicit)

    assert config.source_path == "lib/"
    assert config.timeout_seconds is None


def test_overrides_take_precedence_and_drop_unset_values(tmp_path: Path) -> None:
    _write(tmp_path / ".qualitygate.toml", 'source_path = "src/"\nbase_ref = "main"\n')

    config = load_config(tmp_path, overrides={"source_path": "app/", "base_ref": None})

    assert config.source_path == "app/"
    assert config.base_ref == "main"


def test_cli_options_merge_into_nested_thresholds(tmp_path: Path) -> None:
    _write(tmp_path / ".qualitygate.toml", "[thresholds]\nmax_critical_violations = 2\n")
    options = ScanCLIOptions(
        root=tmp_path,
        file_types='[{"name": "LWC", "analyzer": "eslint", "sourcePath": "lwc/", "fileExtensions": [".js"]}]',
        formats=["sarif"],
        fail=True,
        timeout=30,
    )

    config = load_config(tmp_path, overrides=options.overrides())

    assert config.thresholds.max_critical_violations == 2
    assert config.thresholds.fail_on_quality_issues is True
    assert config.output_formats == ("sarif",)
    assert config.analyzer_timeout == 30
    assert config.file_types[0].source_path == "lwc/"


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("not json", "valid JSON"),
        ('{"name": "JS"}', "JSON array"),
        ('[{"name": "JS"}]', "invalid configuration"),
    ],
)
def test_parse_file_types_json_errors(text: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        parse_file_types_json(text)


def test_deep_merge_only_recurses_into_mappings() -> None:
    merged = deep_merge(
        {"thresholds": {"a": 1, "b": 2}, "formats": ["json"]},
        {"thresholds": {"b": 3}, "formats": ["text"]},
    )

    assert merged == {"thresholds": {"a": 1, "b": 3}, "formats": ["text"]}


def test_loader_requires_sources() -> None:
    with pytest.raises(ValueError, match="at least one"):
        ConfigLoader([])

    assert ConfigLoader([MappingConfigSource({"source_path": "x/"})]).load().source_path == "x/"
