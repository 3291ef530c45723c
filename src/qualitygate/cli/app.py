# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for the quality gate."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Final

import typer

from ..compliance.baseline import write_baseline
from ..config.loader import load_config
from ..config.models import GateConfig
from ..core.errors import ConfigError, QualityGateError
from ..core.logging import ConsoleLogger, build_logger
from ..core.logging.console import get_console
from ..core.serialization import dump_json
from ..core.severity import count_by_severity
from ..pipeline import QualityGate
from ..reporting.console import render_summary
from ..reporting.emitters import write_github_outputs, write_reports
from .options import (
    BASE_REF_OPTION,
    BASELINE_OPTION,
    CACHE_OPTION,
    CHANGED_ONLY_OPTION,
    CHANGES_FILE_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FAIL_OPTION,
    FILE_TYPES_OPTION,
    FORMAT_OPTION,
    GITHUB_OUTPUT_OPTION,
    OUTPUT_DIR_OPTION,
    ROOT_OPTION,
    SOURCE_PATH_OPTION,
    TIMEOUT_OPTION,
    ScanCLIOptions,
)

EXIT_OK: Final[int] = 0
EXIT_GATE_FAILED: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

app = typer.Typer(help="Code quality gate for ESLint and PMD.", no_args_is_help=True, add_completion=False)


def _load(options: ScanCLIOptions, logger: ConsoleLogger) -> GateConfig:
    try:
        return load_config(options.root, config_file=options.config_file, overrides=options.overrides())
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc


def _build_gate(options: ScanCLIOptions, config: GateConfig, logger: ConsoleLogger) -> QualityGate:
    return QualityGate(config, root=options.root, logger=logger, changes_file=options.changes_file)


@app.command()
def scan(
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    source_path: SOURCE_PATH_OPTION = None,
    file_types: FILE_TYPES_OPTION = None,
    changed_only: CHANGED_ONLY_OPTION = None,
    base_ref: BASE_REF_OPTION = None,
    changes_file: CHANGES_FILE_OPTION = None,
    baseline: BASELINE_OPTION = None,
    cache: CACHE_OPTION = None,
    formats: FORMAT_OPTION = None,
    output_dir: OUTPUT_DIR_OPTION = None,
    fail: FAIL_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    github_output: GITHUB_OUTPUT_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Analyse the repository, write reports and enforce thresholds.

    Exits 1 when the verdict fails and failing is enabled, 2 on configuration errors.
    """

    options = ScanCLIOptions(
        root=root.resolve(),
        config_file=config_file,
        source_path=source_path,
        file_types=file_types,
        changed_only=changed_only,
        base_ref=base_ref,
        changes_file=changes_file,
        baseline=baseline,
        cache=cache,
        formats=formats,
        output_dir=output_dir,
        fail=fail,
        timeout=timeout,
        emoji=emoji,
    )
    logger = build_logger(emoji=emoji)
    config = _load(options, logger)
    try:
        outcome = _build_gate(options, config, logger).run()
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    except QualityGateError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_GATE_FAILED) from exc

    report_dir = config.output_dir if config.output_dir.is_absolute() else options.root / config.output_dir
    report_paths = write_reports(outcome.violations, report_dir, config.output_formats)
    for fmt, path in report_paths.items():
        logger.ok(f"Generated {fmt} report at {path}")
    if github_output is not None:
        write_github_outputs(
            outcome.verdict,
            github_output,
            violations=outcome.violations,
            report_paths=report_paths,
        )

    console = get_console(color=True, emoji=emoji)
    render_summary(
        console,
        outcome.verdict,
        outcome.analysis.summaries,
        count_by_severity(outcome.violations),
    )

    if outcome.verdict.should_fail and config.thresholds.fail_on_quality_issues:
        raise typer.Exit(code=EXIT_GATE_FAILED)
    raise typer.Exit(code=EXIT_OK)


@app.command("baseline")
def baseline_command(
    output: Annotated[Path, typer.Argument(help="File receiving the baseline JSON array.")],
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    source_path: SOURCE_PATH_OPTION = None,
    file_types: FILE_TYPES_OPTION = None,
    changed_only: CHANGED_ONLY_OPTION = None,
    base_ref: BASE_REF_OPTION = None,
    changes_file: CHANGES_FILE_OPTION = None,
    cache: CACHE_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Record the current violations as a baseline for later scans."""

    options = ScanCLIOptions(
        root=root.resolve(),
        config_file=config_file,
        source_path=source_path,
        file_types=file_types,
        changed_only=changed_only,
        base_ref=base_ref,
        changes_file=changes_file,
        cache=cache,
        timeout=timeout,
        emoji=emoji,
    )
    logger = build_logger(emoji=emoji)
    config = _load(options, logger)
    gate = _build_gate(options, config, logger)
    try:
        analysis = gate.analyze(gate.collect_files())
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    except QualityGateError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_GATE_FAILED) from exc

    write_baseline(analysis.violations, output)
    logger.ok(f"Wrote {len(analysis.violations)} violations to {output}")


@app.command("config")
def config_command(
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    source_path: SOURCE_PATH_OPTION = None,
    file_types: FILE_TYPES_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the resolved configuration as JSON."""

    options = ScanCLIOptions(
        root=root.resolve(),
        config_file=config_file,
        source_path=source_path,
        file_types=file_types,
        emoji=emoji,
    )
    config = _load(options, build_logger(emoji=emoji))
    typer.echo(dump_json(config.model_dump(mode="json")), nl=False)


__all__ = ["EXIT_CONFIG_ERROR", "EXIT_GATE_FAILED", "EXIT_OK", "app"]
