"""Reporting of run results to the console and the error log file."""

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, TextIO

from play_url.models.config import RunConfig
from play_url.models.result import FailureRecord, RunResult

log = logging.getLogger(__name__)


def log_failures_summary(
    log: logging.Logger, failures: Sequence[FailureRecord]
) -> None:
    """Log a formatted summary of the failed visits."""
    log.info("=" * 80)
    log.info("Failed visits:")
    log.info("=" * 80)

    for record in failures:
        log.info(
            "✗ %s: %s%s (status %d)",
            record.browser,
            record.url,
            f" [{record.name}]" if record.name else "",
            record.status,
        )
        if record.error:
            log.info("  Error: %s", record.error)
        if record.screenshot:
            log.info("  Screenshot: %s", record.screenshot)


def build_report(
    failures: Sequence[FailureRecord],
    config: RunConfig,
    other: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the error log document.

    Validators are not part of the serialized config.
    """
    return {
        "logs": [record.to_dict() for record in failures],
        "config": config.model_dump(mode="json"),
        "other": dict(other or {}),
    }


async def write_report(path: Path, report: Mapping[str, Any]) -> None:
    """Write the error log in a single write."""
    content = json.dumps(report, default=str)
    await asyncio.to_thread(path.write_text, content, encoding="utf-8")


def format_passed(total: int) -> str:
    """Return the summary line of a run without failures."""
    return f"all {total} test{'' if total == 1 else 's'} passed!"


def format_failed(failed: int, total: int) -> str:
    """Return the summary line of a run with failures."""
    return f"{failed} / {total} tests failed!"


async def report(
    result: RunResult,
    config: RunConfig,
    *,
    other: Mapping[str, Any] | None = None,
    cwd: Path | None = None,
    stream: TextIO | None = None,
) -> int:
    """Print the run summary, write the error log on failure.

    Args:
        result: Result of the run
        config: Configuration the run used, stored in the error log
        other: Invocation context stored in the error log
        cwd: Directory for the default error log path
        stream: Output stream for the summary (default: stdout)

    Returns:
        Process exit code, 0 if every visit passed

    """
    if result.passed:
        print(format_passed(result.total), file=stream)
        return result.exit_code

    log_failures_summary(log, result.failures)
    print(format_failed(len(result.failures), result.total), file=stream)

    path = config.resolve_error_log_path(cwd)
    try:
        await write_report(path, build_report(result.failures, config, other))
    except OSError as e:
        log.error("Failed to write error log to %s: %s", path, e)
    else:
        log.info("Error log written to %s", path)

    return result.exit_code
