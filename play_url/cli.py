"""CLI entry point for checking URLs in real browsers."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from play_url.config_loader import (
    ConfigError,
    LoadedConfig,
    load_config,
    load_param_config,
)
from play_url.engine import ExecutionEngine
from play_url.models.config import RunConfig
from play_url.reporter import report
from play_url.url_discovery import resolve_urls

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


async def run(
    param_config: Any = None,
    *,
    config_path: str | None = None,
    other: Mapping[str, Any] | None = None,
    engine: ExecutionEngine | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> int:
    """Run all URL checks and return exit code.

    Args:
        param_config: Config (or config factory) to use instead of a file
        config_path: Config file given on the command line
        other: Invocation context stored in the error log
        engine: Engine executing the visits (default: Playwright drivers)
        environ: Environment variables used for config discovery
        cwd: Working directory for config discovery, globs and reports

    """
    log = logging.getLogger("play_url")

    try:
        if param_config is not None:
            loaded = await load_param_config(param_config)
        else:
            loaded = await load_config(config_path, environ=environ, cwd=cwd)
    except ConfigError as e:
        log.error("%s", e)
        return 1

    if (config := preflight(log, loaded)) is None:
        return 1

    try:
        urls = await resolve_urls(config, cwd)
    except ConfigError as e:
        log.error("%s", e)
        return 1

    if not urls:
        log.error("play-url config does not contain urls!")
        return 1

    log.info("Checking %d url(s) in %s", len(urls), ", ".join(config.browsers))
    result = await (engine or ExecutionEngine()).run(config, urls)

    return await report(result, config, other=other, cwd=cwd)


def preflight(log: logging.Logger, loaded: LoadedConfig) -> RunConfig | None:
    """Check that a config was found and can run, logging why it cannot."""
    if not loaded.sources or loaded.config is None:
        log.error("no play-url config file found!")
        return None

    config = loaded.config
    if not config.browsers:
        log.error("play-url config does not contain browsers!")
        return None

    if not config.urls and not config.url_glob:
        log.error("play-url config does not contain urls!")
        return None

    return config


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Open URLs in real browsers and report the ones that fail"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the config file (extension optional)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVELS,
        help="Log level for diagnostics written to stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(config_path=args.config, other=vars(args)))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
