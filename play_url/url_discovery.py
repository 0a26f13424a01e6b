"""Discovery of URL definitions through a glob."""

import glob
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from play_url.config_loader import ConfigError, read_definition_file
from play_url.define import define_url, resolve
from play_url.models.config import RunConfig, UrlSpec

log = logging.getLogger(__name__)

URL_ATTRIBUTE = "url"


class UrlDefinitionError(ConfigError):
    """Raised when a URL definition file holds no usable definition."""


async def load_url_file(path: Path) -> Sequence[UrlSpec]:
    """Load the URL specs defined in one file.

    Python files expose ``url`` (a spec, a mapping, a list of those or a
    factory returning any of them); YAML and JSON files hold one mapping or
    a list of mappings.
    """
    raw = read_definition_file(path, URL_ATTRIBUTE)
    try:
        value = await resolve(raw)
    except Exception as e:
        raise UrlDefinitionError(f"Failed to resolve url in {path}: {e}") from e

    if value is None:
        raise UrlDefinitionError(f"{path} does not define any url")

    entries: Sequence[Any] = value if isinstance(value, (list, tuple)) else [value]
    if not all(isinstance(entry, (UrlSpec, Mapping)) for entry in entries):
        raise UrlDefinitionError(f"{path} does not define a valid url")

    try:
        return [await define_url(entry) for entry in entries]
    except ValidationError as e:
        raise UrlDefinitionError(f"Invalid url definition in {path}: {e}") from e


async def discover_urls(pattern: str, root: Path | None = None) -> Sequence[UrlSpec]:
    """Load the URL specs of every file matching a glob.

    Args:
        pattern: Glob pattern, ``**`` matches any number of directories
        root: Directory relative patterns are resolved against (default: cwd)

    Returns:
        URL specs, in sorted file path order

    """
    root = root or Path.cwd()
    matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
    paths = [root / match for match in matches if (root / match).is_file()]

    if not paths:
        log.warning("URL glob %s matched no files in %s", pattern, root)
        return []

    log.info("Loading url definitions from %d file(s)", len(paths))
    urls: list[UrlSpec] = []
    for path in paths:
        urls.extend(await load_url_file(path))
    return urls


async def resolve_urls(
    config: RunConfig, root: Path | None = None
) -> Sequence[UrlSpec]:
    """Return the configured URLs followed by the ones found via ``url_glob``."""
    urls = list(config.urls)
    if config.url_glob:
        urls.extend(await discover_urls(config.url_glob, root))
    return urls
