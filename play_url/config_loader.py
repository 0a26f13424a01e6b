"""Discovery and loading of the run configuration."""

import hashlib
import importlib.util
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from play_url.define import define_config
from play_url.models.config import RunConfig

log = logging.getLogger(__name__)

CONFIG_BASENAME = ".play-url.config"
CONFIG_ENV_VAR = "CONFIG"
CONFIG_EXTENSIONS = ("", ".py", ".yaml", ".yml", ".json")
CONFIG_ATTRIBUTE = "config"
PARAM_CONFIG_SOURCE = "__param_config__"


class ConfigError(Exception):
    """Raised when a configuration or definition file cannot be used."""


@dataclass(frozen=True, kw_only=True)
class LoadedConfig:
    """Configuration together with the sources it was loaded from.

    An empty ``sources`` means no configuration was found.
    """

    config: RunConfig | None
    sources: Sequence[str] = ()


def config_candidates(
    explicit: str | None, environ: Mapping[str, str], cwd: Path
) -> Sequence[Path]:
    """Return the base paths to look for a config file, in priority order."""
    bases = [CONFIG_BASENAME, environ.get(CONFIG_ENV_VAR, ""), explicit or ""]
    return [cwd / base for base in bases if base]


def find_config_file(
    explicit: str | None, environ: Mapping[str, str], cwd: Path
) -> Path | None:
    """Return the first existing config file, trying each known extension."""
    for base in config_candidates(explicit, environ, cwd):
        for extension in CONFIG_EXTENSIONS:
            path = base.with_name(base.name + extension)
            if path.is_file():
                return path
    return None


def load_python_attribute(path: Path, attribute: str) -> Any:
    """Import a Python file and return one of its module attributes."""
    digest = hashlib.sha1(str(path.resolve()).encode()).hexdigest()[:12]
    stem = path.stem.replace(".", "_").replace("-", "_")
    module_name = f"_play_url_{stem}_{digest}"

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        raise ConfigError(f"Failed to import {path}: {e}") from e

    if not hasattr(module, attribute):
        raise ConfigError(f"{path} does not define '{attribute}'")
    return getattr(module, attribute)


def read_definition_file(path: Path, attribute: str) -> Any:
    """Read a definition from a Python, YAML or JSON file.

    Python files must expose ``attribute``; any other file is parsed as
    YAML, which also covers JSON.
    """
    if path.suffix == ".py":
        return load_python_attribute(path, attribute)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e


async def load_config(
    explicit: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> LoadedConfig:
    """Find and load the configuration file.

    Candidates are ``.play-url.config``, the ``CONFIG`` environment variable
    and the explicit path, each tried with the extensions in
    ``CONFIG_EXTENSIONS``. The first existing file is used.

    Args:
        explicit: Path given on the command line
        environ: Environment variables (default: os.environ)
        cwd: Directory relative paths are resolved against (default: cwd)

    Returns:
        The loaded config, with empty sources if no file was found

    Raises:
        ConfigError: If the file exists but cannot be read or resolved, or does
            not hold a valid config

    """
    environ = os.environ if environ is None else environ
    cwd = cwd or Path.cwd()

    path = find_config_file(explicit, environ, cwd)
    if path is None:
        log.debug("No config file found in %s", cwd)
        return LoadedConfig(config=None)

    log.info("Loading config from %s", path)
    raw = read_definition_file(path, CONFIG_ATTRIBUTE)

    try:
        config = await define_config(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e
    except Exception as e:
        raise ConfigError(f"Failed to resolve config in {path}: {e}") from e

    return LoadedConfig(config=config, sources=(str(path),))


async def load_param_config(param_config: Any) -> LoadedConfig:
    """Load a configuration passed programmatically."""
    try:
        config = await define_config(param_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e
    except Exception as e:
        raise ConfigError(f"Failed to resolve config: {e}") from e

    return LoadedConfig(config=config, sources=(PARAM_CONFIG_SOURCE,))
