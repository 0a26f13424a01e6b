"""Tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from play_url.models.config import RunConfig, UrlSpec


def test_run_config_defaults() -> None:
    """Uses empty defaults for optional settings."""
    config = RunConfig()

    assert config.browsers == []
    assert config.browser_options == {}
    assert config.screenshot_on_error is None
    assert config.error_log_path is None
    assert config.url_glob is None
    assert config.urls == []


def test_run_config_accepts_unknown_browsers() -> None:
    """Leaves browser identifiers to the engine."""
    assert RunConfig(browsers=["safari"]).browsers == ["safari"]


def test_run_config_is_frozen() -> None:
    """Prevents changes to a resolved config."""
    config = RunConfig(browsers=["chromium"])

    with pytest.raises(ValidationError):
        config.browsers = ["firefox"]  # type: ignore[misc]


def test_resolve_error_log_path_default(tmp_path: Path) -> None:
    """Defaults to play-url-errors.json in the working directory."""
    assert RunConfig().resolve_error_log_path(tmp_path) == (
        tmp_path / "play-url-errors.json"
    )


def test_resolve_error_log_path_configured(tmp_path: Path) -> None:
    """Uses the configured path when set."""
    config = RunConfig(error_log_path="logs/errors.json")

    assert config.resolve_error_log_path(tmp_path) == Path("logs/errors.json")


def test_url_spec_allows_missing_url() -> None:
    """Accepts specs without url, they are skipped at run time."""
    assert UrlSpec(name="draft").url is None


def test_url_spec_rejects_non_callable_validator() -> None:
    """Requires validators to be callable."""
    with pytest.raises(ValidationError):
        UrlSpec(url="https://a.test", validator="status == 200")


def test_url_spec_dump_excludes_validator() -> None:
    """Leaves validators out of dumps."""
    spec = UrlSpec(url="https://a.test", validator=lambda ctx: True)

    assert "validator" not in spec.model_dump()
