"""Models for the resolved run configuration and URL definitions."""

from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import Field

from play_url.models.base import Model
from play_url.models.result import ValidationContext

DEFAULT_ERROR_LOG = "play-url-errors.json"

Validator = Callable[[ValidationContext], bool | Awaitable[bool]]


class UrlSpec(Model):
    """A single URL to visit in every configured browser."""

    url: str | None = Field(default=None, description="URL to visit")
    name: str | None = Field(
        default=None,
        description="Label used in logs and screenshot names",
    )
    page_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Options passed to the driver when opening the page",
    )
    visit_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Options passed to the driver when navigating (e.g. timeout)",
    )
    validator: Validator | None = Field(
        default=None,
        exclude=True,
        description="Predicate deciding whether the visit passed "
        "(defaults to status == 200)",
    )


class RunConfig(Model):
    """Fully resolved configuration for one run."""

    browsers: Sequence[str] = Field(
        default_factory=list,
        description="Browsers to run every URL in (chromium, firefox, webkit)",
    )
    browser_options: dict[str, Any] = Field(
        default_factory=dict,
        description="Options passed verbatim to the browser launch",
    )
    screenshot_on_error: str | None = Field(
        default=None,
        description="Screenshot path template; enables screenshots of failures",
    )
    error_log_path: Path | None = Field(
        default=None,
        description=f"Report path (default: ./{DEFAULT_ERROR_LOG})",
    )
    url_glob: str | None = Field(
        default=None,
        description="Glob matching URL definition files",
    )
    urls: Sequence[UrlSpec] = Field(
        default_factory=list,
        description="URLs to test (URL glob results are appended)",
    )

    def resolve_error_log_path(self, cwd: Path | None = None) -> Path:
        """Return the configured report path or the default one in cwd."""
        if self.error_log_path is not None:
            return self.error_log_path
        return (cwd or Path.cwd()) / DEFAULT_ERROR_LOG
