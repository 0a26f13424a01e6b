"""Rendering of screenshot paths for failed visits."""

import re
import time
from dataclasses import dataclass

SCREENSHOT_EXTENSION = ".png"

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


@dataclass(frozen=True, kw_only=True)
class ScreenshotContext:
    """Values injected into a screenshot path template."""

    browser: str
    timestamp: int
    status: int
    index: int
    name: str | None = None


def now_millis() -> int:
    """Return the current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def sanitize_name(name: str | None) -> str:
    """Strip every character that is unsafe in a file name.

    Only ASCII letters, digits, ``-`` and ``_`` are kept; ``None`` becomes
    an empty string.
    """
    if not name:
        return ""
    return _UNSAFE_NAME_CHARS.sub("", name)


def render_screenshot_path(template: str, context: ScreenshotContext) -> str:
    """Render a screenshot path from a template.

    Supported tokens, each replaced wherever it occurs:

    * ``[browser]``: browser identifier
    * ``[timestamp]``: epoch milliseconds of the capture
    * ``[status]``: HTTP status of the visit (``-1`` if none)
    * ``[index]``: position of the URL in the URL list
    * ``[name]``: sanitized URL name

    Args:
        template: Path template, relative or absolute
        context: Values for the current failing visit

    Returns:
        The rendered path with the image extension appended

    """
    replacements = (
        ("[browser]", context.browser),
        ("[timestamp]", str(context.timestamp)),
        ("[status]", str(context.status)),
        ("[index]", str(context.index)),
        ("[name]", sanitize_name(context.name)),
    )

    path = template
    for token, value in replacements:
        path = path.replace(token, value)

    return f"{path}{SCREENSHOT_EXTENSION}"
