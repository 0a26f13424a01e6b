"""Models for visit outcomes and run results."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

NO_STATUS = -1

# Keys of a failure record in the error log
REPORT_KEYS = {"error": "navigationError", "screenshot": "screenshotPath"}


@dataclass(kw_only=True)
class VisitOutcome:
    """Outcome of a single visit, filled in while the page loads.

    ``status`` is updated by the driver's response callback, so it holds the
    status of the most recent response seen (redirect chains end with the
    final document). It stays at ``NO_STATUS`` when nothing was received.
    """

    status: int = NO_STATUS
    navigation_error: str = ""

    def record_status(self, status: int) -> None:
        """Store the status of an observed response."""
        self.status = status

    @property
    def navigation_failed(self) -> bool:
        """Whether navigation raised before the page settled."""
        return bool(self.navigation_error)


@dataclass(frozen=True, kw_only=True)
class ValidationContext:
    """Arguments handed to a user supplied validator."""

    status: int
    browser: str
    page: Any = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class FailureRecord:
    """Evidence of one failing visit."""

    browser: str
    url: str
    status: int
    name: str | None = None
    error: str = ""
    screenshot: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON compatible mapping using report keys."""
        return {
            REPORT_KEYS.get(key, key): value for key, value in asdict(self).items()
        }


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Result of a complete run."""

    total: int
    failures: Sequence[FailureRecord] = ()

    @property
    def passed(self) -> bool:
        """Whether no visit failed."""
        return not self.failures

    @property
    def exit_code(self) -> int:
        """Process exit code for the run."""
        return 0 if self.passed else 1
