"""Pass/fail decision for a single visit."""

import inspect
import logging
from typing import Any

from play_url.models.config import Validator
from play_url.models.result import ValidationContext, VisitOutcome

log = logging.getLogger(__name__)

DEFAULT_EXPECTED_STATUS = 200


async def validate(
    outcome: VisitOutcome,
    validator: Validator | None,
    browser: str,
    page: Any,
) -> bool:
    """Decide whether a visit passed.

    A failed navigation is always invalid and the validator is not called,
    since the page may be in an inconsistent state. Otherwise the validator
    decides (awaited when it returns an awaitable), falling back to a
    ``status == 200`` check when none is configured.

    Args:
        outcome: Navigation outcome of the visit
        validator: Optional user supplied predicate
        browser: Identifier of the browser the visit ran in
        page: Live page object handed to the validator

    Returns:
        True if the visit passed

    Raises:
        Exception: Whatever the validator raises is propagated unchanged

    """
    if outcome.navigation_failed:
        log.debug("Skipping validation after navigation error")
        return False

    if validator is None:
        return outcome.status == DEFAULT_EXPECTED_STATUS

    verdict = validator(
        ValidationContext(status=outcome.status, browser=browser, page=page)
    )
    if inspect.isawaitable(verdict):
        verdict = await verdict

    return bool(verdict)
