"""Tests for the failure log accumulator."""

from play_url.failure_log import FailureLog
from play_url.testing.factories import FailureRecordFactory


def test_starts_empty() -> None:
    """A new log holds no records."""
    failures = FailureLog()

    assert len(failures) == 0
    assert not failures
    assert failures.records() == ()


def test_keeps_append_order() -> None:
    """Returns records in the order they were appended."""
    records = FailureRecordFactory.batch(3)
    failures = FailureLog()

    for record in records:
        failures.append(record)

    assert list(failures) == records
    assert failures.records() == tuple(records)
    assert len(failures) == 3
    assert failures


def test_does_not_deduplicate() -> None:
    """Keeps repeated failures of the same URL."""
    chromium = FailureRecordFactory.build(browser="chromium", url="https://a.test")
    firefox = FailureRecordFactory.build(browser="firefox", url="https://a.test")
    failures = FailureLog()

    failures.append(chromium)
    failures.append(firefox)
    failures.append(chromium)

    assert failures.records() == (chromium, firefox, chromium)


def test_records_is_a_snapshot() -> None:
    """Later appends do not change earlier snapshots."""
    failures = FailureLog()
    failures.append(FailureRecordFactory.build())

    snapshot = failures.records()
    failures.append(FailureRecordFactory.build())

    assert len(snapshot) == 1
    assert len(failures) == 2
