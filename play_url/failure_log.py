"""Accumulation of failure records over a run."""

from collections.abc import Iterator, Sequence

from play_url.models.result import FailureRecord


class FailureLog:
    """Append-only, ordered collection of failures for one run.

    Records are kept in the order they were appended; the same URL failing
    in several browsers yields several records.
    """

    def __init__(self) -> None:
        self._records: list[FailureRecord] = []

    def append(self, record: FailureRecord) -> None:
        """Add a record after the ones already collected."""
        self._records.append(record)

    def records(self) -> Sequence[FailureRecord]:
        """Return a snapshot of the records collected so far."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FailureRecord]:
        return iter(tuple(self._records))

    def __bool__(self) -> bool:
        return bool(self._records)
