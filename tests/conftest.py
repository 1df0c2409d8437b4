"""Shared test fixtures."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import pytest

from cachesave.core import DeleteOutcome, RemoteEntryRef, SaveService


class FakeLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self.records.append(("error", message, kwargs))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


class FakeSaver:
    def __init__(self, cache_id: int = 42, error: Exception | None = None, available: bool = True):
        self.cache_id = cache_id
        self.error = error
        self.available = available
        self.calls: list[dict[str, Any]] = []

    def is_available(self) -> bool:
        return self.available

    def save_cache(
        self,
        paths: Sequence[str],
        key: str,
        upload_chunk_size: int | None = None,
        enable_cross_os_archive: bool = False,
    ) -> int:
        self.calls.append(
            {
                "paths": list(paths),
                "key": key,
                "upload_chunk_size": upload_chunk_size,
                "enable_cross_os_archive": enable_cross_os_archive,
            }
        )
        if self.error is not None:
            raise self.error
        return self.cache_id


class FakeEntries:
    def __init__(
        self,
        outcome: DeleteOutcome = DeleteOutcome.DELETED,
        error: Exception | None = None,
    ):
        self.outcome = outcome
        self.error = error
        self.calls: list[RemoteEntryRef] = []

    def delete_entry(self, ref: RemoteEntryRef) -> DeleteOutcome:
        self.calls.append(ref)
        if self.error is not None:
            raise self.error
        return self.outcome


class FixedClock:
    def now(self) -> datetime:
        return datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def logger() -> FakeLogger:
    return FakeLogger()


@pytest.fixture
def saver() -> FakeSaver:
    return FakeSaver()


@pytest.fixture
def entries() -> FakeEntries:
    return FakeEntries()


@pytest.fixture
def service(saver: FakeSaver, entries: FakeEntries, logger: FakeLogger) -> SaveService:
    return SaveService(saver=saver, entries=entries, clock=FixedClock(), logger=logger)
