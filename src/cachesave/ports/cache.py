"""Cache entry port interface."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class DeleteOutcome(Enum):
    """Result of deleting a remote cache entry."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class RemoteEntryRef:
    """Identity of one remote cache entry."""

    owner: str
    repo: str
    key: str
    ref: str


class CacheEntryPort(Protocol):
    """Port for managing existing remote cache entries."""

    def delete_entry(self, ref: RemoteEntryRef) -> DeleteOutcome:
        """Delete one remote entry.

        Returns ``DeleteOutcome.NOT_FOUND`` when the remote reports the entry
        does not exist. Any other failure raises ``RemoteError``.
        """
        ...
