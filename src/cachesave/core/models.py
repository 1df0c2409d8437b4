"""Core domain models."""

from dataclasses import dataclass, field
from enum import Enum

from ..ports.cache import DeleteOutcome, RemoteEntryRef
from .errors import ConfigurationError

# Cache id reported when nothing was uploaded.
NO_OP_CACHE_ID = -1


class Action(Enum):
    """What the hit/update policy decided to do with the cache."""

    PROCEED_FRESH = "proceed_fresh"
    SKIP = "skip"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class UploadOptions:
    """Options handed to the cache saver."""

    upload_chunk_size: int | None = None
    enable_cross_os_archive: bool = False

    def __post_init__(self) -> None:
        if self.upload_chunk_size is not None and self.upload_chunk_size <= 0:
            raise ConfigurationError(
                f"Upload chunk size must be positive, got {self.upload_chunk_size}"
            )


def parse_repository(repository: str) -> tuple[str, str]:
    """Split an ``owner/name`` repository string."""
    owner, sep, repo = repository.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(f"Invalid repository identity: {repository!r}")
    return owner, repo


@dataclass(frozen=True, slots=True)
class Eligibility:
    """Outcome of the eligibility gate."""

    eligible: bool
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of the hit/update policy."""

    action: Action
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class SaveContext:
    """Read-only view of the run: restore state plus environment signals.

    ``state_primary_key`` and ``restored_key`` come from the restore step of
    the same run. Everything else is read from the workflow environment.
    """

    state_primary_key: str | None = None
    restored_key: str | None = None
    ref: str | None = None
    event_name: str | None = None
    repository: str | None = None
    token: str | None = field(default=None, repr=False)
    feature_available: bool = True
    is_ghes: bool = False


@dataclass(frozen=True, slots=True)
class SaveSummary:
    """What a save run did."""

    cache_id: int
    key: str | None = None
    action: Action | None = None
    evicted: DeleteOutcome | None = None
    duration: float = 0.0
    error: str | None = None

    @property
    def saved(self) -> bool:
        return self.cache_id != NO_OP_CACHE_ID

    @property
    def failed(self) -> bool:
        """An upload was due but did not produce a cache."""
        if self.error is not None:
            return True
        return self.action in (Action.PROCEED_FRESH, Action.UPDATE) and not self.saved
