"""Cache saver port interface."""

from collections.abc import Sequence
from typing import Protocol


class CacheSaverPort(Protocol):
    """Port for archiving and uploading a path set under a key."""

    def is_available(self) -> bool:
        """Check whether the cache backend can be used in this environment."""
        ...

    def save_cache(
        self,
        paths: Sequence[str],
        key: str,
        upload_chunk_size: int | None = None,
        enable_cross_os_archive: bool = False,
    ) -> int:
        """Upload the paths and return the new cache id, or -1 if nothing was saved."""
        ...
