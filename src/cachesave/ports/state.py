"""Run state port interface."""

from typing import Protocol

# State names written by the restore step.
CACHE_PRIMARY_KEY = "CACHE_KEY"
CACHE_MATCHED_KEY = "CACHE_RESULT"


class StatePort(Protocol):
    """Port for state recorded earlier in the same run."""

    def get_state(self, name: str) -> str:
        """Return the recorded value, or an empty string."""
        ...

    def get_cache_state(self) -> str | None:
        """Return the key matched during restore, if any."""
        ...
