"""Run state adapters."""

import os
from collections.abc import Mapping

from ..ports.state import CACHE_MATCHED_KEY


class EnvStateProvider:
    """State saved by the restore step, exposed by the runner as ``STATE_<name>``."""

    def __init__(self, env: Mapping[str, str] | None = None):
        self.env = os.environ if env is None else env

    def get_state(self, name: str) -> str:
        return self.env.get(f"STATE_{name}", "")

    def get_cache_state(self) -> str | None:
        return self.get_state(CACHE_MATCHED_KEY) or None


class NullStateProvider:
    """State for a standalone save, where no restore ran."""

    def get_state(self, name: str) -> str:
        return ""

    def get_cache_state(self) -> str | None:
        return None
