"""Build the run context from the workflow environment."""

import os
from collections.abc import Mapping
from urllib.parse import urlparse

from ..core.models import SaveContext
from ..ports.state import CACHE_PRIMARY_KEY, StatePort


def is_ghes(server_url: str | None) -> bool:
    """Whether the run is on GitHub Enterprise Server rather than github.com."""
    hostname = (urlparse(server_url or "https://github.com").hostname or "").upper()
    return not (
        hostname == "GITHUB.COM" or hostname.endswith(".GHE.COM") or hostname.endswith(".LOCALHOST")
    )


def load_context(
    state: StatePort,
    *,
    feature_available: bool,
    env: Mapping[str, str] | None = None,
) -> SaveContext:
    env = os.environ if env is None else env
    return SaveContext(
        state_primary_key=state.get_state(CACHE_PRIMARY_KEY) or None,
        restored_key=state.get_cache_state(),
        ref=env.get("GITHUB_REF") or None,
        event_name=env.get("GITHUB_EVENT_NAME") or None,
        repository=env.get("GITHUB_REPOSITORY") or None,
        token=env.get("GITHUB_TOKEN") or None,
        feature_available=feature_available,
        is_ghes=is_ghes(env.get("GITHUB_SERVER_URL")),
    )


def set_output(name: str, value: object, env: Mapping[str, str] | None = None) -> bool:
    """Append a step output to the runner's ``GITHUB_OUTPUT`` file, if there is one."""
    env = os.environ if env is None else env
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        return False
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True
