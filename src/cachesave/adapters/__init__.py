"""Adapters implementing the ports."""

from .clock_utc import UtcClockAdapter
from .environment import is_ghes, load_context, set_output
from .github_cache import GitHubCacheEntryAdapter
from .logger_std import StdLoggerAdapter, WorkflowCommandFormatter
from .s3_saver import S3CacheSaverAdapter
from .state_env import EnvStateProvider, NullStateProvider

__all__ = [
    "EnvStateProvider",
    "GitHubCacheEntryAdapter",
    "NullStateProvider",
    "S3CacheSaverAdapter",
    "StdLoggerAdapter",
    "UtcClockAdapter",
    "WorkflowCommandFormatter",
    "is_ghes",
    "load_context",
    "set_output",
]
