"""Port interfaces."""

from .cache import CacheEntryPort, DeleteOutcome, RemoteEntryRef
from .clock import ClockPort
from .logger import LoggerPort
from .saver import CacheSaverPort
from .state import CACHE_MATCHED_KEY, CACHE_PRIMARY_KEY, StatePort

__all__ = [
    "CACHE_MATCHED_KEY",
    "CACHE_PRIMARY_KEY",
    "CacheEntryPort",
    "CacheSaverPort",
    "ClockPort",
    "DeleteOutcome",
    "LoggerPort",
    "RemoteEntryRef",
    "StatePort",
]
