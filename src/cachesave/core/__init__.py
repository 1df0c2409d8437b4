"""Core domain logic."""

from .config import CacheSaveSettings, SaveConfig
from .errors import CacheSaveError, CacheValidationError, ConfigurationError, RemoteError
from .models import (
    NO_OP_CACHE_ID,
    Action,
    Decision,
    DeleteOutcome,
    Eligibility,
    RemoteEntryRef,
    SaveContext,
    SaveSummary,
    UploadOptions,
)
from .service import SaveService

__all__ = [
    "NO_OP_CACHE_ID",
    "Action",
    "CacheSaveError",
    "CacheSaveSettings",
    "CacheValidationError",
    "ConfigurationError",
    "Decision",
    "DeleteOutcome",
    "Eligibility",
    "RemoteEntryRef",
    "RemoteError",
    "SaveConfig",
    "SaveContext",
    "SaveService",
    "SaveSummary",
    "UploadOptions",
]
