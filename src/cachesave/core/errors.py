"""Core domain errors."""


class CacheSaveError(Exception):
    """Base error for cache save operations."""


class ConfigurationError(CacheSaveError):
    """Workflow inputs or environment are malformed."""


class RemoteError(CacheSaveError):
    """The remote cache service rejected a request or could not be reached."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class CacheValidationError(CacheSaveError):
    """Cache key or paths cannot be saved."""
