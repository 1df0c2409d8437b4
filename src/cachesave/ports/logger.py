"""Logger port interface."""

from typing import Any, Protocol


class LoggerPort(Protocol):
    """Port for human readable run logs with optional structured fields."""

    def debug(self, message: str, **kwargs: Any) -> None: ...

    def info(self, message: str, **kwargs: Any) -> None: ...

    def warning(self, message: str, **kwargs: Any) -> None: ...

    def error(self, message: str, **kwargs: Any) -> None: ...
