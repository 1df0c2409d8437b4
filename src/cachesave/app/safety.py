"""Process-wide fault barrier.

The upload transport runs transfers on worker threads. A failed upload can
close a file those threads are still reading, and the resulting error surfaces
after the save pipeline has already returned. Such failures are reported as
warnings instead of tracebacks.
"""

import sys
import threading
from typing import Any

from ..ports import LoggerPort

_installed = False


def install_fault_barrier(logger: LoggerPort) -> bool:
    """Install the hooks once per process. Returns False if already installed."""
    global _installed
    if _installed:
        return False

    def thread_hook(args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        logger.warning(_describe(args.exc_value, args.exc_type))

    def unraisable_hook(unraisable: Any) -> None:
        logger.warning(_describe(unraisable.exc_value, unraisable.exc_type))

    threading.excepthook = thread_hook
    sys.unraisablehook = unraisable_hook
    _installed = True
    return True


def _describe(exc: BaseException | None, exc_type: type[BaseException]) -> str:
    message = str(exc) if exc is not None else ""
    return message or exc_type.__name__
