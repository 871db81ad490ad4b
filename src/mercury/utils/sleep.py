r"""Blocking backoff wait that can be cancelled from another thread."""

from __future__ import annotations

__all__ = ["interruptible_sleep"]

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import threading

logger: logging.Logger = logging.getLogger(__name__)


def interruptible_sleep(delay: float, cancel_event: threading.Event | None = None) -> bool:
    """Block the calling thread for ``delay`` seconds.

    Args:
        delay: The wait duration in seconds. Non-positive delays return
            immediately.
        cancel_event: Optional event that aborts the wait when set. The
            event is never cleared here.

    Returns:
        ``True`` if the full delay elapsed, ``False`` if the wait was
        cancelled (or the event was already set).

    Example:
        ```pycon
        >>> import threading
        >>> from mercury.utils import interruptible_sleep
        >>> interruptible_sleep(0.0)
        True
        >>> event = threading.Event()
        >>> event.set()
        >>> interruptible_sleep(5.0, event)
        False

        ```
    """
    if cancel_event is not None and cancel_event.is_set():
        return False
    if delay <= 0:
        return True
    if cancel_event is None:
        time.sleep(delay)
        return True
    if cancel_event.wait(delay):
        logger.debug(f"Backoff wait of {delay:.3f}s was cancelled")
        return False
    return True
