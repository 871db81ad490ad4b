r"""Half-jitter applied on top of a computed backoff delay."""

from __future__ import annotations

__all__ = ["JITTER_THRESHOLD", "apply_half_jitter"]

import random

# Delays at or below one millisecond are returned unchanged
JITTER_THRESHOLD = 0.001


def apply_half_jitter(delay: float) -> float:
    """Randomize a delay uniformly within ``[delay / 2, delay]``.

    A new value is drawn on every call.

    Args:
        delay: The computed delay in seconds.

    Returns:
        The jittered delay, or ``delay`` itself if it is not above
        ``JITTER_THRESHOLD``.

    Example:
        ```pycon
        >>> from mercury.backoff import apply_half_jitter
        >>> 1.0 <= apply_half_jitter(2.0) <= 2.0
        True
        >>> apply_half_jitter(0.0005)
        0.0005

        ```
    """
    if delay <= JITTER_THRESHOLD:
        return delay
    return random.uniform(delay / 2, delay)  # noqa: S311
