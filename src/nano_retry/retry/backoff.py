"""
Backoff delay calculation.
"""

import math
import random

JITTER_RATIO = 0.25


def calculate_backoff(
    attempt: int,
    base_delay: float,
    max_delay: float,
    factor: float,
    jitter: bool,
) -> float:
    """
    Calculate the delay that follows a failed attempt.

    Args:
        attempt: One-based number of the attempt that just failed
        base_delay: Delay after the first attempt, in seconds
        max_delay: Cap applied before jitter, in seconds
        factor: Exponential growth factor
        jitter: Spread the capped delay uniformly over ±25%

    Returns:
        Delay in seconds, rounded to the millisecond
    """
    try:
        delay = base_delay * factor ** (attempt - 1)
    except OverflowError:
        delay = max_delay

    # Apply max delay cap
    delay = min(delay, max_delay)

    if jitter and math.isfinite(delay):
        spread = delay * JITTER_RATIO
        delay = delay - spread + random.uniform(0, 2 * spread)

    return round(delay, 3)
