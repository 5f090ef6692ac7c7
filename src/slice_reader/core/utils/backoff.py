import math
import random
from enum import Enum


class BackoffStrategy(str, Enum):
    FIXED = "fixed"
    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"


def get_backoff_delay(
    attempt: int,
    base: float = 1.0,
    max_seconds: float = 10.0,
    jitter: float = 0.0,
    strategy: BackoffStrategy = BackoffStrategy.FIXED,
) -> float:
    """
    Returns the delay in seconds before the next activation poll.

    Parameters:
    - attempt (int): The number of polls already made.
    - base (float): The base delay time in seconds.
    - max_seconds (float): The maximum delay.
    - jitter (float): Random jitter as a fraction (e.g., 0.2 = ±20%).
    - strategy (BackoffStrategy): The backoff curve to apply.

    Returns:
    - float: The delay in seconds.
    """
    if strategy == BackoffStrategy.FIXED:
        delay = base
    elif strategy == BackoffStrategy.EXPONENTIAL:
        delay = base * (2**attempt)
    elif strategy == BackoffStrategy.LINEAR:
        delay = base + (attempt * base)
    elif strategy == BackoffStrategy.LOGARITHMIC:
        delay = base * math.log2(attempt + 2)
    else:
        raise ValueError(f"Unsupported backoff strategy: {strategy}")

    delay = min(delay, max_seconds)
    if jitter:
        delay *= random.uniform(1 - jitter, 1 + jitter)
    return delay
