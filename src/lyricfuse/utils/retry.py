"""Retry utility with exponential backoff for external calls."""

import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

# Default retry settings
DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_DELAY = 1.0  # seconds
DEFAULT_MAX_DELAY = 30.0  # seconds
DEFAULT_BACKOFF_FACTOR = 2.0


def retry_call(
    func: Callable[..., T],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    sleep_fn: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """
    Execute a function, retrying with exponential backoff.

    Args:
        func: Function to execute
        *args: Positional arguments for the function
        max_retries: Maximum number of retry attempts after the first call
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        backoff_factor: Multiplier for delay after each retry
        exceptions: Exception types that trigger a retry
        sleep_fn: Sleep function, replaceable in tests
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function call

    Raises:
        The last exception if all retries fail
    """
    last_exception: Optional[Exception] = None
    delay = base_delay

    for attempt in range(max_retries + 1):
        try:
            return func(*args, **kwargs)
        except exceptions as e:
            last_exception = e

            if attempt < max_retries:
                logger.debug(
                    f"Retry {attempt + 1}/{max_retries} for {_name(func)}: {e}"
                )
                sleep_fn(delay)
                delay = min(delay * backoff_factor, max_delay)
            else:
                logger.debug(
                    f"All {max_retries} retries exhausted for {_name(func)}: {e}"
                )

    if last_exception:
        raise last_exception

    raise RuntimeError("Unexpected state in retry logic")


def _name(func: Callable[..., Any]) -> str:
    return getattr(func, "__name__", repr(func))
