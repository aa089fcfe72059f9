"""
Retry utilities for resilient database operations.

Provides a retry decorator with exponential backoff and jitter.
"""

import functools
import logging
import random
import time
from typing import Callable, Tuple, Type

from ..domain.exceptions import DatabaseConnectionError, DatabaseTimeoutError


logger = logging.getLogger(__name__)


def retry_on_exception(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Tuple[Type[Exception], ...] = (DatabaseConnectionError, DatabaseTimeoutError),
    sleep: Callable[[float], None] = time.sleep,
) -> Callable:
    """
    Decorator for retrying functions on specific exceptions.

    Implements exponential backoff with optional jitter. Exceptions that
    carry ``retryable = False`` are re-raised immediately.

    Args:
        max_retries: Maximum number of retry attempts (0 disables retrying)
        initial_delay: Initial delay between retries (seconds)
        max_delay: Maximum delay between retries (seconds)
        exponential_base: Base for exponential backoff
        jitter: Whether to add random jitter to delays
        exceptions: Tuple of exception types to retry on
        sleep: Function used to wait between attempts

    Returns:
        Decorated function

    Example:
        @retry_on_exception(max_retries=2, initial_delay=0.2)
        def commit():
            # Retried up to twice on connection errors
            pass
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if hasattr(e, "retryable") and not e.retryable:
                        logger.warning(f"{func.__name__}: Non-retryable error: {e}")
                        raise

                    if attempt < max_retries:
                        delay = min(initial_delay * (exponential_base ** attempt), max_delay)

                        # Add jitter to prevent thundering herd
                        if jitter:
                            delay = delay * (0.5 + random.random())

                        logger.warning(
                            f"{func.__name__}: Attempt {attempt + 1}/{max_retries + 1} failed: {e}. "
                            f"Retrying in {delay:.2f}s..."
                        )
                        sleep(delay)
                    else:
                        logger.error(
                            f"{func.__name__}: All {max_retries + 1} attempts failed. Last error: {e}"
                        )

            raise last_exception

        return wrapper
    return decorator
