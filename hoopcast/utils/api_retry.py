"""Retry decorator with exponential backoff for collaborator reads."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type

from rich.console import Console

logger = logging.getLogger(__name__)

_console = Console(stderr=True)


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    silent: bool = False,
) -> Callable:
    """Decorator to retry a function with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay in seconds (default: 10.0)
        exponential_base: Base for exponential backoff (default: 2.0)
        exceptions: Tuple of exception types to catch (default: all exceptions)
        silent: If True, only log retries instead of printing them (default: False)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_with_backoff(max_retries=2, exceptions=(OSError,))
        def load_table():
            return read_rows(path)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            last_exception: Optional[Exception] = None

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt == max_retries:
                        logger.error(f"{func.__name__} failed after {max_retries + 1} attempts: {e}")
                        if not silent:
                            _console.print(
                                f"[red]✗[/red] {func.__name__} failed after {max_retries + 1} attempts: {e}"
                            )
                        raise

                    delay = min(base_delay * (exponential_base**attempt), max_delay)

                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt + 1}/{max_retries + 1}), "
                        f"retrying in {delay:.1f}s ({type(e).__name__}: {e})"
                    )
                    if not silent:
                        _console.print(
                            f"[yellow]⚠[/yellow] {func.__name__} failed (attempt {attempt + 1}/{max_retries + 1}), "
                            f"retrying in {delay:.1f}s... ({type(e).__name__})"
                        )

                    time.sleep(delay)

            if last_exception:
                raise last_exception
            return None

        return wrapper

    return decorator
