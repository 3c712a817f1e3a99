"""Utility decorators for common functionality."""

import functools
import time
from typing import Callable, Any
from utils.logging import get_logger

logger = get_logger(__name__)


def timer(func: Callable) -> Callable:
    """Decorator to time function execution and log results."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            logger.info(f"{func.__name__} took {time.perf_counter() - start:.4f} seconds")
    return wrapper
