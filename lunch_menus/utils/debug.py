from functools import wraps
import inspect
import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


def debug_log(action: str, details: Any = None, timing: bool = False) -> Callable:
    """Decorator for debug logging of coroutine functions

    Args:
        action: The action being performed
        details: Additional details to log
        timing: Whether to log execution time
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"debug_log expects a coroutine function, got {func.__name__}")

        @wraps(func)
        async def wrapper(*args, **kwargs):
            if not logger.isEnabledFor(logging.DEBUG):
                return await func(*args, **kwargs)

            start_time = time.monotonic()
            logger.debug("DEBUG: %s - Start (%s.%s) %s",
                         action, func.__module__, func.__name__, details or '')

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.debug("DEBUG: %s - Error after %.2f ms: %s",
                             action, (time.monotonic() - start_time) * 1000, e)
                raise

            if timing:
                logger.debug("DEBUG: %s - Complete in %.2f ms",
                             action, (time.monotonic() - start_time) * 1000)
            else:
                logger.debug("DEBUG: %s - Complete", action)
            return result

        return wrapper
    return decorator
