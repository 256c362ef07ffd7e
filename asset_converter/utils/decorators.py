"""Decorators for timing and logging upstream calls."""
import functools
import inspect
import time
from typing import Callable

from asset_converter.utils.logging import get_logger

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def log_execution(log_args: bool = True, log_result: bool = False):
    """
    Log a call's start and duration at debug level, and its failure at error level.

    Works on coroutine functions and plain functions alike. Exceptions are
    re-raised unchanged.

    Example:
        @log_execution(log_args=False)
        async def fetch(self):
            ...
    """
    def decorator(func: Callable):
        name = func.__qualname__

        def started(args, kwargs) -> float:
            extra = {"function": name}
            if log_args:
                extra["call_args"] = f"{args!r} {kwargs!r}"[:200]
            logger.debug(f"Calling {name}", extra=extra)
            return time.perf_counter()

        def finished(start: float, result) -> None:
            extra = {"function": name, "execution_time_ms": _elapsed_ms(start)}
            if log_result:
                extra["result"] = repr(result)[:200]
            logger.debug(f"{name} finished", extra=extra)

        def failed(start: float, error: Exception) -> None:
            logger.error(
                f"{name} raised {type(error).__name__}",
                extra={"function": name, "execution_time_ms": _elapsed_ms(start), "error": str(error)},
            )

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = started(args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    failed(start, e)
                    raise
                finished(start, result)
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = started(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                failed(start, e)
                raise
            finished(start, result)
            return result

        return wrapper

    return decorator
