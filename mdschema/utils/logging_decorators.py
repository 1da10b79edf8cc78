"""
Decorators that bring logging into entry points and pipeline operations.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import os
import time
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from mdschema.logging_config import LoggerManager


F = TypeVar('F', bound=Callable[..., Any])


def configure_logging(
    log_level: Optional[str] = None,
    structured: bool = False,
    context_fields: Optional[Dict[str, Any]] = None
) -> Callable[[F], F]:
    """
    Decorator for ``main`` functions of command line entry points.

    Reinstalls the handlers with the given settings, binds the entry point
    name and process id as log context, and logs how long the run took.
    Options parsed later (``--log-level``) can still adjust the level through
    ``LoggerManager.set_level``.

    Args:
        log_level: Initial level (defaults to LOG_LEVEL or INFO)
        structured: Force JSON output (LOG_FORMAT=json also enables it)
        context_fields: Extra fields bound to every record of the run

    Returns:
        Decorated function

    Example:
        @configure_logging()
        def main(argv=None):
            ...
    """
    def decorator(func: F) -> F:
        entry_point = func.__module__.rsplit('.', 1)[-1]

        @wraps(func)
        def wrapper(*args, **kwargs):
            LoggerManager.setup_logging(
                log_level=log_level,
                structured=True if structured else None,
                context_fields={'entry_point': entry_point, 'pid': os.getpid(), **(context_fields or {})},
                force=True
            )
            logger = LoggerManager.get_logger(func.__module__)

            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logger.debug(f"{entry_point} finished in {time.perf_counter() - started:.2f}s")

        return cast(F, wrapper)
    return decorator


def with_operation_logging(
    operation_name: Optional[str] = None,
    count_label: Optional[str] = None
) -> Callable[[F], F]:
    """
    Decorator that runs a function inside an OperationLogger scope.

    Args:
        operation_name: Name used in log records (defaults to the function name)
        count_label: When given, the length of the result is logged under
            this label (e.g. ``tables`` for a schema)

    Returns:
        Decorated function
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            with LoggerManager.create_operation_logger(name) as operation:
                result = func(*args, **kwargs)
                if count_label is not None:
                    operation.log_metric(count_label, len(result))
                return result

        return cast(F, wrapper)
    return decorator


__all__ = [
    'configure_logging',
    'with_operation_logging',
]
