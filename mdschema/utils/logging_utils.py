"""
Module-level logger access.

Every module obtains its logger with::

    from mdschema.utils.logging_utils import get_module_logger
    logger = get_module_logger(__name__)

The first call installs the handlers described by the environment, so
library use logs sensibly without an explicit setup call.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import logging

from mdschema.logging_config import LoggerManager, MetricsLogger


def get_module_logger(name: str) -> logging.Logger:
    """
    Return the logger for a module, setting up logging on first use.

    Args:
        name: Dotted module name, normally ``__name__``

    Returns:
        Logger instance
    """
    if not LoggerManager.is_setup():
        LoggerManager.setup_logging()
    return LoggerManager.get_logger(name)


def get_module_metrics(name: str) -> MetricsLogger:
    """Return a metrics logger sharing the module's logger."""
    return MetricsLogger(get_module_logger(name))


__all__ = [
    'get_module_logger',
    'get_module_metrics',
]
