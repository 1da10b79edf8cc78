"""
Logging setup for the mdschema conversion pipeline.

Console output is coloured when stderr is a terminal, or JSON lines when
``LOG_FORMAT=json``. A rotating log file is added only when
``LOG_ENABLE_FILE=true``. Fields bound with ``LogContext`` (the document
being loaded, the entry point, the process id) travel with every record
emitted inside the scope.

Classes:
    ColoredFormatter: Level-coloured terminal formatter
    StructuredFormatter: JSON formatter carrying context and metrics
    LogContext: Scoped context fields
    MetricsLogger: Counters and durations for pipeline stages
    LoggerManager: Process-wide handler setup
    OperationLogger: Timed operation scope

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import contextvars
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pythonjsonlogger import jsonlogger
from mdschema.config import LogConfig

# Marks handlers installed here so reconfiguration leaves foreign handlers alone
HANDLER_MARKER = "_mdschema_handler"

log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('log_context', default={})


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI colour on terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, stream=None):
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_color = hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_color or color is None:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class StructuredFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that merges the active LogContext into each record."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(log_context.get())

        log_record['timestamp'] = self.formatTime(record)
        log_record['level'] = record.levelname
        log_record['logger_name'] = record.name
        log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"

        metrics = getattr(record, 'metrics', None)
        if metrics is not None:
            log_record['metrics'] = metrics

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        if not log_record.get('message'):
            log_record['message'] = record.getMessage()


class LogContext:
    """Bind fields to every log record emitted inside a ``with`` block.

    Example:
        with LogContext(document="crew.md"):
            logger.info("Loaded")  # carries document="crew.md"
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token = None

    def __enter__(self):
        self.token = log_context.set({**log_context.get(), **self.fields})
        return self

    def __exit__(self, *exc_info):
        if self.token is not None:
            log_context.reset(self.token)
            self.token = None


class MetricsLogger:
    """Emit pipeline metrics as regular log records with a ``metrics`` payload."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def record_count(self, metric_name: str, count: int, **extra_fields) -> None:
        """Record a count, e.g. rows emitted for one table."""
        self.logger.debug(
            f"Metric {metric_name}={count}",
            extra={"metrics": {"metric_name": metric_name, "count": count, **extra_fields}}
        )

    def record_duration(self, operation: str, seconds: float, success: bool = True, **extra_fields) -> None:
        """Record how long an operation took."""
        self.logger.debug(
            f"Operation {operation} took {seconds * 1000:.1f} ms",
            extra={"metrics": {
                "operation": operation,
                "duration_ms": round(seconds * 1000, 2),
                "success": success,
                **extra_fields
            }}
        )


class LoggerManager:
    """Owns the root handlers installed for mdschema."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized: bool = False

    @classmethod
    def setup_logging(
        cls,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        enable_console: Optional[bool] = None,
        enable_file: Optional[bool] = None,
        format_string: Optional[str] = None,
        date_format: Optional[str] = None,
        structured: Optional[bool] = None,
        context_fields: Optional[Dict[str, Any]] = None,
        force: bool = False
    ) -> None:
        """
        Install console and file handlers on the root logger.

        Every argument left as None is taken from ``LogConfig.get_config()``,
        so environment variables decide unless the caller overrides them.

        Args:
            log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
            log_file: Path of the rotating log file
            enable_console: Log to stderr
            enable_file: Log to ``log_file``
            format_string: Format for text output
            date_format: Date format for text output
            structured: Emit JSON lines instead of text
            context_fields: Fields bound to every record from now on
            force: Reinstall handlers even when already set up
        """
        if cls._initialized and not force:
            return

        config = LogConfig.get_config()
        settings = {
            'log_level': log_level,
            'log_file': log_file,
            'enable_console': enable_console,
            'enable_file': enable_file,
            'log_format': format_string,
            'date_format': date_format,
            'structured': structured,
        }
        for key, value in settings.items():
            if value is None:
                settings[key] = config[key]

        if context_fields:
            log_context.set(dict(context_fields))

        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if getattr(handler, HANDLER_MARKER, False):
                root_logger.removeHandler(handler)
                handler.close()

        if settings['enable_console']:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(
                StructuredFormatter() if settings['structured']
                else ColoredFormatter(settings['log_format'], settings['date_format'], sys.stderr)
            )
            cls._install(root_logger, console_handler)

        if settings['enable_file']:
            log_path = Path(settings['log_file'])
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                str(log_path),
                maxBytes=config['max_bytes'],
                backupCount=config['backup_count'],
                encoding='utf-8'
            )
            file_handler.setFormatter(
                StructuredFormatter() if settings['structured']
                else logging.Formatter(settings['log_format'], settings['date_format'])
            )
            cls._install(root_logger, file_handler)

        cls._initialized = True
        cls.set_level(settings['log_level'])

    @staticmethod
    def _install(root_logger: logging.Logger, handler: logging.Handler) -> None:
        setattr(handler, HANDLER_MARKER, True)
        root_logger.addHandler(handler)

    @classmethod
    def set_level(cls, log_level: str) -> None:
        """Change the level of the root logger and of the mdschema handlers."""
        level = getattr(logging, str(log_level).upper(), logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            if getattr(handler, HANDLER_MARKER, False):
                handler.setLevel(level)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)
        return cls._loggers[name]

    @classmethod
    def create_operation_logger(cls, operation_name: str, **context) -> 'OperationLogger':
        """Create a timed scope for one pipeline operation."""
        return OperationLogger(operation_name, **context)

    @classmethod
    def is_setup(cls) -> bool:
        return cls._initialized


class OperationLogger:
    """Time an operation, bind its name as context, and log the outcome.

    Exceptions are logged and re-raised, never suppressed.
    """

    def __init__(self, operation_name: str, **context):
        self.operation_name = operation_name
        self.logger = LoggerManager.get_logger(__name__)
        self.metrics = MetricsLogger(self.logger)
        self.context = LogContext(operation=operation_name, **context)
        self.started: Optional[float] = None
        self.success = False

    def __enter__(self):
        self.context.__enter__()
        self.started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.started
        try:
            if exc_type is None:
                self.success = True
                self.metrics.record_duration(self.operation_name, elapsed)
            else:
                self.logger.error(f"{self.operation_name} failed: {exc_type.__name__}: {exc_val}")
                self.metrics.record_duration(
                    self.operation_name, elapsed, success=False, error_type=exc_type.__name__
                )
        finally:
            self.context.__exit__(exc_type, exc_val, exc_tb)
        return False

    def log_metric(self, name: str, value: Union[int, float], unit: Optional[str] = None) -> None:
        """Attach a named value to this operation, e.g. the number of tables built."""
        suffix = f" {unit}" if unit else ""
        self.logger.info(
            f"{self.operation_name}: {name}={value}{suffix}",
            extra={"metrics": {"operation": self.operation_name, "name": name, "value": value, "unit": unit}}
        )


def setup_logging(**kwargs) -> None:
    LoggerManager.setup_logging(**kwargs)


def get_logger(name: str) -> logging.Logger:
    return LoggerManager.get_logger(name)


__all__ = [
    'ColoredFormatter',
    'StructuredFormatter',
    'LogContext',
    'MetricsLogger',
    'LoggerManager',
    'OperationLogger',
    'setup_logging',
    'get_logger',
]
