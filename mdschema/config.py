"""
Configuration module for the mdschema conversion system.

This module centralizes configuration values, paths, and defaults used
throughout the application. Deployment-specific settings are read from
environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any

from mdschema.exceptions import InvalidConfigurationException

# Base paths
LOGS_DIR = Path(os.environ.get("MDSCHEMA_LOGS_DIR", Path.cwd() / "logs"))


# Logging configuration
class LogConfig:
    """Logging configuration."""
    LOG_FILE = LOGS_DIR / "mdschema.log"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LEVEL = "INFO"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5

    @classmethod
    def get_config(cls) -> Dict[str, Any]:
        """Return logging settings merged with environment overrides."""
        return {
            'log_level': os.environ.get("LOG_LEVEL", cls.DEFAULT_LEVEL),
            'log_file': cls.LOG_FILE,
            'log_format': cls.LOG_FORMAT,
            'date_format': cls.LOG_DATE_FORMAT,
            'enable_console': os.environ.get("LOG_DISABLE_CONSOLE", "").lower() != "true",
            # File logging is opt-in so library use never writes into the caller's cwd
            'enable_file': os.environ.get("LOG_ENABLE_FILE", "").lower() == "true",
            'max_bytes': cls.MAX_BYTES,
            'backup_count': cls.BACKUP_COUNT,
            'structured': os.environ.get("LOG_FORMAT") == "json",
        }


# Schema generation
class SchemaConfig:
    """Defaults for the schema generation pipeline."""
    DEFAULT_UNIQUE_DEPTH = 0
    DECLARATION_BASE_CLASS = "MDSchemaRecord"

    @staticmethod
    def get_unique_depth() -> int:
        """Get the default unique depth, honouring MDSCHEMA_UNIQUE_DEPTH."""
        raw = os.environ.get("MDSCHEMA_UNIQUE_DEPTH")
        if raw is None or raw.strip() == "":
            return SchemaConfig.DEFAULT_UNIQUE_DEPTH
        try:
            value = int(raw)
        except ValueError:
            raise InvalidConfigurationException(
                "MDSCHEMA_UNIQUE_DEPTH", f"expected an integer, got '{raw}'"
            )
        if value < 0:
            raise InvalidConfigurationException(
                "MDSCHEMA_UNIQUE_DEPTH", "must not be negative"
            )
        return value


# Build options
class BuildOptions:
    """Command-line options."""
    LOG_LEVEL_CHOICES = ["debug", "info", "warning", "error"]
    FORMAT_CHOICES = ["md", "json", "sql", "ts", "py"]
