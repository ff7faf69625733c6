"""
Utility modules.

This package contains shared utility functions and configurations:
- File reading with size limits
- Logging configuration
- Shared constants and configurations
"""

from .file_operations import FileHandler
from .logging_config import setup_logging, get_logger
from .constants import (
    SubtitleFormat,
    SUBTITLE_EXTENSIONS,
    UTF8_BOM,
    UNICODE_BOM,
    DEFAULT_ENCODING,
    XML_ENTITIES,
    UNPARSEABLE_ERROR_MESSAGE,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'FileHandler',
    'setup_logging',
    'get_logger',
    'SubtitleFormat',
    'SUBTITLE_EXTENSIONS',
    'UTF8_BOM',
    'UNICODE_BOM',
    'DEFAULT_ENCODING',
    'XML_ENTITIES',
    'UNPARSEABLE_ERROR_MESSAGE',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
