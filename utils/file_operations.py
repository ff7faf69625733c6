"""
File operations for subtitle input.

This module provides safe file reading for the command-line front end:
- Existence and type checks with clear errors
- An upper bound on input size so parsing latency stays bounded
"""

from pathlib import Path
from typing import Optional
from .constants import SUBTITLE_EXTENSIONS
from .logging_config import get_logger

logger = get_logger(__name__)

# Files larger than this are rejected before parsing (50 MB)
DEFAULT_MAX_FILE_SIZE: int = 50 * 1024 * 1024


class FileHandler:
    """Handles file operations with proper error handling and logging."""

    @staticmethod
    def read_subtitle_bytes(file_path: Path,
                            max_size: Optional[int] = DEFAULT_MAX_FILE_SIZE) -> bytes:
        """
        Read the raw bytes of a subtitle file.

        Args:
            file_path: Path to the subtitle file
            max_size: Maximum accepted size in bytes (None disables the check)

        Returns:
            File contents as bytes

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If the file is too large or cannot be read

        Example:
            >>> data = FileHandler.read_subtitle_bytes(Path("episode.vtt"))
            >>> print(f"Read {len(data)} bytes")
        """
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        size = file_path.stat().st_size
        if max_size is not None and size > max_size:
            raise IOError(f"File too large: {file_path} ({size} bytes, limit {max_size})")

        if file_path.suffix.lower() not in SUBTITLE_EXTENSIONS:
            logger.debug(f"Unexpected extension {file_path.suffix!r}, relying on content detection")

        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise IOError(f"Cannot read subtitle file: {e}")

        logger.debug(f"Read {len(data)} bytes from {file_path.name}")
        return data
