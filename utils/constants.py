"""
Shared constants and configurations for the subtitle cue engine.

This module contains all the constants used across different modules including:
- Supported subtitle formats and extensions
- Encoding and byte-order mark handling
- Markup and entity tables used when cleaning cue text
- Logging and application metadata
"""

from enum import Enum
from typing import Dict, List, Set, Tuple

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

class SubtitleFormat(Enum):
    """Subtitle formats recognized by the engine."""
    SRT = "srt"
    VTT = "vtt"
    DFXP = "dfxp"
    UNKNOWN = "unknown"

    @classmethod
    def from_extension(cls, ext: str) -> 'SubtitleFormat':
        """
        Get format from file extension.

        Args:
            ext: File extension (with or without dot)

        Returns:
            SubtitleFormat enum value, UNKNOWN for unrecognized extensions
        """
        ext = ext.lower().lstrip('.')
        return EXTENSION_FORMAT_MAP.get(ext, cls.UNKNOWN)


EXTENSION_FORMAT_MAP: Dict[str, SubtitleFormat] = {
    'srt': SubtitleFormat.SRT,
    'vtt': SubtitleFormat.VTT,
    'dfxp': SubtitleFormat.DFXP,
    'ttml': SubtitleFormat.DFXP,
    'xml': SubtitleFormat.DFXP,
}

# Supported subtitle file extensions
SUBTITLE_EXTENSIONS: Set[str] = {'.srt', '.vtt', '.dfxp', '.ttml', '.xml'}

# ============================================================================
# ENCODING CONSTANTS
# ============================================================================

# UTF-8 BOM marker
UTF8_BOM: bytes = b"\xef\xbb\xbf"

# BOM as it appears after decoding
UNICODE_BOM: str = "\ufeff"

# Encoding used for byte input unless detection is enabled
DEFAULT_ENCODING: str = "utf-8"

# ============================================================================
# TEXT CLEANING CONSTANTS
# ============================================================================

# The five predefined XML entities, decoded in this order
XML_ENTITIES: List[Tuple[str, str]] = [
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&amp;', '&'),
    ('&quot;', '"'),
    ('&apos;', "'"),
]

# Header token every WebVTT file starts with
WEBVTT_HEADER: str = "WEBVTT"

# Separator between start and end timestamps in SRT/VTT timing lines
TIMING_ARROW: str = "-->"

# ============================================================================
# PARSE RESULT CONSTANTS
# ============================================================================

METADATA_TOTAL_CUES: str = "totalCues"
METADATA_PARSED_AT: str = "parsedAt"
METADATA_ERROR: str = "error"

UNPARSEABLE_ERROR_MESSAGE: str = "Unable to parse subtitle format"

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

# Default log format
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "Subtitle Cue Engine"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = """
Parse SRT, WebVTT and DFXP/TTML subtitle files into time-indexed cues:
- Automatic format detection
- Byte-order mark and line ending normalization
- Markup and XML entity stripping
- Point-in-time and time-range cue lookup
"""
