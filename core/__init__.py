"""
Core subtitle parsing modules.

This package contains the fundamental components for subtitle parsing:
- Encoding normalization of raw subtitle bytes
- Advisory format detection
- Format parsers (SRT, WebVTT, DFXP/TTML)
- Timestamp conversion
- The parsing service with time-range and point queries
"""

from .subtitle_formats import SubtitleCue, ParseResult, SubtitleParser, SRTParser, VTTParser, DFXPParser
from .encoding_detection import EncodingNormalizer
from .format_detection import detect_format
from .timing_utils import TimeConverter
from .subtitle_service import SubtitleService, parse, get_cues_in_range, get_cue_at_time

__all__ = [
    'SubtitleCue',
    'ParseResult',
    'SubtitleParser',
    'SRTParser',
    'VTTParser',
    'DFXPParser',
    'EncodingNormalizer',
    'detect_format',
    'TimeConverter',
    'SubtitleService',
    'parse',
    'get_cues_in_range',
    'get_cue_at_time',
]
