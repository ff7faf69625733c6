"""
Advisory subtitle format detection.

detect_format() labels normalized content by signature. The label is
reported in ParseResult.format and is computed independently of the parser
predicates, so on ambiguous input it can name a different format than the
parser that produced the cues.
"""

import re

from core.timing_utils import SRT_TIMESTAMP
from utils.constants import SubtitleFormat, WEBVTT_HEADER

SRT_SIGNATURE_PATTERN = re.compile(r'\d+\s*\n' + SRT_TIMESTAMP + r'\s*-->\s*' + SRT_TIMESTAMP)


def detect_format(content: str) -> SubtitleFormat:
    """
    Classify subtitle content. The first matching signature wins.

    Args:
        content: Normalized subtitle text

    Returns:
        SubtitleFormat label, UNKNOWN when no signature matches
    """
    if content.strip().startswith(WEBVTT_HEADER):
        return SubtitleFormat.VTT
    if '<tt ' in content or 'xmlns:tt' in content:
        return SubtitleFormat.DFXP
    if SRT_SIGNATURE_PATTERN.search(content):
        return SubtitleFormat.SRT
    return SubtitleFormat.UNKNOWN
