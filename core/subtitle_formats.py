"""
Subtitle format handlers and data structures.

This module provides:
- Core data structures for subtitle cues and parse results
- Format-specific parsers for SRT, WebVTT and DFXP/TTML
- Markup and entity stripping shared by the parsers

Every parser exposes ``can_parse(content)`` and ``parse(content)``. Parsers
work on normalized text (see core.encoding_detection), never raise on
malformed input and drop structural units they cannot read.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.timing_utils import SRT_TIMING_LINE_PATTERN, TimeConverter
from utils.constants import SubtitleFormat, TIMING_ARROW, WEBVTT_HEADER, XML_ENTITIES
from utils.logging_config import get_logger

TAG_PATTERN = re.compile(r'<[^>]*>')
BLOCK_SEPARATOR_PATTERN = re.compile(r'\n\s*\n')
CUE_NUMBER_PATTERN = re.compile(r'\d+')
SRT_BLOCK_PATTERN = re.compile(r'\d+\s*\n' + SRT_TIMING_LINE_PATTERN.pattern)
DFXP_PARAGRAPH_PATTERN = re.compile(
    r'<p[^>]*begin="([^"]*)"[^>]*end="([^"]*)"[^>]*>(.*?)</p>',
    re.DOTALL
)
DFXP_SIGNATURES = ('<tt ', '<tt>', 'xmlns:tt', 'xmlns:tts')


@dataclass(frozen=True)
class SubtitleCue:
    """A single displayed subtitle unit. Times are milliseconds from stream origin."""
    index: int
    start_time: int
    end_time: int
    text: str
    settings: Optional[str] = None  # WebVTT cue settings, verbatim

    def duration(self) -> int:
        """Get the duration of this cue in milliseconds (negative when end precedes start)."""
        return self.end_time - self.start_time

    def format_time_range(self) -> str:
        """Format the time range as ``HH:MM:SS.mmm --> HH:MM:SS.mmm``."""
        start_str = TimeConverter.milliseconds_to_readable(self.start_time)
        end_str = TimeConverter.milliseconds_to_readable(self.end_time)
        return f"{start_str} --> {end_str}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON consumers; ``settings`` is omitted when absent."""
        data = {
            'index': self.index,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'text': self.text,
        }
        if self.settings is not None:
            data['settings'] = self.settings
        return data


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one subtitle document."""
    format: SubtitleFormat
    cues: Tuple[SubtitleCue, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Results are read-only once built
        object.__setattr__(self, 'cues', tuple(self.cues))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the result with its cues for JSON output."""
        return {
            'format': self.format.value,
            'cues': [cue.to_dict() for cue in self.cues],
            'metadata': dict(self.metadata),
        }


class SubtitleParser:
    """Base class for subtitle format parsers."""

    format = SubtitleFormat.UNKNOWN

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(__name__)

    def can_parse(self, content: str) -> bool:
        raise NotImplementedError

    def parse(self, content: str) -> List[SubtitleCue]:
        raise NotImplementedError

    @staticmethod
    def strip_tags(text: str) -> str:
        """Remove angle-bracket markup and surrounding whitespace."""
        return TAG_PATTERN.sub('', text).strip()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SRTParser(SubtitleParser):
    """Parser for SubRip (SRT) subtitles."""

    format = SubtitleFormat.SRT

    def can_parse(self, content: str) -> bool:
        """Check for a cue number line followed by a comma-millisecond timing line."""
        return SRT_BLOCK_PATTERN.search(content) is not None

    def parse(self, content: str) -> List[SubtitleCue]:
        """
        Parse SRT content into cues.

        Blocks are separated by blank lines. A block needs a numeric first
        line, a timing line and at least one text line; other blocks are
        skipped. The cue index is the number written in the file.

        Args:
            content: Normalized subtitle text

        Returns:
            Cues in source order
        """
        cues = []
        blocks = BLOCK_SEPARATOR_PATTERN.split(content.strip())

        for block_idx, block in enumerate(blocks):
            lines = block.strip().split('\n')
            if len(lines) < 3:
                self.logger.debug(f"Skipping SRT block {block_idx}: {len(lines)} line(s)")
                continue

            index_line = lines[0].strip()
            if not CUE_NUMBER_PATTERN.fullmatch(index_line):
                self.logger.debug(f"Skipping SRT block {block_idx}: invalid cue number {index_line!r}")
                continue

            time_line = lines[1].strip()
            try:
                start_ms, end_ms = TimeConverter.parse_srt_timing_line(time_line)
            except ValueError as e:
                self.logger.debug(f"Skipping SRT block {block_idx}: {e}")
                continue

            cues.append(SubtitleCue(
                index=int(index_line),
                start_time=start_ms,
                end_time=end_ms,
                text=self.strip_tags('\n'.join(lines[2:]))
            ))

        return cues


class VTTParser(SubtitleParser):
    """Parser for WebVTT subtitles."""

    format = SubtitleFormat.VTT

    def can_parse(self, content: str) -> bool:
        """WebVTT content must start with the WEBVTT header."""
        return content.strip().startswith(WEBVTT_HEADER)

    def parse(self, content: str) -> List[SubtitleCue]:
        """
        Parse WebVTT content into cues.

        Everything before the first timing line is header. Each timing line
        is followed by text lines up to the next blank line; cues without
        text are dropped. Indexes are assigned sequentially from 1.

        Args:
            content: Normalized subtitle text

        Returns:
            Cues in source order
        """
        cues = []
        lines = content.split('\n')
        i = 0

        while i < len(lines) and TIMING_ARROW not in lines[i]:
            i += 1

        while i < len(lines):
            line = lines[i].strip()

            if TIMING_ARROW in line:
                parts = line.split(TIMING_ARROW)
                if len(parts) != 2:
                    self.logger.debug(f"Skipping malformed WebVTT timing line: {line}")
                    i += 1
                    continue

                end_tokens = parts[1].split()
                end_part = end_tokens[0] if end_tokens else ''
                settings = ' '.join(end_tokens[1:]) or None

                start_ms = self._timestamp_to_ms(parts[0].strip())
                end_ms = self._timestamp_to_ms(end_part)

                i += 1
                text_lines = []
                while i < len(lines) and lines[i].strip() != '':
                    text_lines.append(lines[i])
                    i += 1

                if text_lines:
                    cues.append(SubtitleCue(
                        index=len(cues) + 1,
                        start_time=start_ms,
                        end_time=end_ms,
                        text=self.strip_tags('\n'.join(text_lines)),
                        settings=settings
                    ))
                else:
                    self.logger.debug(f"Dropping WebVTT cue without text: {line}")
            i += 1

        return cues

    def _timestamp_to_ms(self, timestamp: str) -> int:
        try:
            return TimeConverter.vtt_timestamp_to_ms(timestamp)
        except ValueError as e:
            self.logger.debug(f"{e}, using 0")
            return 0


class DFXPParser(SubtitleParser):
    """Parser for DFXP/TTML subtitles (Netflix style timed text)."""

    format = SubtitleFormat.DFXP

    def can_parse(self, content: str) -> bool:
        """DFXP is XML with a <tt> root or a TTML namespace declaration."""
        return any(signature in content for signature in DFXP_SIGNATURES)

    def parse(self, content: str) -> List[SubtitleCue]:
        """
        Parse DFXP/TTML content into cues.

        Only ``<p>`` elements whose ``begin`` attribute precedes their
        ``end`` attribute are read; this is a pattern scan rather than an XML
        parse, so malformed documents still yield whatever paragraphs match.
        Indexes are assigned sequentially from 1.

        Args:
            content: Normalized subtitle text

        Returns:
            Cues in source order
        """
        cues = []

        for match in DFXP_PARAGRAPH_PATTERN.finditer(content):
            begin, end, body = match.groups()
            cues.append(SubtitleCue(
                index=len(cues) + 1,
                start_time=self._timestamp_to_ms(begin),
                end_time=self._timestamp_to_ms(end),
                text=self.clean_body(body)
            ))

        return cues

    @staticmethod
    def clean_body(body: str) -> str:
        """Strip markup from a paragraph body and decode the predefined XML entities."""
        text = TAG_PATTERN.sub('', body)
        for entity, char in XML_ENTITIES:
            text = text.replace(entity, char)
        return text.strip()

    def _timestamp_to_ms(self, timestamp: str) -> int:
        try:
            return TimeConverter.dfxp_timestamp_to_ms(timestamp)
        except ValueError as e:
            self.logger.debug(f"{e}, using 0")
            return 0
