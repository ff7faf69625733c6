"""
Subtitle parsing service.

SubtitleService normalizes input, labels its format, runs the first parser
that accepts it and answers time queries over the result. Parser order is
fixed: WebVTT (most specific signature), DFXP, then SRT (most lenient).

The module-level parse(), get_cues_in_range() and get_cue_at_time() use a
default service built once at import time. Parsers hold no mutable state, so
the service can be shared between threads without locking.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from core.encoding_detection import EncodingNormalizer, SubtitleInput
from core.format_detection import detect_format
from core.subtitle_formats import (
    DFXPParser,
    ParseResult,
    SRTParser,
    SubtitleCue,
    SubtitleParser,
    VTTParser,
)
from utils.constants import (
    METADATA_ERROR,
    METADATA_PARSED_AT,
    METADATA_TOTAL_CUES,
    SubtitleFormat,
    UNPARSEABLE_ERROR_MESSAGE,
)
from utils.logging_config import get_logger


class SubtitleService:
    """Parses subtitle documents and queries their cues by time."""

    def __init__(self, parsers: Optional[Iterable[SubtitleParser]] = None,
                 logger: Optional[logging.Logger] = None,
                 normalizer: Optional[EncodingNormalizer] = None):
        """
        Initialize the service.

        Args:
            parsers: Parsers to try, in order (WebVTT, DFXP, SRT when omitted)
            logger: Logger used by the service and its default collaborators
            normalizer: Input normalizer (UTF-8 with replacement when omitted)
        """
        self.logger = logger or get_logger(__name__)
        if parsers is None:
            parsers = (VTTParser(self.logger), DFXPParser(self.logger), SRTParser(self.logger))
        self._parsers: Tuple[SubtitleParser, ...] = tuple(parsers)
        self.normalizer = normalizer or EncodingNormalizer(logger=self.logger)

    @property
    def parsers(self) -> Tuple[SubtitleParser, ...]:
        """Parsers in the order they are tried."""
        return self._parsers

    def select_parser(self, content: str) -> Optional[SubtitleParser]:
        """
        Return the first parser whose predicate accepts the content.

        Args:
            content: Normalized subtitle text

        Returns:
            Matching parser, or None when no parser accepts the content
        """
        for parser in self._parsers:
            if parser.can_parse(content):
                return parser
        return None

    def parse(self, data: SubtitleInput) -> ParseResult:
        """
        Parse a subtitle document.

        The reported format is the advisory label from detect_format(), which
        is computed separately from parser selection and can differ from the
        parser that produced the cues on ambiguous input.

        Args:
            data: Subtitle text or raw bytes

        Returns:
            ParseResult; when no parser accepts the input the format is
            UNKNOWN, there are no cues and metadata carries an ``error`` entry

        Example:
            >>> result = SubtitleService().parse("WEBVTT\\n\\n00:01.000 --> 00:02.000\\nHi\\n")
            >>> result.format, len(result.cues)
            (<SubtitleFormat.VTT: 'vtt'>, 1)
        """
        content = self.normalizer.normalize(data)
        format_label = detect_format(content)

        parser = self.select_parser(content)
        if parser is None:
            self.logger.warning(f"No parser accepted input ({len(content)} characters)")
            return ParseResult(
                format=SubtitleFormat.UNKNOWN,
                cues=(),
                metadata={METADATA_ERROR: UNPARSEABLE_ERROR_MESSAGE}
            )

        cues = tuple(parser.parse(content))
        if parser.format is not format_label:
            self.logger.debug(
                f"Detected format {format_label.value} differs from parser {parser.format.value}"
            )
        self.logger.info(f"Parsed {len(cues)} cues with {type(parser).__name__}")

        return ParseResult(
            format=format_label,
            cues=cues,
            metadata={
                METADATA_TOTAL_CUES: str(len(cues)),
                METADATA_PARSED_AT: datetime.now(timezone.utc).isoformat(),
            }
        )

    @staticmethod
    def get_cues_in_range(result: ParseResult, start_ms: int, end_ms: int) -> List[SubtitleCue]:
        """
        Get cues overlapping a time window, in stored order.

        A cue overlaps when it starts at or before ``end_ms`` and ends at or
        after ``start_ms``.
        """
        return [cue for cue in result.cues
                if cue.start_time <= end_ms and cue.end_time >= start_ms]

    @staticmethod
    def get_cue_at_time(result: ParseResult, time_ms: int) -> Optional[SubtitleCue]:
        """
        Get the cue shown at a point in time.

        When several cues cover ``time_ms`` the first one in stored order
        wins, not the one closest in time.

        Returns:
            Active cue or None
        """
        for cue in result.cues:
            if cue.start_time <= time_ms <= cue.end_time:
                return cue
        return None


default_service = SubtitleService()


def parse(data: SubtitleInput) -> ParseResult:
    """Parse subtitle text or bytes with the default service."""
    return default_service.parse(data)


def get_cues_in_range(result: ParseResult, start_ms: int, end_ms: int) -> List[SubtitleCue]:
    """Get cues overlapping ``[start_ms, end_ms]`` in stored order."""
    return SubtitleService.get_cues_in_range(result, start_ms, end_ms)


def get_cue_at_time(result: ParseResult, time_ms: int) -> Optional[SubtitleCue]:
    """Get the first stored cue active at ``time_ms``."""
    return SubtitleService.get_cue_at_time(result, time_ms)
