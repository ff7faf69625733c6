"""
Time conversion utilities for subtitle processing.

This module provides functions for:
- Parsing SRT, WebVTT and DFXP/TTML timestamps into milliseconds
- Parsing SRT timing lines into start/end pairs
- Formatting milliseconds as readable timestamps
"""

import re
from typing import Tuple

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000

# Milliseconds assigned to one DFXP frame, independent of the actual frame rate
DFXP_FRAME_MS = 10

SRT_TIMESTAMP = r'(\d{2}):(\d{2}):(\d{2}),(\d{3})'
SRT_TIMING_LINE_PATTERN = re.compile(SRT_TIMESTAMP + r'\s*-->\s*' + SRT_TIMESTAMP)
VTT_TIMESTAMP_PATTERN = re.compile(r'(\d{1,2}:)?(\d{2}):(\d{2})\.(\d{3})')
DFXP_TIMESTAMP_PATTERN = re.compile(r'(\d{2}):(\d{2}):(\d{2})[:.](\d{2,3})')
READABLE_TIMESTAMP_PATTERN = re.compile(r'^(?:(\d+):)?(\d{1,2}):(\d{2})(?:[.,](\d{1,3}))?$')


class TimeConverter:
    """Handles timestamp grammars used by the supported subtitle formats."""

    @staticmethod
    def to_milliseconds(hours: int, minutes: int, seconds: int, milliseconds: int) -> int:
        """Combine clock components into a millisecond offset."""
        return (hours * MS_PER_HOUR + minutes * MS_PER_MINUTE
                + seconds * MS_PER_SECOND + milliseconds)

    @staticmethod
    def parse_srt_timing_line(time_line: str) -> Tuple[int, int]:
        """
        Parse an SRT timing line into start and end milliseconds.

        Args:
            time_line: Line such as ``00:00:01,000 --> 00:00:02,500``

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            ValueError: If the line holds no comma-millisecond timestamp range

        Example:
            >>> TimeConverter.parse_srt_timing_line("00:01:02,003 --> 00:01:03,000")
            (62003, 63000)
        """
        match = SRT_TIMING_LINE_PATTERN.search(time_line)
        if not match:
            raise ValueError(f"Invalid SRT timing line: {time_line}")

        values = [int(group) for group in match.groups()]
        start = TimeConverter.to_milliseconds(*values[:4])
        end = TimeConverter.to_milliseconds(*values[4:])
        return start, end

    @staticmethod
    def vtt_timestamp_to_ms(timestamp: str) -> int:
        """
        Convert a WebVTT timestamp to milliseconds.

        Both ``HH:MM:SS.mmm`` and ``MM:SS.mmm`` are accepted; hours default to 0.

        Args:
            timestamp: Timestamp text, possibly surrounded by other characters

        Returns:
            Time in milliseconds

        Raises:
            ValueError: If no WebVTT timestamp is found

        Example:
            >>> TimeConverter.vtt_timestamp_to_ms("01:02.003")
            62003
        """
        match = VTT_TIMESTAMP_PATTERN.search(timestamp)
        if not match:
            raise ValueError(f"Invalid WebVTT timestamp: {timestamp}")

        hours_part, minutes, seconds, milliseconds = match.groups()
        hours = int(hours_part.rstrip(':')) if hours_part else 0
        return TimeConverter.to_milliseconds(hours, int(minutes), int(seconds), int(milliseconds))

    @staticmethod
    def dfxp_timestamp_to_ms(timestamp: str) -> int:
        """
        Convert a DFXP/TTML clock-time to milliseconds.

        ``HH:MM:SS.mmm`` uses the three-digit fraction as milliseconds.
        ``HH:MM:SS:FF`` treats the two-digit fraction as a frame count and
        multiplies it by DFXP_FRAME_MS. This is an approximation that ignores
        the document frame rate.

        Args:
            timestamp: Value of a ``begin`` or ``end`` attribute

        Returns:
            Time in milliseconds

        Raises:
            ValueError: If the value is not a supported clock-time

        Example:
            >>> TimeConverter.dfxp_timestamp_to_ms("00:01:02:05")
            62050
        """
        match = DFXP_TIMESTAMP_PATTERN.search(timestamp)
        if not match:
            raise ValueError(f"Invalid DFXP timestamp: {timestamp}")

        hours, minutes, seconds, fraction = match.groups()
        if len(fraction) == 2:
            fraction_ms = int(fraction) * DFXP_FRAME_MS
        else:
            fraction_ms = int(fraction)
        return TimeConverter.to_milliseconds(int(hours), int(minutes), int(seconds), fraction_ms)

    @staticmethod
    def parse_time_argument(value: str) -> int:
        """
        Parse a user supplied time into milliseconds.

        Accepts a plain integer (milliseconds) or ``[HH:]MM:SS[.mmm]`` with
        either a dot or a comma before the fraction.

        Raises:
            ValueError: If the value cannot be interpreted

        Example:
            >>> TimeConverter.parse_time_argument("1:02.5")
            62500
        """
        value = value.strip()
        if re.fullmatch(r'-?\d+', value):
            return int(value)

        match = READABLE_TIMESTAMP_PATTERN.match(value)
        if not match:
            raise ValueError(f"Invalid time format: {value}")

        hours, minutes, seconds, fraction = match.groups()
        fraction_ms = int(fraction.ljust(3, '0')) if fraction else 0
        return TimeConverter.to_milliseconds(int(hours or 0), int(minutes), int(seconds), fraction_ms)

    @staticmethod
    def milliseconds_to_readable(ms: int) -> str:
        """
        Convert milliseconds to readable format (HH:MM:SS.mmm).

        Args:
            ms: Time in milliseconds

        Returns:
            Readable time string

        Example:
            >>> TimeConverter.milliseconds_to_readable(3825678)
            '01:03:45.678'
        """
        sign = '-' if ms < 0 else ''
        ms = abs(ms)
        hours = ms // MS_PER_HOUR
        ms %= MS_PER_HOUR
        minutes = ms // MS_PER_MINUTE
        ms %= MS_PER_MINUTE
        seconds = ms // MS_PER_SECOND
        milliseconds = ms % MS_PER_SECOND
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"
