"""
Command-line interface for the Subtitle Cue Engine.

This module provides CLI commands for inspecting subtitle files:
parsing, format detection and time-based cue lookup.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from core.encoding_detection import EncodingNormalizer
from core.format_detection import detect_format
from core.subtitle_formats import ParseResult, SubtitleCue
from core.subtitle_service import SubtitleService
from core.timing_utils import TimeConverter
from utils.constants import APP_NAME, APP_VERSION, APP_DESCRIPTION, METADATA_ERROR, SubtitleFormat
from utils.file_operations import DEFAULT_MAX_FILE_SIZE, FileHandler
from utils.logging_config import setup_logging

logger = logging.getLogger("subcue")


def setup_cli_logging(verbose: bool = False, debug: bool = False, use_colors: bool = True) -> logging.Logger:
    """Set up logging for CLI operations."""
    global logger

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = setup_logging(level=level, use_colors=use_colors)
    return logger


def _time_argument(value: str) -> int:
    """argparse type for millisecond or clock-time arguments."""
    try:
        return TimeConverter.parse_time_argument(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


class CLIHandler:
    """Handles command-line interface operations."""

    def __init__(self, output: Optional[TextIO] = None):
        """
        Initialize the CLI handler.

        Args:
            output: Stream for command output (stdout when omitted)
        """
        self.output = output or sys.stdout
        self.service = SubtitleService()

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog='subcue',
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Show every cue
  subcue parse episode.srt

  # Machine readable output
  subcue parse episode.vtt --json

  # Which cue is on screen at 1m02.5s?
  subcue at episode.dfxp 00:01:02.500

  # Cues between 10s and 20s
  subcue range episode.srt 10000 20000
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--no-colors', action='store_true', help='Disable colored log output')
        parser.add_argument('--detect-encoding', action='store_true',
                            help='Detect the encoding of non UTF-8 files instead of replacing invalid bytes')
        parser.add_argument('--max-size', type=int, default=DEFAULT_MAX_FILE_SIZE,
                            help=f'Maximum input file size in bytes (default: {DEFAULT_MAX_FILE_SIZE})')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_parse_parser(subparsers)
        self._add_detect_parser(subparsers)
        self._add_at_parser(subparsers)
        self._add_range_parser(subparsers)

        return parser

    def _add_parse_parser(self, subparsers):
        """Add parse command parser."""
        parse_parser = subparsers.add_parser(
            'parse',
            help='Parse a subtitle file and list its cues',
            description='Parse SRT, WebVTT or DFXP/TTML subtitles into cues'
        )
        parse_parser.add_argument('input', type=Path, help='Subtitle file')
        parse_parser.add_argument('--json', action='store_true', help='Print the result as JSON')

    def _add_detect_parser(self, subparsers):
        """Add detect command parser."""
        detect_parser = subparsers.add_parser(
            'detect',
            help='Detect the subtitle format of a file',
            description='Print the detected format and the parser that would be used'
        )
        detect_parser.add_argument('input', type=Path, help='Subtitle file')

    def _add_at_parser(self, subparsers):
        """Add at command parser."""
        at_parser = subparsers.add_parser(
            'at',
            help='Show the cue displayed at a point in time',
            description='TIME is milliseconds or [HH:]MM:SS[.mmm]'
        )
        at_parser.add_argument('input', type=Path, help='Subtitle file')
        at_parser.add_argument('time', type=_time_argument, help='Point in time')
        at_parser.add_argument('--json', action='store_true', help='Print the cue as JSON')

    def _add_range_parser(self, subparsers):
        """Add range command parser."""
        range_parser = subparsers.add_parser(
            'range',
            help='Show cues overlapping a time window',
            description='START and END are milliseconds or [HH:]MM:SS[.mmm]'
        )
        range_parser.add_argument('input', type=Path, help='Subtitle file')
        range_parser.add_argument('start', type=_time_argument, help='Window start')
        range_parser.add_argument('end', type=_time_argument, help='Window end')
        range_parser.add_argument('--json', action='store_true', help='Print the cues as JSON')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug, use_colors=not args.no_colors)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        self.service = SubtitleService(
            logger=logger,
            normalizer=EncodingNormalizer(detect_encoding=args.detect_encoding, logger=logger)
        )

        try:
            data = FileHandler.read_subtitle_bytes(args.input, max_size=args.max_size)
        except (FileNotFoundError, IOError) as e:
            logger.error(str(e))
            return 1

        if args.command == 'parse':
            return self._handle_parse(args, data)
        elif args.command == 'detect':
            return self._handle_detect(args, data)
        elif args.command == 'at':
            return self._handle_at(args, data)
        elif args.command == 'range':
            return self._handle_range(args, data)

        logger.error(f"Unknown command: {args.command}")
        return 1

    def _parse_or_report(self, args, data: bytes) -> Optional[ParseResult]:
        """Parse file contents, logging and returning None when no parser accepts them."""
        result = self.service.parse(data)
        if METADATA_ERROR in result.metadata:
            logger.error(f"{args.input}: {result.metadata[METADATA_ERROR]}")
            return None
        return result

    def _handle_parse(self, args, data: bytes) -> int:
        """Handle parse command."""
        result = self._parse_or_report(args, data)
        if result is None:
            return 1

        if args.json:
            self._write_json(result.to_dict())
            return 0

        self._write(f"Format: {result.format.value}")
        self._write(f"Cues: {len(result.cues)}")
        self._write_cues(result.cues)
        return 0

    def _handle_detect(self, args, data: bytes) -> int:
        """Handle detect command."""
        content = self.service.normalizer.normalize(data)
        detected = detect_format(content)
        parser = self.service.select_parser(content)

        self._write(f"Detected format: {detected.value}")
        self._write(f"Extension suggests: {SubtitleFormat.from_extension(args.input.suffix).value}")
        self._write(f"Parser: {type(parser).__name__ if parser else 'none'}")
        return 0 if parser else 1

    def _handle_at(self, args, data: bytes) -> int:
        """Handle at command."""
        result = self._parse_or_report(args, data)
        if result is None:
            return 1

        cue = self.service.get_cue_at_time(result, args.time)
        if cue is None:
            logger.warning(f"No cue at {TimeConverter.milliseconds_to_readable(args.time)}")
            return 1

        if args.json:
            self._write_json(cue.to_dict())
        else:
            self._write_cues([cue])
        return 0

    def _handle_range(self, args, data: bytes) -> int:
        """Handle range command."""
        result = self._parse_or_report(args, data)
        if result is None:
            return 1

        cues = self.service.get_cues_in_range(result, args.start, args.end)
        if args.json:
            self._write_json([cue.to_dict() for cue in cues])
        else:
            self._write_cues(cues)
        return 0

    def _write_cues(self, cues: Iterable[SubtitleCue]) -> None:
        for cue in cues:
            settings = f"  [{cue.settings}]" if cue.settings else ""
            self._write(f"{cue.index:>5}  {cue.format_time_range()}{settings}")
            for line in cue.text.split('\n'):
                self._write(f"       {line}")

    def _write_json(self, payload) -> None:
        self._write(json.dumps(payload, ensure_ascii=False, indent=2))

    def _write(self, text: str) -> None:
        print(text, file=self.output)
