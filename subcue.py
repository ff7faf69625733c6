#!/usr/bin/env python3
"""
Subtitle Cue Engine - Main Application Entry Point
==================================================

Parses SRT, WebVTT and DFXP/TTML subtitle files into time-indexed cues and
answers point-in-time and time-range queries over them.

Usage:
    python subcue.py parse episode.srt
    python subcue.py parse episode.vtt --json
    python subcue.py detect episode.dfxp
    python subcue.py at episode.srt 00:01:02.500
    python subcue.py range episode.srt 10000 20000

    # Help
    python subcue.py --help
    python subcue.py <command> --help
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from ui.cli import CLIHandler


def main():
    """
    Main application entry point.

    Parses the command line and dispatches to the CLI handler.
    """
    debug_mode = '--debug' in sys.argv or '-d' in sys.argv

    cli_handler = CLIHandler()
    cli_parser = cli_handler.create_parser()

    try:
        args = cli_parser.parse_args()
        exit_code = cli_handler.handle_command(args)
        sys.exit(exit_code)
    except SystemExit:
        # argparse calls sys.exit() for --help, --version, etc.
        raise
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if debug_mode:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
