#!/usr/bin/env python3
"""Tests for the command-line interface."""

import io
import json
import logging
import sys
from pathlib import Path

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from ui.cli import CLIHandler, setup_cli_logging

SRT_CONTENT = "1\n00:00:01,000 --> 00:00:02,500\nHello world\n\n2\n00:00:03,000 --> 00:00:04,000\nGoodbye\n"
VTT_CONTENT = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000 align:start\n<v Ann>Hi</v>\n"
DFXP_CONTENT = '<tt xmlns:tt="http://www.w3.org/ns/ttml"><p begin="00:00:01.000" end="00:00:02:05">Hi</p></tt>'


def run_cli(*argv):
    output = io.StringIO()
    handler = CLIHandler(output=output)
    args = handler.create_parser().parse_args(["--no-colors", *argv])
    exit_code = handler.handle_command(args)
    return exit_code, output.getvalue()


@pytest.fixture
def srt_file(tmp_path):
    path = tmp_path / "episode.srt"
    path.write_text(SRT_CONTENT, encoding="utf-8")
    return path


def test_parse_json(srt_file):
    exit_code, output = run_cli("parse", str(srt_file), "--json")

    payload = json.loads(output)
    assert exit_code == 0
    assert payload["format"] == "srt"
    assert payload["cues"][0] == {"index": 1, "startTime": 1000, "endTime": 2500, "text": "Hello world"}
    assert payload["metadata"]["totalCues"] == "2"


def test_parse_table_shows_settings(tmp_path):
    path = tmp_path / "episode.vtt"
    path.write_text(VTT_CONTENT, encoding="utf-8")

    exit_code, output = run_cli("parse", str(path))

    assert exit_code == 0
    assert "Format: vtt" in output
    assert "00:00:01.000 --> 00:00:02.000  [align:start]" in output
    assert "Hi" in output


def test_detect(tmp_path):
    path = tmp_path / "episode.xml"
    path.write_text(DFXP_CONTENT, encoding="utf-8")

    exit_code, output = run_cli("detect", str(path))

    assert exit_code == 0
    assert "Detected format: dfxp" in output
    assert "Parser: DFXPParser" in output


def test_at_with_clock_time(srt_file):
    exit_code, output = run_cli("at", str(srt_file), "00:00:03.500", "--json")

    assert exit_code == 0
    assert json.loads(output)["text"] == "Goodbye"


def test_at_without_active_cue(srt_file):
    exit_code, output = run_cli("at", str(srt_file), "2700")

    assert exit_code == 1
    assert output == ""


def test_range(srt_file):
    exit_code, output = run_cli("range", str(srt_file), "0", "2000", "--json")

    assert exit_code == 0
    assert [cue["index"] for cue in json.loads(output)] == [1]


def test_invalid_time_argument(srt_file):
    with pytest.raises(SystemExit):
        run_cli("at", str(srt_file), "later")


def test_missing_file(tmp_path):
    exit_code, _ = run_cli("parse", str(tmp_path / "missing.srt"))

    assert exit_code == 1


def test_file_over_size_limit(srt_file):
    exit_code, _ = run_cli("--max-size", "10", "parse", str(srt_file))

    assert exit_code == 1


def test_unrecognized_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("nothing to see", encoding="utf-8")

    exit_code, output = run_cli("parse", str(path))

    assert exit_code == 1
    assert output == ""


def test_no_command():
    exit_code, _ = run_cli()

    assert exit_code == 1


def test_cli_logging_levels_and_single_handler():
    logger = setup_cli_logging(debug=True, use_colors=False)
    assert logger.level == logging.DEBUG

    logger = setup_cli_logging(use_colors=False)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr
