#!/usr/bin/env python3
"""
Tests for the parsing service: parser selection, result packaging and
time queries.
"""

import dataclasses
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

import core
from core.subtitle_formats import DFXPParser, ParseResult, SRTParser, SubtitleCue, VTTParser
from core.subtitle_service import SubtitleService
from utils.constants import SubtitleFormat

SRT_SCENARIO = "1\n00:00:01,000 --> 00:00:02,500\nHello world\n\n2\n00:00:03,000 --> 00:00:04,000\nGoodbye"
VTT_SCENARIO = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000 align:start\nHi\n"
DFXP_SCENARIO = (
    '<tt xmlns:tt="http://www.w3.org/ns/ttml"><body><div>'
    '<p begin="00:00:01.000" end="00:00:02:05">Hi &amp; bye</p>'
    '</div></body></tt>'
)


@pytest.fixture
def service():
    return SubtitleService(logger=MagicMock())


def test_srt_scenario(service):
    result = service.parse(SRT_SCENARIO)

    assert result.format is SubtitleFormat.SRT
    assert result.cues == (
        SubtitleCue(index=1, start_time=1000, end_time=2500, text="Hello world"),
        SubtitleCue(index=2, start_time=3000, end_time=4000, text="Goodbye"),
    )
    assert result.metadata["totalCues"] == "2"
    assert datetime.fromisoformat(result.metadata["parsedAt"]).tzinfo is not None
    assert "error" not in result.metadata


def test_vtt_scenario(service):
    result = service.parse(VTT_SCENARIO)

    assert result.format is SubtitleFormat.VTT
    assert result.cues == (
        SubtitleCue(index=1, start_time=1000, end_time=2000, text="Hi", settings="align:start"),
    )


def test_dfxp_scenario(service):
    result = service.parse(DFXP_SCENARIO)

    assert result.format is SubtitleFormat.DFXP
    assert len(result.cues) == 1
    cue = result.cues[0]
    assert (cue.index, cue.start_time, cue.end_time, cue.text) == (1, 1000, 2050, "Hi & bye")


def test_webvtt_input_always_uses_vtt_parser(service):
    content = (
        "WEBVTT\n\n"
        "00:00:01.000 --> 00:00:02.000\n"
        "mentions <tt xmlns:tt=\"x\"> markup\n\n"
        "1\n00:00:03,000 --> 00:00:04,000\n"
        "srt looking text\n"
    )

    assert isinstance(service.select_parser(content), VTTParser)
    result = service.parse(content)

    assert result.format is SubtitleFormat.VTT
    assert [cue.index for cue in result.cues] == [1, 2]
    assert result.cues[0].start_time == 1000
    assert result.cues[1].text == "srt looking text"


def test_bytes_with_bom_and_crlf(service):
    data = b"\xef\xbb\xbf1\r\n00:00:01,000 --> 00:00:02,500\r\nHello\r\n\r\n"

    result = service.parse(data)

    assert result.format is SubtitleFormat.SRT
    assert result.cues == (SubtitleCue(index=1, start_time=1000, end_time=2500, text="Hello"),)


def test_invalid_bytes_do_not_raise(service):
    result = service.parse(b"1\n00:00:01,000 --> 00:00:02,000\n\xff\xfeHi\n")

    assert result.cues[0].text == "\ufffd\ufffdHi"


@pytest.mark.parametrize("data", ["", b"", "   \n\n", "just some words"])
def test_unparseable_input(service, data):
    result = service.parse(data)

    assert result.format is SubtitleFormat.UNKNOWN
    assert result.cues == ()
    assert result.metadata == {"error": "Unable to parse subtitle format"}


def test_advisory_label_can_differ_from_parser(service):
    # <tt> without a namespace is accepted by the DFXP parser but not classified
    content = '<tt>\n<p begin="00:00:01.000" end="00:00:02.000">Untagged</p>\n</tt>'

    assert isinstance(service.select_parser(content), DFXPParser)
    result = service.parse(content)

    assert result.format is SubtitleFormat.UNKNOWN
    assert [cue.text for cue in result.cues] == ["Untagged"]
    assert result.metadata["totalCues"] == "1"
    assert "error" not in result.metadata


def test_recognized_format_with_no_cues(service):
    result = service.parse("WEBVTT\n\nNOTE nothing here\n")

    assert result.format is SubtitleFormat.VTT
    assert result.cues == ()
    assert result.metadata["totalCues"] == "0"


def test_result_is_immutable(service):
    result = service.parse(SRT_SCENARIO)

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.format = SubtitleFormat.VTT
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.cues[0].text = "changed"
    with pytest.raises(TypeError):
        result.metadata["totalCues"] = "999"
    with pytest.raises(TypeError):
        del result.metadata["parsedAt"]

    assert result.metadata["totalCues"] == "2"


def test_result_copies_caller_metadata():
    metadata = {"totalCues": "0"}
    result = ParseResult(format=SubtitleFormat.SRT, cues=[], metadata=metadata)

    metadata["totalCues"] = "999"

    assert result.metadata == {"totalCues": "0"}
    assert result.cues == ()
    assert result.to_dict()["metadata"] == {"totalCues": "0"}


def test_default_parser_order():
    assert [type(parser) for parser in SubtitleService().parsers] == [VTTParser, DFXPParser, SRTParser]


def test_custom_parsers():
    service = SubtitleService(parsers=[SRTParser()], logger=MagicMock())

    result = service.parse(VTT_SCENARIO)

    assert result.format is SubtitleFormat.UNKNOWN
    assert "error" in result.metadata


def test_injected_logger_receives_diagnostics():
    logger = MagicMock()
    service = SubtitleService(logger=logger)

    service.parse(SRT_SCENARIO)
    logger.info.assert_called()

    service.parse("nothing recognizable")
    logger.warning.assert_called_once()


def test_get_cues_in_range_full_window(service):
    content = (
        "1\n00:00:10,000 --> 00:00:11,000\nLate\n\n"
        "2\n00:00:01,000 --> 00:00:02,000\nEarly\n"
    )
    result = service.parse(content)

    assert service.get_cues_in_range(result, 0, sys.maxsize) == list(result.cues)
    assert [cue.text for cue in service.get_cues_in_range(result, 0, sys.maxsize)] == ["Late", "Early"]


def test_get_cues_in_range_boundaries(service):
    result = service.parse(SRT_SCENARIO)

    assert [cue.index for cue in service.get_cues_in_range(result, 2500, 2999)] == [1]
    assert [cue.index for cue in service.get_cues_in_range(result, 2000, 3000)] == [1, 2]
    assert service.get_cues_in_range(result, 2600, 2900) == []


def test_get_cue_at_time(service):
    result = service.parse(SRT_SCENARIO)

    assert service.get_cue_at_time(result, 1000).index == 1
    assert service.get_cue_at_time(result, 2500).index == 1
    assert service.get_cue_at_time(result, 4000).index == 2
    assert service.get_cue_at_time(result, 2700) is None
    assert service.get_cue_at_time(result, 999_999) is None


def test_get_cue_at_time_prefers_first_stored_cue(service):
    content = (
        "WEBVTT\n\n"
        "00:00:00.000 --> 00:00:05.000\nLong\n\n"
        "00:00:01.000 --> 00:00:02.000\nShort\n"
    )
    result = service.parse(content)

    assert service.get_cue_at_time(result, 1500).text == "Long"


def test_module_level_functions():
    result = core.parse(SRT_SCENARIO)

    assert result.format is SubtitleFormat.SRT
    assert core.get_cue_at_time(result, 3500).text == "Goodbye"
    assert len(core.get_cues_in_range(result, 0, 10_000)) == 2


def test_result_to_dict(service):
    payload = service.parse(VTT_SCENARIO).to_dict()

    assert payload["format"] == "vtt"
    assert payload["cues"] == [
        {"index": 1, "startTime": 1000, "endTime": 2000, "text": "Hi", "settings": "align:start"}
    ]
    assert payload["metadata"]["totalCues"] == "1"
