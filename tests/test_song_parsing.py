from __future__ import annotations

import math

import pytest

from ultrastar_lyrics.song.parse import (
    LyricsParser,
    ms_per_beat,
    parse_integer,
    parse_number,
    parse_ultrastar,
    parse_ultrastar_with_stats,
    split_limit,
)


def test_split_limit_keeps_remainder():
    assert split_limit(": 0 18 54 once told me", " ", 5) == [":", "0", "18", "54", "once told me"]
    assert split_limit("a b c", " ") == ["a", "b", "c"]
    assert split_limit("a b c", " ", 10) == ["a", "b", "c"]
    assert split_limit("a b c", " ", 1) == ["a b c"]


def test_split_limit_rejects_zero_parts():
    with pytest.raises(ValueError):
        split_limit("a b", " ", 0)


def test_number_prefixes():
    assert parse_number("500") == 500.0
    assert parse_number(" 12.5ms") == 12.5
    assert parse_number("-7") == -7.0
    assert math.isnan(parse_number("abc"))
    assert math.isnan(parse_number(""))
    assert parse_integer("54") == 54
    assert parse_integer("-3x") == -3
    assert math.isnan(parse_integer("x3"))


def test_ms_per_beat_zero_bpm_is_infinite():
    assert ms_per_beat(0.0) == math.inf
    assert ms_per_beat(37.5) == 400.0


def test_end_to_end(all_star):
    doc = LyricsParser(all_star).lyrics

    assert doc.metadata["title"] == "All Star"
    assert doc.metadata["artist"] == "Smash Mouth"
    assert doc.metadata["mp3"] == "05-All Star.mp3"
    assert doc.metadata["bpm"] == "104"
    assert doc.metadata["gap"] == "500"
    assert doc.title == "All Star"

    assert len(doc.sentences) == 2
    first, second = doc.sentences
    assert first.start == 500
    assert first.text == "Somebo"
    assert [(s.start, s.length, s.pitch, s.text) for s in first.syllables] == [
        (500, 2596, 54, "Some"),
        (1798, 1730, 61, "bo"),
    ]
    assert second.start == 3673
    assert second.text == "dy once told "
    assert second.syllables[1].text == "once told "
    assert len(doc.syllables) == 4


def test_timing_formula():
    doc = parse_ultrastar("#GAP:500\n#BPM:104\n: 0 18 54 Some\n-\n")
    syl = doc.sentences[0].syllables[0]
    assert syl.start == 500
    assert syl.length == 2596
    assert isinstance(syl.start, int)


def test_tag_case_insensitive():
    upper = parse_ultrastar("#BPM:120\n: 4 2 0 la\n-\n")
    lower = parse_ultrastar("#bpm:120\n: 4 2 0 la\n-\n")
    assert upper == lower
    assert "bpm" in upper.metadata


def test_bpm_comma_decimal_separator():
    doc = parse_ultrastar("#BPM:37,5\n: 3 2 0 x\n-\n")
    syl = doc.sentences[0].syllables[0]
    assert (syl.start, syl.length) == (1200, 800)
    assert doc.metadata["bpm"] == "37,5"


def test_negative_times_are_floored():
    doc = parse_ultrastar("#BPM:37.5\n#GAP:-250.5\n: 0 1 -4 x\n-\n")
    syl = doc.sentences[0].syllables[0]
    assert syl.start == -251
    assert syl.pitch == -4


def test_gap_and_bpm_apply_to_later_lines_only():
    doc = parse_ultrastar("#BPM:37.5\n: 1 1 0 a\n#GAP:1000\n: 1 1 0 b\n#BPM:75\n: 1 1 0 c\n-\n")
    assert [s.start for s in doc.sentences[0].syllables] == [400, 1400, 1200]


def test_multiple_sentences_in_order():
    doc = parse_ultrastar("#BPM:37.5\n: 0 1 0 a\n-\n: 2 1 0 b\n: 3 1 0 c\n-\n")
    assert [s.text for s in doc.sentences] == ["a", "bc"]
    assert [len(s.syllables) for s in doc.sentences] == [1, 2]
    assert doc.sentences[1].start == 800


def test_dangling_syllables_dropped():
    doc, stats = parse_ultrastar_with_stats("#BPM:37.5\n: 0 1 0 a\n-\n: 2 1 0 b\n: 3 1 0 c\n")
    assert len(doc.sentences) == 1
    assert doc.sentences[0].text == "a"
    assert stats.syllables_total == 3
    assert stats.syllables_dropped == 2


def test_terminator_without_syllables_emits_nothing():
    doc = parse_ultrastar("#BPM:37.5\n-\n- 12\n: 0 1 0 a\n-\n-\n")
    assert len(doc.sentences) == 1


def test_blank_lines_do_not_change_output(all_star):
    padded = "\n   \n" + all_star.replace("\n", "\n\t \n\n")
    assert parse_ultrastar(padded) == parse_ultrastar(all_star)


def test_crlf_and_leading_whitespace():
    doc = parse_ultrastar("#TITLE:Foo\r\n#BPM:37.5\r\n   : 0 1 0 x\r\n  -\r\n")
    assert doc.metadata["title"] == "Foo"
    assert doc.sentences[0].text == "x"


def test_metadata_value_split_on_first_colon_only():
    doc = parse_ultrastar("#MP3:C:/songs/a.mp3\n")
    assert doc.metadata["mp3"] == "C:/songs/a.mp3"


def test_metadata_without_colon():
    doc = parse_ultrastar("#NOCOLON\n")
    assert doc.metadata == {"nocolon": ""}


def test_unknown_lines_ignored():
    doc, stats = parse_ultrastar_with_stats("#BPM:37.5\n* 0 1 0 golden\nF 1 1 0 free\nE\n: 2 1 0 a\n-\n")
    assert [s.text for s in doc.sentences] == ["a"]
    assert stats.lines_ignored == 4  # 3 unknown + trailing empty line


def test_incomplete_syllable_line_ignored():
    doc, stats = parse_ultrastar_with_stats("#BPM:37.5\n: 0 4\n: 1 1 0 a\n-")
    assert [s.text for s in doc.sentences[0].syllables] == ["a"]
    assert stats.lines_ignored == 1


def test_empty_text_field_is_kept():
    doc = parse_ultrastar("#BPM:37.5\n: 0 1 0 \n: 1 1 0  \n-\n")
    assert [s.text for s in doc.sentences[0].syllables] == ["", " "]


def test_non_numeric_fields_become_nan():
    doc = parse_ultrastar("#BPM:37.5\n: a 2 x hi\n-\n")
    syl = doc.sentences[0].syllables[0]
    assert math.isnan(syl.start)
    assert syl.length == 800
    assert math.isnan(syl.pitch)
    assert syl.text == "hi"
    assert math.isnan(doc.sentences[0].start)


def test_syllables_before_bpm_are_degenerate():
    doc = parse_ultrastar("#GAP:100\n: 0 4 1 a\n: 2 4 1 b\n-\n")
    a, b = doc.sentences[0].syllables
    assert math.isnan(a.start)
    assert a.length == math.inf
    assert b.start == math.inf


def test_empty_input():
    doc, stats = parse_ultrastar_with_stats("")
    assert doc.sentences == ()
    assert doc.metadata == {}
    assert stats.lines_total == 1


class TestLyricsParser:
    def test_keeps_text_and_stats(self, all_star):
        parser = LyricsParser(all_star)
        assert parser.text == all_star
        assert parser.stats.sentences_total == 2
        assert parser.stats.metadata_total == 5

    def test_document_is_frozen(self, all_star):
        doc = LyricsParser(all_star).lyrics
        with pytest.raises(AttributeError):
            doc.sentences[0].start = 0  # type: ignore[misc]


def test_oversized_integers_become_infinite():
    doc = parse_ultrastar("#BPM:104\n: " + "9" * 400 + " 1 0 a\n: " + "9" * 5000 + " 1 " + "9" * 5000 + " b\n-\n")
    a, b = doc.sentences[0].syllables
    assert a.start == math.inf
    assert b.start == math.inf
    assert b.pitch == math.inf
    assert parse_integer("-" + "9" * 5000) == -math.inf


def test_negative_zero_bpm_keeps_sign():
    assert ms_per_beat(-0.0) == -math.inf
    doc = parse_ultrastar("#BPM:-0\n: 1 1 0 a\n-\n")
    assert doc.sentences[0].syllables[0].start == -math.inf
