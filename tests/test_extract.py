"""Tests for extract.py -- .osu metadata extraction."""

from pathlib import Path

import pytest

from osu_mapset_organizer.extract import (
    MISSING_AUDIO,
    extract_metadata,
    next_section,
    parse_lines,
)
from osu_mapset_organizer.models import Section

SAMPLE_OSU = """\
osu file format v14

[General]
AudioFilename: audio.mp3
AudioLeadIn: 0
PreviewTime: 41322

[Metadata]
Title:Foo
TitleUnicode:Foo
Artist:Bar
ArtistUnicode:Bar
Creator:someone
Version:Hard
Source:
Tags:tag1 tag2

[Events]
//Background and Video events
0,0,"bg.jpg",0,0
//Break Periods

[TimingPoints]
1000,333.33,4,2,1,60,1,0
"""


def _lines(text: str) -> list[str]:
    return text.splitlines(keepends=True)


class TestNextSection:
    def test_events_header_enters_events(self):
        assert next_section("[Events]\n", Section.OUTSIDE) == Section.EVENTS

    def test_other_header_leaves_events(self):
        assert next_section("[TimingPoints]", Section.EVENTS) == Section.OUTSIDE

    def test_plain_line_keeps_state(self):
        assert next_section("0,0,\"bg.jpg\",0,0", Section.EVENTS) == Section.EVENTS
        assert next_section("Title:x", Section.OUTSIDE) == Section.OUTSIDE

    def test_crlf_header(self):
        assert next_section("[Events]\r\n", Section.OUTSIDE) == Section.EVENTS


class TestParseLines:
    def test_full_sample(self):
        meta = parse_lines(_lines(SAMPLE_OSU), Path("diff.osu"))
        assert meta.source_path == Path("diff.osu")
        assert meta.audio_filename == "audio.mp3"
        assert meta.title == "Foo"
        assert meta.artist == "Bar"
        assert meta.version == "Hard"
        assert meta.background_filename == "bg.jpg"

    def test_unicode_keys_do_not_clobber(self):
        text = "Title:Plain\nTitleUnicode:Other\nArtist:A\nArtistUnicode:B\n"
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.title == "Plain"
        assert meta.artist == "A"

    def test_last_title_wins(self):
        text = "Title:First\nTitle:Second\nTitle:  Third  \n"
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.title == "Third"

    def test_last_audio_wins(self):
        text = "AudioFilename: a.mp3\nAudioFilename:b.ogg\n"
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.audio_filename == "b.ogg"

    def test_values_are_trimmed(self):
        text = "AudioFilename:   spaced name.mp3   \nVersion:  Insane \n"
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.audio_filename == "spaced name.mp3"
        assert meta.version == "Insane"

    def test_background_before_events_ignored(self):
        text = '0,0,"early.jpg",0,0\n[Events]\n'
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.background_filename == ""

    def test_background_inside_events_captured(self):
        text = '[Events]\n0,0,"bg.jpg",0,0\n'
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.background_filename == "bg.jpg"

    def test_background_after_events_closed_ignored(self):
        text = '[Events]\n[TimingPoints]\n0,0,"late.jpg",0,0\n'
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.background_filename == ""

    def test_last_background_wins(self):
        text = '[Events]\n0,0,"one.jpg",0,0\n0,0,"two.png",0,0\n'
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.background_filename == "two.png"

    def test_reentering_events(self):
        text = '[Events]\n[Colours]\n[Events]\n0,0,"bg.jpg",0,0\n'
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.background_filename == "bg.jpg"

    def test_fields_outside_their_section_still_read(self):
        text = "[Events]\nVersion:Normal\n[HitObjects]\nArtist:Z\n"
        meta = parse_lines(_lines(text), Path("x.osu"))
        assert meta.version == "Normal"
        assert meta.artist == "Z"

    def test_unmatched_lines_ignored(self):
        meta = parse_lines(_lines("garbage\n\n// comment\n"), Path("x.osu"))
        assert meta.audio_filename == ""
        assert not meta.is_valid

    def test_empty_value_is_not_valid_audio(self):
        meta = parse_lines(_lines("AudioFilename: \n"), Path("x.osu"))
        assert meta.audio_filename == ""
        assert not meta.is_valid


class TestExtractMetadata:
    def test_valid_file(self, tmp_path):
        osu = tmp_path / "diff.osu"
        osu.write_text(SAMPLE_OSU, encoding="utf-8")
        extraction = extract_metadata(osu)
        assert extraction.ok
        assert extraction.metadata.audio_filename == "audio.mp3"
        assert extraction.reason == ""

    def test_missing_audio_fails(self, tmp_path):
        osu = tmp_path / "noaudio.osu"
        osu.write_text("[Metadata]\nTitle:Foo\nArtist:Bar\nVersion:Hard\n")
        extraction = extract_metadata(osu)
        assert not extraction.ok
        assert extraction.metadata is None
        assert extraction.reason == MISSING_AUDIO

    def test_truncated_file_keeps_parsed_fields(self, tmp_path):
        osu = tmp_path / "cut.osu"
        osu.write_text("[General]\nAudioFilename: a.mp3\n[Metadata]\nTitle:Fo")
        extraction = extract_metadata(osu)
        assert extraction.ok
        assert extraction.metadata.title == "Fo"

    def test_undecodable_bytes_replaced(self, tmp_path):
        osu = tmp_path / "latin.osu"
        osu.write_bytes(b"AudioFilename: a.mp3\nTitle:Caf\xe9\n")
        extraction = extract_metadata(osu)
        assert extraction.ok
        assert extraction.metadata.title.startswith("Caf")

    def test_utf8_bom_does_not_hide_first_line(self, tmp_path):
        osu = tmp_path / "bom.osu"
        osu.write_bytes(b"\xef\xbb\xbfAudioFilename: a.mp3\n")
        extraction = extract_metadata(osu)
        assert extraction.ok
        assert extraction.metadata.audio_filename == "a.mp3"

    def test_unreadable_file_fails(self, tmp_path):
        missing = tmp_path / "gone.osu"
        extraction = extract_metadata(missing)
        assert not extraction.ok
        assert "unreadable" in extraction.reason

    @pytest.mark.parametrize("newline", ["\n", "\r\n"])
    def test_line_endings(self, tmp_path, newline):
        osu = tmp_path / "eol.osu"
        text = SAMPLE_OSU.replace("\n", newline)
        osu.write_bytes(text.encode("utf-8"))
        extraction = extract_metadata(osu)
        assert extraction.ok
        assert extraction.metadata.background_filename == "bg.jpg"
        assert extraction.metadata.version == "Hard"
