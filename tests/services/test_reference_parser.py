"""Tests for free-text reference extraction."""

from __future__ import annotations

import pytest

from scripture_engine.core.models import ParsedReference
from scripture_engine.services.reference_parser import ReferenceParser, format_reference

# pylint: disable=missing-function-docstring,redefined-outer-name


@pytest.fixture(scope="module")
def parser() -> ReferenceParser:
    return ReferenceParser()


def test_single_reference(parser: ReferenceParser) -> None:
    assert parser.parse("John 3:16") == [
        ParsedReference(book="John", chapter=3, start_verse=16)
    ]


def test_verse_range(parser: ReferenceParser) -> None:
    (ref,) = parser.parse("Romans 8:28-30")
    assert (ref.book, ref.chapter, ref.start_verse, ref.end_verse) == ("Romans", 8, 28, 30)


def test_multiple_references_keep_input_order(parser: ReferenceParser) -> None:
    refs = parser.parse("John 3:16; Rom 8:28, 1 Sam 3:4")
    assert [ref.label for ref in refs] == ["John 3:16", "Romans 8:28", "1 Samuel 3:4"]


def test_duplicates_are_not_collapsed(parser: ReferenceParser) -> None:
    refs = parser.parse("John 3:16, John 3:16")
    assert len(refs) == 2  # noqa: PLR2004


def test_numbered_book_without_space(parser: ReferenceParser) -> None:
    (ref,) = parser.parse("1Sam 3:4")
    assert ref.book == "1 Samuel"


def test_name_variant(parser: ReferenceParser) -> None:
    (ref,) = parser.parse("Song of Songs 2:1")
    assert ref.book == "Song of Solomon"


def test_unmatched_segments_are_dropped(parser: ReferenceParser) -> None:
    refs = parser.parse("Foo 1:1, love one another; John 1:1")
    assert [ref.label for ref in refs] == ["John 1:1"]


@pytest.mark.parametrize("text", ["", "grace and peace", "John three sixteen", ",;"])
def test_no_references(parser: ReferenceParser, text: str) -> None:
    assert parser.parse(text) == []


def test_inverted_range_is_kept_verbatim(parser: ReferenceParser) -> None:
    (ref,) = parser.parse("John 3:16-10")
    assert ref.start_verse == 16  # noqa: PLR2004
    assert ref.end_verse == 10  # noqa: PLR2004


def test_out_of_range_reference_still_parses(parser: ReferenceParser) -> None:
    (ref,) = parser.parse("John 99:1")
    assert ref.chapter == 99  # noqa: PLR2004


def test_validate(parser: ReferenceParser) -> None:
    assert parser.validate(ParsedReference(book="John", chapter=3, start_verse=16)) is None
    assert (
        parser.validate(ParsedReference(book="John", chapter=22, start_verse=1))
        == "Invalid chapter for John."
    )
    assert (
        parser.validate(ParsedReference(book="John", chapter=3, start_verse=37))
        == "Invalid verse for John 3."
    )
    assert (
        parser.validate(ParsedReference(book="Hezekiah", chapter=1, start_verse=1))
        == "Unknown book Hezekiah."
    )


def test_format_reference() -> None:
    assert format_reference(ParsedReference(book="John", chapter=3, start_verse=16)) == "John 3:16"
    assert (
        format_reference(ParsedReference(book="Romans", chapter=8, start_verse=28, end_verse=30))
        == "Romans 8:28-30"
    )
