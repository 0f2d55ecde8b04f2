"""Tests for the ACS lexer and the OPEN script colour scanner."""

from sector_specials.pipeline.map_specials import MapSpecials
from sector_specials.scripting import Colour, TokenKind, scan_open_script_colours, tokenize

from builders import two_rooms

SCRIPT = """
#include "zcommon.acs"

// Sector_SetColor(99, 1, 2, 3); in a comment
script 1 OPEN
{
    Sector_SetColor(1, 255, 128, 0);
    Sector_SetFade(1, 16, 32, 64);
    /* Sector_SetColor(98, 1, 2, 3); */
}

script 2 ENTER
{
    Sector_SetColor(2, 10, 20, 30);
}
"""


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

def test_tokenize_kinds_and_lines() -> None:
    tokens = tokenize('script "Intro" OPEN\n{\n  x = 0x1F; // done\n}')

    assert [t.text for t in tokens] == ["script", "Intro", "OPEN", "{", "x", "=", "0x1F", ";", "}"]
    assert tokens[1].kind is TokenKind.STRING
    assert tokens[3].kind is TokenKind.SPECIAL
    assert tokens[3].line == 2
    assert tokens[6].line == 3
    assert tokens[6].is_integer() and tokens[6].as_int() == 31
    assert tokens[8].line == 4


def test_tokenize_empty_input() -> None:
    assert tokenize(None) == []
    assert tokenize("") == []


def test_token_matching_is_case_insensitive_for_words() -> None:
    word, string = tokenize('Open "open"')

    assert word.matches("OPEN")
    assert not string.matches("open")


def test_negative_integers() -> None:
    (token,) = tokenize("-12")

    assert token.is_integer()
    assert token.as_int() == -12


# ---------------------------------------------------------------------------
# Colour scanning
# ---------------------------------------------------------------------------

def test_open_script_colours() -> None:
    """Only calls in OPEN scripts count; comments are skipped."""
    colours = scan_open_script_colours(SCRIPT)

    assert [(c.tag, c.colour) for c in colours.tints] == [(1, Colour(255, 128, 0, 255))]
    assert [(c.tag, c.colour) for c in colours.fades] == [(1, Colour(16, 32, 64, 0))]
    assert colours.issues == []


def test_named_open_script_and_keyword_case() -> None:
    colours = scan_open_script_colours('SCRIPT "Setup" open { sector_setcolor(4, 1, 2, 3); }')

    assert [c.tag for c in colours.tints] == [4]


def test_nested_blocks_stay_inside_script() -> None:
    text = """
    script 1 OPEN
    {
        if (1) { Sector_SetColor(5, 1, 1, 1); }
        Sector_SetFade(6, 2, 2, 2);
    }
    Sector_SetColor(7, 3, 3, 3);
    """
    colours = scan_open_script_colours(text)

    assert [c.tag for c in colours.tints] == [5]
    assert [c.tag for c in colours.fades] == [6]


def test_bad_parameters_are_reported_and_skipped() -> None:
    text = "script 1 OPEN { Sector_SetColor(1, 255); Sector_SetFade(tag, 1, 2, 3); Sector_SetColor(2, 4, 5, 6); }"

    colours = scan_open_script_colours(text)

    assert [c.tag for c in colours.tints] == [2]
    assert colours.fades == []
    assert [i.code for i in colours.issues] == ["ACS-001", "ACS-002"]


def test_no_scripts() -> None:
    colours = scan_open_script_colours(None)

    assert colours.tints == [] and colours.fades == [] and colours.issues == []


# ---------------------------------------------------------------------------
# MapSpecials colour tables
# ---------------------------------------------------------------------------

def test_colour_queries(zdoom: MapSpecials) -> None:
    zdoom.process_acs_scripts(SCRIPT)

    assert zdoom.has_any_tag_colours()
    assert zdoom.has_any_tag_fade_colours()
    assert zdoom.tag_colour(1) == Colour(255, 128, 0, 255)
    assert zdoom.tag_fade_colour(1) == Colour(16, 32, 64, 0)
    assert zdoom.tag_colour(2) is None


def test_scanning_again_replaces_tables(zdoom: MapSpecials) -> None:
    zdoom.process_acs_scripts(SCRIPT)
    zdoom.process_acs_scripts("script 1 OPEN { Sector_SetColor(3, 9, 9, 9); }")

    assert zdoom.tag_colour(1) is None
    assert zdoom.tag_colour(3) == Colour(9, 9, 9, 255)
    assert not zdoom.has_any_tag_fade_colours()


def test_scan_issues_land_on_last_report(zdoom: MapSpecials) -> None:
    zdoom.process_acs_scripts("script 1 OPEN { Sector_SetFade(1); }")

    assert zdoom.last_report.codes() == ["ACS-002"]


def test_update_tagged_sectors(zdoom: MapSpecials) -> None:
    builder, left, right, _ = two_rooms(left_tag=1, right_tag=2)
    zdoom.process_acs_scripts(SCRIPT)

    zdoom.update_tagged_sectors(builder.map)

    assert left.modified
    assert not right.modified


def test_reset_clears_colours(zdoom: MapSpecials) -> None:
    zdoom.process_acs_scripts(SCRIPT)

    zdoom.reset()

    assert not zdoom.has_any_tag_colours()
    assert zdoom.tag_colours == []
