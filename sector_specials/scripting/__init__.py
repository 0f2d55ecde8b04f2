"""
ACS script scanning.

Usage:
    from sector_specials.scripting import scan_open_script_colours

    colours = scan_open_script_colours(script_text)
"""

from .acs_lexer import Token, TokenKind, tokenize
from .acs_colours import (
    Colour,
    SectorColour,
    ScriptColours,
    find_colour,
    scan_open_script_colours,
)

__all__ = [
    'Token',
    'TokenKind',
    'tokenize',
    'Colour',
    'SectorColour',
    'ScriptColours',
    'find_colour',
    'scan_open_script_colours',
]
