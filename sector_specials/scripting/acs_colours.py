"""
Sector colours set by OPEN scripts.

Scans ACS source for Sector_SetColor / Sector_SetFade calls made from
OPEN scripts (scripts that run once when the map starts), so an editor can
preview the resulting sector tint and fog colours.
"""

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence

from sector_specials.validation.core import Severity, SpecialIssue
from sector_specials.validation.rules import ACS_001, ACS_002, DiagnosticRule
from .acs_lexer import Token, tokenize

logger = logging.getLogger(__name__)

TINT_ALPHA = 255
FADE_ALPHA = 0


class Colour(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


@dataclass(frozen=True)
class SectorColour:
    """Colour assigned to every sector with [tag]."""
    tag: int
    colour: Colour


@dataclass
class ScriptColours:
    """
    Result of scanning one script text.

    Attributes:
        tints: Sector_SetColor results (alpha 255), in script order
        fades: Sector_SetFade results (alpha 0), in script order
        issues: Calls that were skipped for bad parameters
    """
    tints: List[SectorColour] = field(default_factory=list)
    fades: List[SectorColour] = field(default_factory=list)
    issues: List[SpecialIssue] = field(default_factory=list)


def find_colour(colours: Sequence[SectorColour], tag: int) -> Optional[Colour]:
    """First colour recorded for [tag], or None."""
    for entry in colours:
        if entry.tag == tag:
            return entry.colour
    return None


def _collect_until(tokens: List[Token], start: int, terminator: str):
    """Tokens after [start] up to (not including) [terminator]; returns (tokens, index of terminator)."""
    collected = []
    i = start + 1
    while i < len(tokens) and not tokens[i].matches(terminator):
        collected.append(tokens[i])
        i += 1
    return collected, i


def _parse_colour_call(
    result: ScriptColours,
    parameters: List[Token],
    rule: DiagnosticRule,
    alpha: int,
) -> Optional[SectorColour]:
    values = [t.as_int() for t in parameters if t.is_integer()]
    if len(values) < 4:
        issue = rule.issue(
            location=f"script line {parameters[0].line}" if parameters else None,
            parameters=" ".join(t.text for t in parameters),
        )
        result.issues.append(issue)
        if issue.severity == Severity.WARN:
            logger.warning("%s", issue.format())
        else:
            logger.info("%s", issue.format())
        return None

    tag, r, g, b = values[:4]
    return SectorColour(tag=tag, colour=Colour(r, g, b, alpha))


def _scan_script_body(result: ScriptColours, tokens: List[Token], i: int) -> int:
    """Scan from the opening brace at [i]; returns the index of its closing brace."""
    depth = 0
    while i < len(tokens):
        token = tokens[i]
        if token.matches("{"):
            depth += 1
        elif token.matches("}"):
            depth -= 1
            if depth == 0:
                return i
        elif token.matches("Sector_SetColor"):
            parameters, i = _collect_until(tokens, i, ")")
            colour = _parse_colour_call(result, parameters, ACS_001, TINT_ALPHA)
            if colour is not None:
                logger.debug("Sector tag %d, colour %s", colour.tag, colour.colour[:3])
                result.tints.append(colour)
            continue
        elif token.matches("Sector_SetFade"):
            parameters, i = _collect_until(tokens, i, ")")
            colour = _parse_colour_call(result, parameters, ACS_002, FADE_ALPHA)
            if colour is not None:
                logger.debug("Sector tag %d, fade colour %s", colour.tag, colour.colour[:3])
                result.fades.append(colour)
            continue
        i += 1
    return i


def scan_open_script_colours(script_text: Optional[str]) -> ScriptColours:
    """
    Collect sector tint and fade colours set by OPEN scripts in [script_text].

    Each Sector_SetColor / Sector_SetFade call takes its first four integer
    arguments as tag, red, green and blue. Calls outside OPEN scripts are
    ignored.
    """
    result = ScriptColours()
    tokens = tokenize(script_text)

    i = 0
    while i < len(tokens):
        if not tokens[i].matches("script"):
            i += 1
            continue

        # Skip the script number / name
        i += 2
        if i >= len(tokens) or not tokens[i].matches("OPEN"):
            continue

        while i < len(tokens) and not tokens[i].matches("{"):
            i += 1
        i = _scan_script_body(result, tokens, i) + 1

    return result
