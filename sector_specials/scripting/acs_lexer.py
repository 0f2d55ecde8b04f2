"""
Token stream for ACS script text.

Only enough of the language is understood to walk script blocks:
words (identifiers and numbers), quoted strings and the single character
specials ``; , : | = { } / ( )``. Line and block comments are dropped.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

SPECIAL_CHARACTERS = ";,:|={}/()"

_TOKEN_PATTERN = re.compile(
    r'(?P<line_comment>//[^\n]*)'
    r'|(?P<block_comment>/\*.*?(?:\*/|\Z))'
    r'|"(?P<string>(?:\\.|[^"\\])*)"?'
    r'|(?P<special>[' + re.escape(SPECIAL_CHARACTERS) + r'])'
    r'|(?P<word>[^\s"' + re.escape(SPECIAL_CHARACTERS) + r']+)',
    re.DOTALL,
)

_INTEGER_PATTERN = re.compile(r'[+-]?(?:0[xX][0-9a-fA-F]+|\d+)')


class TokenKind(Enum):
    WORD = "word"
    STRING = "string"
    SPECIAL = "special"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int

    def is_integer(self) -> bool:
        return self.kind is TokenKind.WORD and _INTEGER_PATTERN.fullmatch(self.text) is not None

    def as_int(self) -> int:
        if self.text.lstrip("+-")[:2].lower() == "0x":
            return int(self.text, 16)
        return int(self.text, 10)

    def matches(self, text: str) -> bool:
        """Case-insensitive comparison for words, exact for specials. Strings never match."""
        if self.kind is TokenKind.STRING:
            return False
        if self.kind is TokenKind.WORD:
            return self.text.lower() == text.lower()
        return self.text == text


def tokenize(text: Optional[str]) -> List[Token]:
    """Split [text] into tokens, skipping whitespace and comments."""
    if not text:
        return []
    return list(iter_tokens(text))


def iter_tokens(text: str) -> Iterator[Token]:
    line = 1
    last = 0
    for match in _TOKEN_PATTERN.finditer(text):
        line += text.count("\n", last, match.start())
        last = match.start()

        kind = match.lastgroup
        if kind in ("line_comment", "block_comment"):
            continue
        if kind == "string":
            yield Token(TokenKind.STRING, match.group("string"), line)
        elif kind == "special":
            yield Token(TokenKind.SPECIAL, match.group("special"), line)
        else:
            yield Token(TokenKind.WORD, match.group("word"), line)
