from __future__ import annotations

"""Single-pass tokenizer for filter expressions."""

import re
from dataclasses import dataclass
from enum import Enum

from src.query.errors import InvalidReason, QueryValidationError
from src.query.types import Connective


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    CONNECTIVE = "connective"
    COMPARATOR = "comparator"
    STRING = "string"
    NUMBER = "number"
    OPEN_GROUP = "open_group"
    CLOSE_GROUP = "close_group"


@dataclass(frozen=True)
class Token:
    """Lexed token with the whitespace that surrounds it in the source."""
    kind: TokenKind
    text: str
    position: int
    spaced_before: bool = False
    spaced_after: bool = False


# Compiled once at import; shared read-only by every call.
_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<string>'(?:[^']|'')*')
    |(?P<dstring>"[^"]*")
    |(?P<number>\d+(?:\.\d+)?(?!\w))
    |(?P<word>\w+)
    |(?P<comparator>>=|<=|!=|<|>|=)
    |(?P<open>\()
    |(?P<close>\))
    """,
    re.VERBOSE | re.ASCII,
)

_KINDS = {
    "string": TokenKind.STRING,
    "dstring": TokenKind.STRING,
    "number": TokenKind.NUMBER,
    "comparator": TokenKind.COMPARATOR,
    "open": TokenKind.OPEN_GROUP,
    "close": TokenKind.CLOSE_GROUP,
}


def tokenize_filter(raw: str) -> list[Token]:
    """Lex ``raw`` into tokens, dropping whitespace.

    Raises ``QueryValidationError`` (``MALFORMED``) at the first character that
    starts no token, which includes an unterminated quoted string.
    """
    pieces: list[tuple[str, str, int]] = []
    position = 0
    while position < len(raw):
        match = _TOKEN_RE.match(raw, position)
        if match is None:
            raise QueryValidationError(
                InvalidReason.MALFORMED,
                token=raw[position:],
                expected="identifier, comparator, parenthesis, quoted string or number",
            )
        pieces.append((match.lastgroup or "", match.group(), position))
        position = match.end()

    tokens: list[Token] = []
    for index, (group, text, start) in enumerate(pieces):
        if group == "space":
            continue
        spaced_before = index > 0 and pieces[index - 1][0] == "space"
        spaced_after = index + 1 < len(pieces) and pieces[index + 1][0] == "space"
        if group == "word":
            kind = (
                TokenKind.CONNECTIVE
                if Connective.from_keyword(text) is not None
                else TokenKind.IDENTIFIER
            )
        else:
            kind = _KINDS[group]
        tokens.append(
            Token(
                kind=kind,
                text=text,
                position=start,
                spaced_before=spaced_before,
                spaced_after=spaced_after,
            )
        )
    return tokens
