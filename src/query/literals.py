from __future__ import annotations

"""Classification of filter literals into quoted strings and numbers."""

import math

from src.query.types import Literal, Number, QuotedString

QUOTE = "'"
ESCAPED_QUOTE = "''"


def _unescape_quoted(token: str) -> str | None:
    if len(token) < 2 or token[0] != QUOTE or token[-1] != QUOTE:
        return None
    inner = token[1:-1]
    # Any quote left after removing doubled quotes is unescaped.
    if QUOTE in inner.replace(ESCAPED_QUOTE, ""):
        return None
    return inner.replace(ESCAPED_QUOTE, QUOTE)


def is_quoted_string(token: str) -> bool:
    return _unescape_quoted(token) is not None


def is_number(token: str) -> bool:
    if not token or token != token.strip() or "_" in token:
        return False
    try:
        int(token, 10)
        return True
    except ValueError:
        pass
    try:
        return math.isfinite(float(token))
    except ValueError:
        return False


def classify_literal(token: str) -> Literal | None:
    """Return the literal ``token`` denotes, or ``None`` if it is neither kind."""
    value = _unescape_quoted(token)
    if value is not None:
        return QuotedString(raw=token, value=value)
    if is_number(token):
        return Number(raw=token)
    return None


def is_literal(token: str) -> bool:
    return classify_literal(token) is not None
