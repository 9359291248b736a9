from __future__ import annotations

"""Filter expression parsing and validation.

A filter is one or more ``column comparator literal`` conditions joined by
``AND``/``OR``, optionally grouped with parentheses::

    expression := operand (CONNECTIVE operand)*
    operand    := "(" expression ")" | condition
    condition  := IDENTIFIER COMPARATOR (STRING | NUMBER)

Strings may be compared with ``=`` and ``!=``; numbers with ``=``, ``>``,
``>=``, ``<`` and ``<=``. Connectives must be surrounded by whitespace.
"""

import re
from dataclasses import dataclass
from typing import Sequence

from src.query.columns import require_allow_list, require_allowed_column
from src.query.errors import InvalidReason, QueryValidationError
from src.query.lexer import Token, TokenKind, tokenize_filter
from src.query.literals import classify_literal
from src.query.results import ValidationResult, evaluate
from src.query.types import (
    NUMBER_COMPARATORS,
    STRING_COMPARATORS,
    Comparator,
    Connective,
    FilterCondition,
    FilterExpression,
)

MAX_INTEGER_DIGITS = 15
MAX_FRACTION_DIGITS = 15
MAX_GROUP_DEPTH = 32

_NUMBER_RE = re.compile(
    rf"^\d{{1,{MAX_INTEGER_DIGITS}}}(?:\.\d{{1,{MAX_FRACTION_DIGITS}}})?$",
    re.ASCII,
)


@dataclass(frozen=True)
class _Condition:
    column: str
    comparator: Comparator
    literal: str


def _comparator_names(comparators: frozenset[Comparator]) -> str:
    return ", ".join(sorted(comparator.value for comparator in comparators))


class _FilterParser:
    """Recursive-descent parser over the token stream of one filter."""

    def __init__(self, tokens: list[Token], raw: str) -> None:
        self._tokens = tokens
        self._raw = raw
        self._index = 0
        self._depth = 0
        self._conditions: list[_Condition] = []
        self._connectives: list[Connective] = []
        self._groups: list[tuple[int, int]] = []

    def _peek(self) -> Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _at_group_end(self) -> bool:
        token = self._peek()
        return token is None or token.kind is TokenKind.CLOSE_GROUP

    def parse(self) -> tuple[list[_Condition], list[Connective], list[tuple[int, int]]]:
        if not self._tokens:
            raise QueryValidationError(InvalidReason.MALFORMED, token=self._raw, expected="condition")
        self._expression()
        token = self._peek()
        if token is not None:
            raise QueryValidationError(
                InvalidReason.MALFORMED, token=token.text, expected="matching opening parenthesis"
            )
        return self._conditions, self._connectives, self._groups

    def _expression(self) -> None:
        self._operand()
        while not self._at_group_end():
            self._connectives.append(self._connective())
            self._operand()

    def _operand(self) -> None:
        token = self._peek()
        if token is None or token.kind is not TokenKind.OPEN_GROUP:
            self._conditions.append(self._condition())
            return
        if self._depth >= MAX_GROUP_DEPTH:
            raise QueryValidationError(
                InvalidReason.MALFORMED,
                token=token.text,
                expected=f"at most {MAX_GROUP_DEPTH} nested groups",
            )
        self._advance()
        first = len(self._conditions)
        self._depth += 1
        self._expression()
        self._depth -= 1
        closing = self._peek()
        if closing is None:
            raise QueryValidationError(
                InvalidReason.MALFORMED, token=token.text, expected="closing parenthesis"
            )
        self._advance()
        self._groups.append((first, len(self._conditions) - 1))

    def _connective(self) -> Connective:
        token = self._advance()
        if token.kind is not TokenKind.CONNECTIVE:
            raise QueryValidationError(
                InvalidReason.CARDINALITY_MISMATCH, token=token.text, expected="AND or OR"
            )
        if self._at_group_end():
            raise QueryValidationError(
                InvalidReason.CARDINALITY_MISMATCH, token=token.text, expected="condition"
            )
        if not (token.spaced_before and token.spaced_after):
            raise QueryValidationError(
                InvalidReason.MALFORMED,
                token=token.text,
                expected="whitespace around connective",
            )
        return Connective(token.text.upper())

    def _condition(self) -> _Condition:
        token = self._peek()
        if token is None:
            raise QueryValidationError(InvalidReason.MALFORMED, token=self._raw, expected="column")
        self._advance()
        if token.kind is TokenKind.CONNECTIVE:
            raise QueryValidationError(
                InvalidReason.CARDINALITY_MISMATCH, token=token.text, expected="column"
            )
        if token.kind is not TokenKind.IDENTIFIER:
            raise QueryValidationError(InvalidReason.MALFORMED, token=token.text, expected="column")
        column = token.text

        token = self._peek()
        if token is None or token.kind is not TokenKind.COMPARATOR:
            raise QueryValidationError(
                InvalidReason.MALFORMED,
                token=token.text if token else column,
                expected="comparator",
            )
        self._advance()
        comparator = Comparator(token.text)

        token = self._peek()
        if token is None:
            raise QueryValidationError(
                InvalidReason.BAD_LITERAL, token="", expected="quoted string or number"
            )
        self._advance()
        if token.kind is TokenKind.COMPARATOR:
            raise QueryValidationError(
                InvalidReason.BAD_COMPARATOR, token=comparator.value + token.text
            )
        if token.kind is TokenKind.STRING:
            if comparator not in STRING_COMPARATORS:
                raise QueryValidationError(
                    InvalidReason.BAD_COMPARATOR,
                    token=comparator.value,
                    expected=_comparator_names(STRING_COMPARATORS),
                )
        elif token.kind is TokenKind.NUMBER:
            if comparator not in NUMBER_COMPARATORS:
                raise QueryValidationError(
                    InvalidReason.BAD_COMPARATOR,
                    token=comparator.value,
                    expected=_comparator_names(NUMBER_COMPARATORS),
                )
            if not _NUMBER_RE.match(token.text):
                raise QueryValidationError(
                    InvalidReason.BAD_LITERAL,
                    token=token.text,
                    expected=f"at most {MAX_INTEGER_DIGITS} integer and "
                    f"{MAX_FRACTION_DIGITS} fractional digits",
                )
        else:
            raise QueryValidationError(
                InvalidReason.BAD_LITERAL, token=token.text, expected="quoted string or number"
            )
        return _Condition(column=column, comparator=comparator, literal=token.text)


def parse_filter(allow_list: Sequence[str], raw: str) -> FilterExpression:
    """Parse a filter such as ``"(id=1 OR id=2) AND first_name='Alice'"``."""
    require_allow_list(allow_list)
    if not raw:
        return FilterExpression()

    conditions, connectives, groups = _FilterParser(tokenize_filter(raw), raw).parse()
    if len(connectives) != max(0, len(conditions) - 1):
        raise QueryValidationError(InvalidReason.CARDINALITY_MISMATCH, token=raw)

    for condition in conditions:
        require_allowed_column(condition.column, allow_list)

    parsed: list[FilterCondition] = []
    for condition in conditions:
        literal = classify_literal(condition.literal)
        if literal is None:
            raise QueryValidationError(
                InvalidReason.BAD_LITERAL,
                token=condition.literal,
                expected="single-quoted string or number",
            )
        parsed.append(
            FilterCondition(
                column=condition.column,
                comparator=condition.comparator,
                literal=literal,
            )
        )
    return FilterExpression(
        conditions=tuple(parsed),
        connectives=tuple(connectives),
        groups=tuple(groups),
    )


def check_filter(allow_list: Sequence[str], raw: str) -> ValidationResult:
    return evaluate("filter", parse_filter, allow_list, raw)


def is_valid_filter(allow_list: Sequence[str], raw: str) -> bool:
    return check_filter(allow_list, raw).valid
