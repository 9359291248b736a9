from __future__ import annotations

"""Filter grammar, cardinality and literal tests."""

import random
import string

import pytest

from src.query.errors import InvalidReason, QueryValidationError
from src.query.filter import MAX_GROUP_DEPTH, check_filter, is_valid_filter, parse_filter
from src.query.lexer import TokenKind, tokenize_filter
from src.query.types import Comparator, Connective, Number, QuotedString

USER_FILTER = ["id", "first_name", "last_name", "email", "created_at", "updated_at"]


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "id='6f7c13c8-9c6a-432f-a5f6-80a0a1bd29eb'",
        "id>1 AND first_name='Alice'",
        "id=1",
        "id<1 AND first_name='Alice' OR last_name='Smith'",
        "id=1 AND first_name='Alice' AND last_name='Smith' OR email='alice@mail.com'",
        "id >= 10 and id <= 20",
        "first_name != 'Bob'",
        "id=1.5",
        "last_name='O''Brien'",
        "(id=1 OR id=2) AND first_name='x'",
        "((id=1))",
        "id=1 AND (first_name='a' OR (last_name='b' AND id>2))",
    ],
)
def test_valid_filters(raw: str) -> None:
    assert is_valid_filter(USER_FILTER, raw)


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("id", InvalidReason.MALFORMED),
        ("id=1 AND first_name='Alice' AND", InvalidReason.CARDINALITY_MISMATCH),
        ("id=1 AND first_name='Alice' AND name='Smith'", InvalidReason.UNKNOWN_COLUMN),
        ("id AND first_name='Alice' AND last_name='Smith'", InvalidReason.MALFORMED),
        ("OR id=1 AND ='Alice' AND last_name='Smith'", InvalidReason.CARDINALITY_MISMATCH),
        ("id=1 LIKE first_name='Alice' AND last_name='Smith'", InvalidReason.CARDINALITY_MISMATCH),
        ("id=1 first_name='Alice'", InvalidReason.CARDINALITY_MISMATCH),
        ("first_name>'Alice'", InvalidReason.BAD_COMPARATOR),
        ("id=>1", InvalidReason.BAD_COMPARATOR),
        ('first_name="Alice"', InvalidReason.BAD_LITERAL),
        ("first_name=Alice", InvalidReason.BAD_LITERAL),
        ("id=", InvalidReason.BAD_LITERAL),
        ("id=1234567890123456", InvalidReason.BAD_LITERAL),
        ("id=1.1234567890123456", InvalidReason.BAD_LITERAL),
        ("last_name='O'Brien'", InvalidReason.MALFORMED),
        ("first_name='Alice", InvalidReason.MALFORMED),
        ("id=1 AND(id=2)", InvalidReason.MALFORMED),
        ("id=-1", InvalidReason.MALFORMED),
        ("id=1; DROP TABLE users", InvalidReason.MALFORMED),
        ("(id=1", InvalidReason.MALFORMED),
        ("id=1)", InvalidReason.MALFORMED),
        ("()", InvalidReason.MALFORMED),
        ("(id=1)AND id=2", InvalidReason.MALFORMED),
        ("(id=1 AND)", InvalidReason.CARDINALITY_MISMATCH),
        ("(id=1) id=2", InvalidReason.CARDINALITY_MISMATCH),
        ("(password='x')", InvalidReason.UNKNOWN_COLUMN),
        ("id=(1)", InvalidReason.BAD_LITERAL),
    ],
)
def test_invalid_filters(raw: str, reason: InvalidReason) -> None:
    assert not is_valid_filter(USER_FILTER, raw)
    assert check_filter(USER_FILTER, raw).reason is reason


def test_examples_from_list_endpoints() -> None:
    assert is_valid_filter(["id", "name"], "id=1 AND name='Alice'")
    assert is_valid_filter(["id"], "id=1 OR id=2 OR id=3")
    assert not is_valid_filter(["id"], "id=1 AND")


def test_numeric_not_equal_is_not_supported() -> None:
    result = check_filter(["amount"], "amount!=10")
    assert not result
    assert result.reason is InvalidReason.BAD_COMPARATOR
    assert is_valid_filter(["amount"], "amount!='10'")


def test_empty_allow_list_rejects() -> None:
    assert not is_valid_filter([], "id=1 AND first_name='Alice'")
    assert check_filter([], "").reason is InvalidReason.EMPTY_ALLOW_LIST


def test_connective_needs_surrounding_whitespace() -> None:
    assert not is_valid_filter(USER_FILTER, "first_name='a'AND id=1")
    assert check_filter(USER_FILTER, "first_name='a'AND id=1").reason is InvalidReason.MALFORMED
    assert is_valid_filter(USER_FILTER, "id=1 AND\tid=2")


def test_parse_filter_builds_expression() -> None:
    expression = parse_filter(USER_FILTER, "id >= 10 AND first_name='Alice' or email != 'x'")
    assert expression.columns == ["id", "first_name", "email"]
    assert expression.comparators == [
        Comparator.GREATER_OR_EQUAL,
        Comparator.EQUAL,
        Comparator.NOT_EQUAL,
    ]
    assert expression.literals == [
        Number(raw="10"),
        QuotedString(raw="'Alice'", value="Alice"),
        QuotedString(raw="'x'", value="x"),
    ]
    assert expression.connectives == (Connective.AND, Connective.OR)
    assert expression.is_consistent()


def test_parse_filter_empty() -> None:
    expression = parse_filter(USER_FILTER, "")
    assert not expression
    assert expression.is_consistent()


def test_parse_filter_error_carries_token() -> None:
    with pytest.raises(QueryValidationError) as excinfo:
        parse_filter(USER_FILTER, "id=1 AND password='secret'")
    assert excinfo.value.reason is InvalidReason.UNKNOWN_COLUMN
    assert excinfo.value.token == "password"


def test_lexer_marks_connectives_and_spacing() -> None:
    tokens = tokenize_filter("id=1 and name='x'")
    assert [token.kind for token in tokens] == [
        TokenKind.IDENTIFIER,
        TokenKind.COMPARATOR,
        TokenKind.NUMBER,
        TokenKind.CONNECTIVE,
        TokenKind.IDENTIFIER,
        TokenKind.COMPARATOR,
        TokenKind.STRING,
    ]
    connective = tokens[3]
    assert connective.spaced_before and connective.spaced_after
    assert not tokens[0].spaced_before


def test_validation_is_idempotent() -> None:
    raw = "id=1 AND first_name='Alice'"
    results = {check_filter(USER_FILTER, raw) for _ in range(5)}
    assert len(results) == 1


def test_random_input_never_raises() -> None:
    rng = random.Random(1234)
    alphabet = string.ascii_letters + string.digits + " '\"=!<>_,.;()-\t\né"
    for _ in range(500):
        raw = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 40)))
        result = check_filter(USER_FILTER, raw)
        assert isinstance(result.valid, bool)


def test_parse_filter_keeps_groups() -> None:
    raw = "(id=1 OR id=2) AND first_name='x'"
    expression = parse_filter(USER_FILTER, raw)
    assert expression.columns == ["id", "id", "first_name"]
    assert expression.connectives == (Connective.OR, Connective.AND)
    assert expression.groups == ((0, 1),)
    assert expression.is_consistent()
    assert str(expression) == raw


def test_nested_groups_are_innermost_first() -> None:
    raw = "id=1 AND (first_name='a' OR (last_name='b' AND id>2))"
    expression = parse_filter(USER_FILTER, raw)
    assert expression.groups == ((2, 3), (1, 3))
    assert str(expression) == raw
    assert str(parse_filter(USER_FILTER, "((id=1))")) == "((id=1))"


def test_group_nesting_is_bounded() -> None:
    nested = "(" * MAX_GROUP_DEPTH + "id=1" + ")" * MAX_GROUP_DEPTH
    assert is_valid_filter(USER_FILTER, nested)
    too_deep = "(" + nested + ")"
    assert check_filter(USER_FILTER, too_deep).reason is InvalidReason.MALFORMED
    assert check_filter(USER_FILTER, "(" * 5000).reason is InvalidReason.MALFORMED


def test_lexer_emits_parentheses() -> None:
    tokens = tokenize_filter("(id=1)")
    assert tokens[0].kind is TokenKind.OPEN_GROUP
    assert tokens[-1].kind is TokenKind.CLOSE_GROUP
