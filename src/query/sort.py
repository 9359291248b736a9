from __future__ import annotations

"""Validation of ``column DIRECTION`` sort expressions."""

from typing import Sequence

from src.query.columns import require_allow_list, require_allowed_column
from src.query.errors import InvalidReason, QueryValidationError
from src.query.results import ValidationResult, evaluate
from src.query.tokenizer import split_sort_token, tokenize_sort
from src.query.types import SortDirection, SortExpression, SortKey

SORT_DIRECTIONS = tuple(direction.value for direction in SortDirection)


def parse_sort(allow_list: Sequence[str], raw: str) -> SortExpression:
    """Parse ``"id ASC, created_at DESC"`` into sort keys.

    Every token must name an allowed column and carry an explicit direction.
    """
    require_allow_list(allow_list)
    if not raw:
        return SortExpression()

    columns: list[str] = []
    directions: list[str] = []
    for token in tokenize_sort(raw):
        column, direction = split_sort_token(token)
        columns.append(column)
        if direction is not None:
            directions.append(direction)

    if not columns:
        raise QueryValidationError(InvalidReason.MALFORMED, token=raw, expected="column")
    for column in columns:
        require_allowed_column(column, allow_list)

    if len(directions) != len(columns):
        missing = next(
            (token.strip() for token in tokenize_sort(raw) if split_sort_token(token)[1] is None),
            None,
        )
        raise QueryValidationError(
            InvalidReason.CARDINALITY_MISMATCH,
            token=missing,
            expected=" or ".join(SORT_DIRECTIONS),
        )

    keys: list[SortKey] = []
    for column, keyword in zip(columns, directions):
        direction = SortDirection.from_keyword(keyword)
        if direction is None:
            raise QueryValidationError(
                InvalidReason.UNKNOWN_DIRECTION,
                token=keyword,
                expected=" or ".join(SORT_DIRECTIONS),
            )
        keys.append(SortKey(column=column, direction=direction))
    return SortExpression(keys=tuple(keys))


def check_sort(allow_list: Sequence[str], raw: str) -> ValidationResult:
    return evaluate("sort", parse_sort, allow_list, raw)


def is_valid_sort(allow_list: Sequence[str], raw: str) -> bool:
    return check_sort(allow_list, raw).valid
