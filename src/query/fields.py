from __future__ import annotations

from typing import Sequence

from src.query.columns import require_allow_list, require_allowed_column
from src.query.results import ValidationResult, evaluate
from src.query.tokenizer import tokenize_fields
from src.query.types import FieldsExpression


def parse_fields(allow_list: Sequence[str], raw: str) -> FieldsExpression:
    """Parse a projection such as ``"id, first_name, email"``.

    An empty expression means no projection restriction.
    """
    require_allow_list(allow_list)
    if not raw:
        return FieldsExpression()
    tokens = tokenize_fields(raw)
    for token in tokens:
        require_allowed_column(token, allow_list)
    return FieldsExpression(columns=tuple(tokens))


def check_fields(allow_list: Sequence[str], raw: str) -> ValidationResult:
    return evaluate("fields", parse_fields, allow_list, raw)


def is_valid_fields(allow_list: Sequence[str], raw: str) -> bool:
    return check_fields(allow_list, raw).valid
