from __future__ import annotations

from typing import Sequence

from src.query.errors import InvalidReason, QueryValidationError


def is_allowed_column(name: str, allow_list: Sequence[str]) -> bool:
    """Exact, case-sensitive allow-list membership."""
    for column in allow_list:
        if name == column:
            return True
    return False


def require_allowed_column(name: str, allow_list: Sequence[str]) -> str:
    if not is_allowed_column(name, allow_list):
        raise QueryValidationError(
            InvalidReason.UNKNOWN_COLUMN,
            token=name,
            expected="one of " + ", ".join(allow_list),
        )
    return name


def require_allow_list(allow_list: Sequence[str]) -> None:
    if not allow_list:
        raise QueryValidationError(InvalidReason.EMPTY_ALLOW_LIST)
