from __future__ import annotations

from enum import Enum


class InvalidReason(str, Enum):
    """Why a fields, sort or filter expression was rejected."""
    EMPTY_ALLOW_LIST = "empty_allow_list"
    UNKNOWN_COLUMN = "unknown_column"
    UNKNOWN_DIRECTION = "unknown_direction"
    BAD_COMPARATOR = "bad_comparator"
    BAD_LITERAL = "bad_literal"
    CARDINALITY_MISMATCH = "cardinality_mismatch"
    MALFORMED = "malformed"


class QueryValidationError(ValueError):
    """Raised by the ``parse_*`` functions when an expression is rejected."""

    def __init__(
        self,
        reason: InvalidReason,
        token: str | None = None,
        expected: str | None = None,
    ) -> None:
        self.reason = reason
        self.token = token
        self.expected = expected
        message = reason.value
        if token is not None:
            message = f"{message}: {token!r}"
        if expected:
            message = f"{message} (expected {expected})"
        super().__init__(message)
