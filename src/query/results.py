from __future__ import annotations

"""Structured accept/reject results for the list query validators."""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from src.query.errors import InvalidReason, QueryValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one expression."""
    valid: bool
    reason: InvalidReason | None = None
    token: str | None = None
    expected: str | None = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def invalid(cls, exc: QueryValidationError) -> ValidationResult:
        return cls(valid=False, reason=exc.reason, token=exc.token, expected=exc.expected)

    def as_detail(self) -> dict[str, str | None]:
        return {
            "reason": self.reason.value if self.reason else None,
            "token": self.token,
            "expected": self.expected,
        }


def evaluate(
    kind: str,
    parser: Callable[[Sequence[str], str], T],
    allow_list: Sequence[str],
    raw: str,
) -> ValidationResult:
    """Run ``parser`` and fold a rejection into a ``ValidationResult``."""
    try:
        parser(allow_list, raw)
    except QueryValidationError as exc:
        logger.debug(
            "query_expression_rejected",
            extra={
                "kind": kind,
                "reason": exc.reason.value,
                "token": exc.token,
                "expected": exc.expected,
            },
        )
        return ValidationResult.invalid(exc)
    return ValidationResult.ok()
