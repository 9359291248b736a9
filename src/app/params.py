from __future__ import annotations

"""List endpoint query parameter parsing on top of the query validators."""

import logging
import re
from dataclasses import dataclass

from src.app.metrics import record_validation
from src.app.resources import ResourceColumns
from src.app.settings import settings
from src.query.errors import QueryValidationError
from src.query.fields import parse_fields
from src.query.filter import parse_filter
from src.query.sort import parse_sort
from src.query.types import FieldsExpression, FilterExpression, SortExpression

logger = logging.getLogger(__name__)

_LIMIT_RE = re.compile(r"[+-]?\d{1,19}", re.ASCII)


class ListQueryError(ValueError):
    """Raised when one list query parameter is rejected."""

    def __init__(
        self,
        parameter: str,
        reason: str,
        token: str | None = None,
        expected: str | None = None,
    ) -> None:
        self.parameter = parameter
        self.reason = reason
        self.token = token
        self.expected = expected
        super().__init__(f"invalid {parameter}: {reason}")

    @classmethod
    def from_validation(cls, parameter: str, exc: QueryValidationError) -> ListQueryError:
        return cls(parameter, exc.reason.value, token=exc.token, expected=exc.expected)

    def as_detail(self) -> dict[str, str | None]:
        return {
            "parameter": self.parameter,
            "reason": self.reason,
            "token": self.token,
            "expected": self.expected,
        }


@dataclass(frozen=True)
class ListQueryParams:
    """Validated list query ready for a query builder."""
    fields: FieldsExpression
    sort: SortExpression
    filter: FilterExpression
    limit: int


def parse_limit(raw: str | None) -> int:
    """Parse ``limit``; empty means the configured default."""
    if raw is None or raw == "":
        record_validation("limit", None)
        return settings.default_limit
    expected = f"integer between {settings.min_limit} and {settings.max_limit}"
    if not _LIMIT_RE.fullmatch(raw):
        record_validation("limit", "not_an_integer")
        raise ListQueryError("limit", "not_an_integer", token=raw, expected=expected)
    limit = int(raw)
    if limit < settings.min_limit or limit > settings.max_limit:
        record_validation("limit", "out_of_range")
        raise ListQueryError("limit", "out_of_range", token=raw, expected=expected)
    record_validation("limit", None)
    return limit


def _check_length(parameter: str, raw: str) -> None:
    if len(raw) > settings.max_expression_length:
        record_validation(parameter, "too_long")
        raise ListQueryError(
            parameter,
            "too_long",
            expected=f"at most {settings.max_expression_length} characters",
        )


def parse_list_query_params(
    resource: ResourceColumns,
    fields: str = "",
    sort: str = "",
    filter: str = "",
    limit: str | None = None,
) -> ListQueryParams:
    """Validate the list parameters of ``resource`` in sort, filter, fields order."""
    parsed: dict[str, object] = {}
    for parameter, parser, allow_list, raw in (
        ("sort", parse_sort, resource.sort, sort),
        ("filter", parse_filter, resource.filter, filter),
        ("fields", parse_fields, resource.fields, fields),
    ):
        _check_length(parameter, raw)
        try:
            parsed[parameter] = parser(allow_list, raw)
        except QueryValidationError as exc:
            record_validation(parameter, exc.reason.value)
            logger.info(
                "list_query_rejected",
                extra={
                    "resource": resource.name,
                    "parameter": parameter,
                    "reason": exc.reason.value,
                    "token": exc.token,
                },
            )
            raise ListQueryError.from_validation(parameter, exc) from exc
        record_validation(parameter, None)
    return ListQueryParams(
        fields=parsed["fields"],
        sort=parsed["sort"],
        filter=parsed["filter"],
        limit=parse_limit(limit),
    )

