from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from src.app.params import ListQueryParams
from src.app.resources import ResourceColumns
from src.query.types import Number


class ResourceResponse(BaseModel):
    name: str
    fields: list[str]
    filter: list[str]
    sort: list[str]

    @classmethod
    def from_columns(cls, resource: ResourceColumns) -> ResourceResponse:
        return cls(
            name=resource.name,
            fields=list(resource.fields),
            filter=list(resource.filter),
            sort=list(resource.sort),
        )


class ResourcesResponse(BaseModel):
    resources: list[ResourceResponse]


class SortKeyResponse(BaseModel):
    column: str
    direction: Literal["ASC", "DESC"]


class FilterConditionResponse(BaseModel):
    column: str
    comparator: str
    literal: str
    literal_type: Literal["string", "number"]
    value: str | int | Decimal


class FilterResponse(BaseModel):
    conditions: list[FilterConditionResponse] = Field(default_factory=list)
    connectives: list[Literal["AND", "OR"]] = Field(default_factory=list)
    groups: list[tuple[int, int]] = Field(default_factory=list)


class ListQueryResponse(BaseModel):
    resource: str
    fields: list[str]
    sort: list[SortKeyResponse]
    filter: FilterResponse
    limit: int
    request_id: str

    @classmethod
    def from_params(cls, resource: str, params: ListQueryParams, request_id: str) -> ListQueryResponse:
        conditions = [
            FilterConditionResponse(
                column=condition.column,
                comparator=condition.comparator.value,
                literal=condition.literal.raw,
                literal_type="number" if isinstance(condition.literal, Number) else "string",
                value=condition.literal.value,
            )
            for condition in params.filter.conditions
        ]
        return cls(
            resource=resource,
            fields=list(params.fields.columns),
            sort=[
                SortKeyResponse(column=key.column, direction=key.direction.value)
                for key in params.sort.keys
            ],
            filter=FilterResponse(
                conditions=conditions,
                connectives=[connective.value for connective in params.filter.connectives],
                groups=list(params.filter.groups),
            ),
            limit=params.limit,
            request_id=request_id,
        )


class QueryErrorDetail(BaseModel):
    parameter: str
    reason: str
    token: str | None = None
    expected: str | None = None


class QueryErrorResponse(BaseModel):
    detail: QueryErrorDetail
