from __future__ import annotations

"""Typed values produced by the list query parsers."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union


class SortDirection(str, Enum):
    """Sort direction keyword."""
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def from_keyword(cls, keyword: str) -> SortDirection | None:
        try:
            return cls(keyword.upper())
        except ValueError:
            return None


class Connective(str, Enum):
    """Boolean connective joining two filter conditions."""
    AND = "AND"
    OR = "OR"

    @classmethod
    def from_keyword(cls, keyword: str) -> Connective | None:
        try:
            return cls(keyword.upper())
        except ValueError:
            return None


class Comparator(str, Enum):
    """Filter comparator."""
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="


STRING_COMPARATORS = frozenset({Comparator.EQUAL, Comparator.NOT_EQUAL})
NUMBER_COMPARATORS = frozenset(
    {
        Comparator.EQUAL,
        Comparator.GREATER_THAN,
        Comparator.GREATER_OR_EQUAL,
        Comparator.LESS_THAN,
        Comparator.LESS_OR_EQUAL,
    }
)


@dataclass(frozen=True)
class QuotedString:
    """Single-quoted literal; ``raw`` keeps the quotes, ``value`` is unescaped."""
    raw: str
    value: str


@dataclass(frozen=True)
class Number:
    """Decimal literal kept as its source text; fractions stay exact."""
    raw: str

    @property
    def value(self) -> int | Decimal:
        try:
            return int(self.raw, 10)
        except ValueError:
            return Decimal(self.raw)


Literal = Union[QuotedString, Number]


@dataclass(frozen=True)
class FieldsExpression:
    columns: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.columns)


@dataclass(frozen=True)
class SortKey:
    column: str
    direction: SortDirection

    def __str__(self) -> str:
        return f"{self.column} {self.direction.value}"


@dataclass(frozen=True)
class SortExpression:
    keys: tuple[SortKey, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.keys)


@dataclass(frozen=True)
class FilterCondition:
    """A single ``column comparator literal`` triple."""
    column: str
    comparator: Comparator
    literal: Literal

    def __str__(self) -> str:
        return f"{self.column}{self.comparator.value}{self.literal.raw}"


@dataclass(frozen=True)
class FilterExpression:
    """Conditions in source order plus the connectives between them.

    ``groups`` holds one ``(first, last)`` pair of condition indexes, both
    inclusive, per parenthesised group, innermost groups first.
    """
    conditions: tuple[FilterCondition, ...] = ()
    connectives: tuple[Connective, ...] = ()
    groups: tuple[tuple[int, int], ...] = ()

    def __bool__(self) -> bool:
        return bool(self.conditions)

    def __str__(self) -> str:
        parts: list[str] = []
        for index, condition in enumerate(self.conditions):
            if index:
                parts.append(f" {self.connectives[index - 1].value} ")
            opens = sum(1 for first, _ in self.groups if first == index)
            closes = sum(1 for _, last in self.groups if last == index)
            parts.append("(" * opens + str(condition) + ")" * closes)
        return "".join(parts)

    @property
    def columns(self) -> list[str]:
        return [condition.column for condition in self.conditions]

    @property
    def comparators(self) -> list[Comparator]:
        return [condition.comparator for condition in self.conditions]

    @property
    def literals(self) -> list[Literal]:
        return [condition.literal for condition in self.conditions]

    def is_consistent(self) -> bool:
        return len(self.connectives) == max(0, len(self.conditions) - 1)
