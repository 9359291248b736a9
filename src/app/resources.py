from __future__ import annotations

"""Column allow-lists for the list endpoints of each resource."""

from dataclasses import dataclass, replace
from typing import Mapping


@dataclass(frozen=True)
class ResourceColumns:
    """Columns a resource permits in fields, filter and sort expressions."""
    name: str
    fields: tuple[str, ...]
    filter: tuple[str, ...]
    sort: tuple[str, ...]


_DEFAULT_RESOURCES = (
    ResourceColumns(
        name="users",
        fields=("id", "first_name", "last_name", "email", "disabled", "created_at", "updated_at"),
        filter=("id", "first_name", "last_name", "email", "disabled", "created_at", "updated_at"),
        sort=("id", "first_name", "last_name", "email", "disabled", "created_at", "updated_at"),
    ),
    ResourceColumns(
        name="roles",
        fields=(
            "id",
            "policy",
            "name",
            "description",
            "system",
            "auto_assign",
            "created_at",
            "updated_at",
        ),
        filter=("id", "name", "system", "auto_assign", "created_at", "updated_at"),
        sort=("id", "name", "system", "auto_assign", "created_at", "updated_at"),
    ),
    ResourceColumns(
        name="policies",
        fields=(
            "id",
            "name",
            "description",
            "allowed_action",
            "allowed_resource",
            "system",
            "created_at",
            "updated_at",
        ),
        filter=(
            "id",
            "name",
            "allowed_action",
            "allowed_resource",
            "system",
            "created_at",
            "updated_at",
        ),
        sort=(
            "id",
            "name",
            "allowed_action",
            "allowed_resource",
            "system",
            "created_at",
            "updated_at",
        ),
    ),
    ResourceColumns(
        name="resources",
        fields=("id", "name", "description", "action", "resource", "system", "created_at", "updated_at"),
        filter=("id", "name", "action", "resource", "system", "created_at", "updated_at"),
        sort=("id", "name", "action", "resource", "system", "created_at", "updated_at"),
    ),
    ResourceColumns(
        name="projects",
        fields=("id", "name", "description", "disabled", "created_at", "updated_at"),
        filter=("id", "name", "disabled", "created_at", "updated_at"),
        sort=("id", "name", "disabled", "created_at", "updated_at"),
    ),
    ResourceColumns(
        name="products",
        fields=("id", "name", "description", "price", "currency", "created_at", "updated_at"),
        filter=("id", "name", "price", "currency", "created_at", "updated_at"),
        sort=("id", "name", "price", "currency", "created_at", "updated_at"),
    ),
)


class ResourceRegistry:
    """Lookup of resource allow-lists with optional per-resource overrides."""

    def __init__(
        self,
        resources: tuple[ResourceColumns, ...] = _DEFAULT_RESOURCES,
        overrides: Mapping[str, Mapping[str, list[str]]] | None = None,
    ) -> None:
        entries = {resource.name: resource for resource in resources}
        for name, lists in (overrides or {}).items():
            base = entries.get(name) or ResourceColumns(name=name, fields=(), filter=(), sort=())
            entries[name] = replace(
                base,
                **{kind: tuple(columns) for kind, columns in lists.items()},
            )
        self._entries = entries

    def get(self, name: str) -> ResourceColumns | None:
        return self._entries.get(name.strip().lower())

    def names(self) -> list[str]:
        return sorted(self._entries)

    def all(self) -> list[ResourceColumns]:
        return [self._entries[name] for name in self.names()]
