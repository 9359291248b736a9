from __future__ import annotations

from functools import lru_cache

from src.app.resources import ResourceRegistry
from src.app.settings import settings


@lru_cache
def get_resource_registry() -> ResourceRegistry:
    return ResourceRegistry(overrides=settings.resource_columns)


def reset_resource_cache() -> None:
    get_resource_registry.cache_clear()
