from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str = os.getenv("LISTQ_LOG_LEVEL", "INFO")
    metrics_enabled_raw: str = os.getenv("LISTQ_METRICS_ENABLED", "true")
    default_limit_raw: int = _int_env("LISTQ_DEFAULT_LIMIT", 10)
    min_limit_raw: int = _int_env("LISTQ_MIN_LIMIT", 1)
    max_limit_raw: int = _int_env("LISTQ_MAX_LIMIT", 1000)
    max_expression_length_raw: int = _int_env("LISTQ_MAX_EXPRESSION_LENGTH", 2048)
    resource_columns_raw: str = os.getenv("LISTQ_RESOURCE_COLUMNS", "")

    @property
    def metrics_enabled(self) -> bool:
        raw = os.getenv("LISTQ_METRICS_ENABLED", self.metrics_enabled_raw)
        return raw.strip().lower() in {"1", "true", "yes"}

    @property
    def default_limit(self) -> int:
        return _int_env("LISTQ_DEFAULT_LIMIT", self.default_limit_raw)

    @property
    def min_limit(self) -> int:
        return _int_env("LISTQ_MIN_LIMIT", self.min_limit_raw)

    @property
    def max_limit(self) -> int:
        return _int_env("LISTQ_MAX_LIMIT", self.max_limit_raw)

    @property
    def max_expression_length(self) -> int:
        return _int_env("LISTQ_MAX_EXPRESSION_LENGTH", self.max_expression_length_raw)

    @property
    def resource_columns(self) -> dict[str, dict[str, list[str]]]:
        """Per-resource allow-list overrides, e.g. ``{"users": {"sort": ["id"]}}``."""
        raw = os.getenv("LISTQ_RESOURCE_COLUMNS", self.resource_columns_raw).strip()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        if not isinstance(data, dict):
            return {}
        result: dict[str, dict[str, list[str]]] = {}
        for resource, value in data.items():
            if not isinstance(resource, str) or not isinstance(value, dict):
                continue
            lists: dict[str, list[str]] = {}
            for kind in ("fields", "filter", "sort"):
                columns = value.get(kind)
                if isinstance(columns, list) and all(isinstance(c, str) for c in columns):
                    lists[kind] = [column.strip() for column in columns if column.strip()]
            if lists:
                result[resource.strip().lower()] = lists
        return result


settings = Settings()
