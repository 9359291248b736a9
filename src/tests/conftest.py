from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("LISTQ_METRICS_ENABLED", "true")
os.environ.pop("LISTQ_RESOURCE_COLUMNS", None)
os.environ.pop("LISTQ_DEFAULT_LIMIT", None)
os.environ.pop("LISTQ_MIN_LIMIT", None)
os.environ.pop("LISTQ_MAX_LIMIT", None)
os.environ.pop("LISTQ_MAX_EXPRESSION_LENGTH", None)
