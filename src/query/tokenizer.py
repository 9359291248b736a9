from __future__ import annotations


def tokenize_fields(raw: str) -> list[str]:
    """Split a comma-separated projection and trim each token.

    Empty pieces are kept as ``""`` so the column gate rejects them.
    """
    return [token.strip() for token in raw.split(",")]


def tokenize_sort(raw: str) -> list[str]:
    """Split a sort expression on commas without trimming."""
    return raw.split(",")


def split_sort_token(token: str) -> tuple[str, str | None]:
    """Split ``"column DIRECTION"`` on its first run of whitespace."""
    parts = token.split(None, 1)
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1].strip()


def get_fields(raw: str) -> list[str]:
    """Return the projection columns a query builder should select."""
    if not raw:
        return []
    return tokenize_fields(raw)
