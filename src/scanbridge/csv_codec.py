from __future__ import annotations

from typing import Iterable


def split_csv(value: str | None) -> list[str]:
    """Split *value* on commas into trimmed, non-blank entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def join_csv(values: Iterable[str]) -> str:
    # Callers trim and filter; every element is kept in order.
    return ",".join(values)
