"""Tolerant accessors for populated comanda documents."""

from __future__ import annotations

import math
from typing import Any, Mapping


def dig(value: Any, *path: str | int) -> Any:
    """Follow ``path`` through nested mappings/lists, returning None on any gap."""

    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, (list, tuple)) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def normalize_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def to_number(value: Any) -> int | float:
    """Coerce a quantity to a number; anything unparseable counts as zero."""

    if value is None:
        return 0
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip() or 0)
        except ValueError:
            return 0
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return number


def format_number(value: Any) -> str:
    """Render a scalar as text, dropping the ``.0`` of integral floats."""

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def id_or_none(value: Any) -> str | None:
    return str(value) if value else None
