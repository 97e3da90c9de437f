"""Logistics status helpers: name normalization, rank lookup and colour classification."""

from __future__ import annotations

import unicodedata
from typing import Any, Optional

from ..records import dig

COLOR_BLUE = "#1E88E5"
COLOR_YELLOW = "#FFC107"
COLOR_GREEN = "#2E7D32"
COLOR_ORANGE = "#FB8C00"
COLOR_RED = "#D32F2F"

LOGISTICS_STATUS_COLORS = {
    "blue": COLOR_BLUE,
    "yellow": COLOR_YELLOW,
    "green": COLOR_GREEN,
    "orange": COLOR_ORANGE,
    "red": COLOR_RED,
}

# Checked in order; the first rule with a matching substring wins.
STATUS_COLOR_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("entregado", "finalizado", "completado"), COLOR_GREEN),
    (("pendiente", "solicitado", "nuevo"), COLOR_YELLOW),
    (("demorado", "demora", "reprogramado", "postergado"), COLOR_ORANGE),
    (("cancelado", "rechazado", "anulado", "devuelto", "no entregado"), COLOR_RED),
    (("transito", "camino", "enviado", "curso", "asignado"), COLOR_BLUE),
)


def normalize_estado_nombre(value: Any) -> str:
    """Strip diacritics, surrounding whitespace and case from a status name."""

    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.strip().lower()


def resolve_estado_orden(estado: Any) -> Optional[int | float]:
    orden = dig(estado, "orden")
    if isinstance(orden, bool) or not isinstance(orden, (int, float)):
        return None
    return orden


def get_logistics_status_color(estado: Any) -> str:
    normalized = normalize_estado_nombre(estado)
    if not normalized:
        return COLOR_BLUE

    for matchers, color in STATUS_COLOR_RULES:
        if any(matcher in normalized for matcher in matchers):
            return color
    return COLOR_BLUE
