"""Logistics mass-update planning and status helpers."""

from .mass_update import (
    MASS_UPDATE_FIELD_KEYS,
    build_mass_update_plan,
    detect_state_regression,
)
from .status import (
    LOGISTICS_STATUS_COLORS,
    get_logistics_status_color,
    normalize_estado_nombre,
    resolve_estado_orden,
)

__all__ = [
    "MASS_UPDATE_FIELD_KEYS",
    "LOGISTICS_STATUS_COLORS",
    "build_mass_update_plan",
    "detect_state_regression",
    "get_logistics_status_color",
    "normalize_estado_nombre",
    "resolve_estado_orden",
]
