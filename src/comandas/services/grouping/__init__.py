"""Comanda grouping helpers."""

from .resolvers import (
    ALLOWED_GROUPING_COLUMNS,
    DEFAULT_LABEL,
    build_grouping_value,
    format_products_summary,
    sum_items_cantidad,
)
from .service import build_comanda_groups, iter_leaf_groups, sanitize_grouping

__all__ = [
    "ALLOWED_GROUPING_COLUMNS",
    "DEFAULT_LABEL",
    "build_comanda_groups",
    "build_grouping_value",
    "format_products_summary",
    "iter_leaf_groups",
    "sanitize_grouping",
    "sum_items_cantidad",
]
