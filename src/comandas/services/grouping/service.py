"""Grouping of comandas into a per-dimension tree with counts and quantity totals."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from ...models.domain import GroupNode, GroupPathSegment
from ..records import dig
from .resolvers import ALLOWED_GROUPING_COLUMNS, GROUPING_RESOLVERS, sum_items_cantidad

logger = logging.getLogger(__name__)


def sanitize_grouping(grouping: Any) -> list[str]:
    """Keep the allowed dimension names in order, dropping unknown names and repeats."""

    if not isinstance(grouping, (list, tuple)) or not grouping:
        return []

    seen: set[str] = set()
    result: list[str] = []
    dropped: list[Any] = []
    for column_id in grouping:
        if not isinstance(column_id, str) or column_id not in ALLOWED_GROUPING_COLUMNS:
            dropped.append(column_id)
            continue
        if column_id in seen:
            continue
        seen.add(column_id)
        result.append(column_id)

    if dropped:
        logger.debug("Ignoring unknown grouping columns: %s", dropped)
    return result


class _PendingNode:
    """Mutable accumulator used while folding comandas into the tree."""

    __slots__ = ("node", "children")

    def __init__(self, node: GroupNode) -> None:
        self.node = node
        self.children: Dict[str, "_PendingNode"] = {}


def build_comanda_groups(comandas: Sequence[Any], grouping: Sequence[str]) -> List[GroupNode]:
    sanitized = sanitize_grouping(grouping)
    if not isinstance(comandas, (list, tuple)) or not comandas or not sanitized:
        return []

    root: Dict[str, _PendingNode] = {}
    last_index = len(sanitized) - 1

    for comanda in comandas:
        total_cantidad = sum_items_cantidad(dig(comanda, "items"))
        level = root

        for index, column_id in enumerate(sanitized):
            resolved = GROUPING_RESOLVERS[column_id](comanda)
            group_key = f"{column_id}::{resolved.key}"
            pending = level.get(group_key)
            if pending is None:
                pending = _PendingNode(
                    GroupNode(
                        id=group_key,
                        column_id=column_id,
                        label=resolved.label,
                        raw_value=resolved.raw_value,
                        key=resolved.key,
                        sort_value=resolved.sort_value,
                    )
                )
                level[group_key] = pending

            pending.node.count += 1
            pending.node.cantidad_total += total_cantidad

            if index == last_index:
                pending.node.comandas.append(comanda)
            else:
                level = pending.children

    groups = _finalize(root, [])
    logger.debug(
        "Grouped %d comandas by %s into %d top-level groups",
        len(comandas),
        sanitized,
        len(groups),
    )
    return groups


def _finalize(level: Dict[str, _PendingNode], parent_path: list[GroupPathSegment]) -> List[GroupNode]:
    ordered = sorted(level.values(), key=lambda pending: pending.node.sort_value or "")
    nodes: List[GroupNode] = []
    for pending in ordered:
        node = pending.node
        node.path = [
            *parent_path,
            GroupPathSegment(column_id=node.column_id, label=node.label, key=node.key),
        ]
        node.groups = _finalize(pending.children, node.path)
        nodes.append(node)
    return nodes


def iter_leaf_groups(groups: Sequence[GroupNode]):
    """Yield the leaf nodes of a grouping tree in display order."""

    for group in groups:
        if group.groups:
            yield from iter_leaf_groups(group.groups)
        else:
            yield group
