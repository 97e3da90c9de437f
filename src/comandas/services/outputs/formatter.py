"""Utilities to serialize grouping trees and mass-update plans into JSON/CSV artifacts."""

from __future__ import annotations

import csv
import io
from typing import Any, Sequence

from ...models.domain import ComandaPlan, FieldState, FieldSummary, GroupNode, MassUpdatePlan
from ..grouping.service import iter_leaf_groups
from ..records import dig, format_number


def group_node_to_json(node: GroupNode) -> dict:
    return {
        "id": node.id,
        "columnId": node.column_id,
        "label": node.label,
        "rawValue": node.raw_value,
        "key": node.key,
        "count": node.count,
        "cantidadTotal": node.cantidad_total,
        "path": [
            {"columnId": segment.column_id, "label": segment.label, "key": segment.key}
            for segment in node.path
        ],
        "groups": [group_node_to_json(child) for child in node.groups],
        "comandas": list(node.comandas),
    }


def groups_to_json(groups: Sequence[GroupNode]) -> list[dict]:
    return [group_node_to_json(group) for group in groups]


def groups_to_csv(groups: Sequence[GroupNode], grouping: Sequence[str]) -> str:
    """Flatten a grouping tree into one CSV row per leaf group."""

    buffer = io.StringIO()
    fieldnames = ["path", *grouping, "count", "cantidad_total", "comandas"]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for leaf in iter_leaf_groups(groups):
        row: dict[str, Any] = {column_id: "" for column_id in grouping}
        for segment in leaf.path:
            row[segment.column_id] = segment.label
        row["path"] = " / ".join(segment.label for segment in leaf.path)
        row["count"] = leaf.count
        row["cantidad_total"] = format_number(leaf.cantidad_total)
        row["comandas"] = "|".join(
            format_number(dig(comanda, "nrodecomanda")) for comanda in leaf.comandas
        )
        writer.writerow(row)
    return buffer.getvalue()


def _field_state_to_json(state: FieldState) -> dict:
    payload = {
        "action": state.action,
        "currentLabel": state.current_label,
        "nextLabel": state.next_label,
    }
    if state.reason is not None:
        payload["reason"] = state.reason
    return payload


def _field_summary_to_json(summary: FieldSummary) -> dict:
    return {
        "key": summary.key,
        "label": summary.label,
        "nextLabel": summary.next_label,
        "updateCount": summary.update_count,
        "skipAlreadyAssignedCount": summary.skip_already_assigned_count,
        "skipNotSelectedCount": summary.skip_not_selected_count,
        "skipUnchangedCount": summary.skip_unchanged_count,
    }


def _comanda_plan_to_json(plan: ComandaPlan) -> dict:
    return {
        "id": plan.id,
        "numero": plan.numero,
        "cliente": plan.cliente,
        "fieldStates": {key: _field_state_to_json(state) for key, state in plan.field_states.items()},
        "payload": dict(plan.payload),
    }


def mass_update_plan_to_json(plan: MassUpdatePlan) -> dict:
    return {
        "comandas": [_comanda_plan_to_json(item) for item in plan.comandas],
        "summary": {key: _field_summary_to_json(entry) for key, entry in plan.summary.items()},
        "hasChanges": plan.has_changes,
        "totalComandas": plan.total_comandas,
    }
