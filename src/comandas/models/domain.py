"""Domain models for grouped comandas and logistics mass-update plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(slots=True)
class GroupingValue:
    """Resolved grouping coordinates of a comanda along one dimension."""

    key: str
    label: str
    raw_value: Any
    sort_value: str


@dataclass(slots=True)
class GroupPathSegment:
    column_id: str
    label: str
    key: str


@dataclass(slots=True)
class GroupNode:
    """One bucket of the grouping tree.

    Every comanda that passes through the node adds to ``count`` and
    ``cantidad_total``; only leaf nodes keep the comandas themselves.
    """

    id: str
    column_id: str
    label: str
    raw_value: Any
    key: str
    sort_value: str
    count: int = 0
    cantidad_total: float = 0
    path: List[GroupPathSegment] = field(default_factory=list)
    groups: List["GroupNode"] = field(default_factory=list)
    comandas: List[dict] = field(default_factory=list)


@dataclass(slots=True)
class FieldState:
    action: str
    current_label: Optional[str]
    next_label: Optional[str]
    reason: Optional[str] = None


@dataclass(slots=True)
class FieldSummary:
    """Per-field counters accumulated across a mass-update batch."""

    key: str
    label: str
    next_label: Optional[str] = None
    update_count: int = 0
    skip_already_assigned_count: int = 0
    skip_not_selected_count: int = 0
    skip_unchanged_count: int = 0


@dataclass(slots=True)
class ComandaPlan:
    id: Any
    numero: Any
    cliente: str
    field_states: dict[str, FieldState] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MassUpdatePlan:
    comandas: List[ComandaPlan]
    summary: dict[str, FieldSummary]
    has_changes: bool
    total_comandas: int
