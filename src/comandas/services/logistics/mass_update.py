"""Planning of logistics mass updates over a batch of comandas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Collection, Mapping, Optional, Sequence

from ...config import settings
from ...models.domain import ComandaPlan, FieldState, FieldSummary, MassUpdatePlan
from ..records import dig, format_number, normalize_text
from .status import normalize_estado_nombre, resolve_estado_orden

logger = logging.getLogger(__name__)

FIELD_ESTADO = "estado"
FIELD_CAMIONERO = "camionero"
FIELD_CAMION = "camion"
FIELD_PUNTO_DISTRIBUCION = "puntoDistribucion"

MASS_UPDATE_FIELD_KEYS = (FIELD_ESTADO, FIELD_CAMIONERO, FIELD_CAMION, FIELD_PUNTO_DISTRIBUCION)

ACTION_UPDATE = "update"
ACTION_SKIP = "skip"

REASON_NOT_SELECTED = "notSelected"
REASON_UNCHANGED = "unchanged"
REASON_ALREADY_ASSIGNED = "alreadyAssigned"

DEFAULT_CLIENTE = "Cliente sin nombre"


@dataclass(slots=True, frozen=True)
class _FieldRule:
    key: str
    label: str
    payload_key: str
    # Status overwrites any different value; every other field only fills blanks.
    overwrite: bool
    current_value: Callable[[Any], Optional[str]]
    current_label: Callable[[Any], Optional[str]]


def _reference_id(value: Any) -> Optional[str]:
    """Id of a populated reference, or the bare id when it was never populated."""

    if isinstance(value, Mapping):
        ref_id = value.get("_id")
        return str(ref_id) if ref_id else None
    if isinstance(value, (list, tuple, set)):
        return None
    return str(value) if value else None


def format_camionero_name(camionero: Any) -> str:
    if not isinstance(camionero, Mapping):
        return ""
    nombres = camionero.get("nombres")
    apellidos = camionero.get("apellidos")
    return f"{nombres if nombres is not None else ''} {apellidos if apellidos is not None else ''}".strip()


def format_camion_label(camion: Any) -> str:
    label = dig(camion, "camion")
    return str(label) if label is not None else ""


def _estado_label(comanda: Any) -> Optional[str]:
    label = dig(comanda, "codestado", "estado")
    return str(label) if label is not None else None


def _punto_value(comanda: Any) -> Optional[str]:
    value = dig(comanda, "puntoDistribucion")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return format_number(value).strip() or None


FIELD_RULES: tuple[_FieldRule, ...] = (
    _FieldRule(
        key=FIELD_ESTADO,
        label="Estado logístico",
        payload_key="codestado",
        overwrite=True,
        current_value=lambda comanda: _reference_id(dig(comanda, "codestado")),
        current_label=_estado_label,
    ),
    _FieldRule(
        key=FIELD_CAMIONERO,
        label="Camionero / Chofer",
        payload_key="camionero",
        overwrite=False,
        current_value=lambda comanda: _reference_id(dig(comanda, "camionero")),
        current_label=lambda comanda: format_camionero_name(dig(comanda, "camionero")),
    ),
    _FieldRule(
        key=FIELD_CAMION,
        label="Camión",
        payload_key="camion",
        overwrite=False,
        current_value=lambda comanda: _reference_id(dig(comanda, "camion")),
        current_label=lambda comanda: format_camion_label(dig(comanda, "camion")),
    ),
    _FieldRule(
        key=FIELD_PUNTO_DISTRIBUCION,
        label="Punto de distribución",
        payload_key="puntoDistribucion",
        overwrite=False,
        current_value=_punto_value,
        current_label=_punto_value,
    ),
)


@dataclass(slots=True, frozen=True)
class _Selection:
    value: Any
    label: Optional[str]

    @property
    def selected(self) -> bool:
        return bool(self.value)


def _parse_selections(selections: Any) -> dict[str, _Selection]:
    if not isinstance(selections, Mapping):
        selections = {}

    parsed: dict[str, _Selection] = {}
    for key in (FIELD_ESTADO, FIELD_CAMIONERO, FIELD_CAMION):
        raw = selections.get(key)
        label = dig(raw, "label")
        parsed[key] = _Selection(
            value=dig(raw, "id"),
            label=str(label) if label is not None else None,
        )

    punto = normalize_text(selections.get(FIELD_PUNTO_DISTRIBUCION))
    parsed[FIELD_PUNTO_DISTRIBUCION] = _Selection(value=punto, label=punto or None)
    return parsed


def _classify(rule: _FieldRule, selection: _Selection, current: Optional[str]) -> tuple[str, Optional[str]]:
    if not selection.selected:
        return ACTION_SKIP, REASON_NOT_SELECTED
    if rule.overwrite:
        if current is not None and current == str(selection.value):
            return ACTION_SKIP, REASON_UNCHANGED
        return ACTION_UPDATE, None
    if current:
        return ACTION_SKIP, REASON_ALREADY_ASSIGNED
    return ACTION_UPDATE, None


def _count(summary: FieldSummary, action: str, reason: Optional[str]) -> None:
    if action == ACTION_UPDATE:
        summary.update_count += 1
    elif reason == REASON_NOT_SELECTED:
        summary.skip_not_selected_count += 1
    elif reason == REASON_UNCHANGED:
        summary.skip_unchanged_count += 1
    elif reason == REASON_ALREADY_ASSIGNED:
        summary.skip_already_assigned_count += 1


def build_mass_update_plan(comandas: Sequence[Any] | None = None, selections: Any = None) -> MassUpdatePlan:
    """Decide, for every comanda and logistics field, whether a mass update applies.

    Status changes whenever the selected status differs from the current one.
    Driver, truck and distribution point are only filled in when empty, so a
    mass update never overwrites an existing assignment. The returned plan
    carries per-comanda payloads restricted to the fields that change, plus a
    per-field summary for the confirmation dialog.
    """

    if comandas is None:
        comandas = []
    elif not isinstance(comandas, (list, tuple)):
        logger.warning("Mass update planning received %s instead of a list; planning nothing", type(comandas).__name__)
        comandas = []

    parsed = _parse_selections(selections)
    summary = {
        rule.key: FieldSummary(key=rule.key, label=rule.label, next_label=parsed[rule.key].label)
        for rule in FIELD_RULES
    }

    plans: list[ComandaPlan] = []
    has_changes = False

    for comanda in comandas:
        cliente = dig(comanda, "codcli", "razonsocial")
        plan = ComandaPlan(
            id=dig(comanda, "_id"),
            numero=dig(comanda, "nrodecomanda"),
            cliente=str(cliente) if cliente is not None else DEFAULT_CLIENTE,
        )

        for rule in FIELD_RULES:
            selection = parsed[rule.key]
            action, reason = _classify(rule, selection, rule.current_value(comanda))
            _count(summary[rule.key], action, reason)
            if action == ACTION_UPDATE:
                plan.payload[rule.payload_key] = selection.value
            plan.field_states[rule.key] = FieldState(
                action=action,
                reason=reason,
                current_label=rule.current_label(comanda),
                next_label=selection.label,
            )

        if plan.payload:
            has_changes = True
        plans.append(plan)

    logger.debug(
        "Mass update plan for %d comandas: %s",
        len(plans),
        {key: entry.update_count for key, entry in summary.items()},
    )
    return MassUpdatePlan(
        comandas=plans,
        summary=summary,
        has_changes=has_changes,
        total_comandas=len(comandas),
    )


def detect_state_regression(
    comandas: Sequence[Any] | None,
    next_estado: Any,
    resolve_estado_orden: Callable[[Any], Optional[int | float]] | None = resolve_estado_orden,
    restricted_status_set: Collection[str] | None = None,
    normalize_estado_nombre: Callable[[Any], str] | None = normalize_estado_nombre,
) -> bool:
    """Return True when the batch would move a comanda back from a restricted status.

    A comanda regresses when its current status name (normalized) belongs to
    ``restricted_status_set`` and its rank is strictly greater than the rank of
    ``next_estado``. Missing ranks never count as a regression.
    """

    if not next_estado or not callable(resolve_estado_orden):
        return False
    next_order = resolve_estado_orden(next_estado)
    if next_order is None:
        return False

    if restricted_status_set is None:
        restricted_status_set = settings.restricted_status_set()

    for comanda in comandas if isinstance(comandas, (list, tuple)) else ():
        current_estado = dig(comanda, "codestado")
        if not current_estado:
            continue
        current_name = normalize_estado_nombre(dig(current_estado, "estado") or "") if callable(normalize_estado_nombre) else ""
        if current_name not in restricted_status_set:
            continue
        current_order = resolve_estado_orden(current_estado)
        if current_order is None:
            continue
        try:
            regresses = next_order < current_order
        except TypeError:
            # Ranks of unrelated types cannot be ordered.
            continue
        if regresses:
            logger.debug(
                "Comanda %s would regress from '%s' (%s) to rank %s",
                dig(comanda, "nrodecomanda"),
                current_name,
                current_order,
                next_order,
            )
            return True
    return False
