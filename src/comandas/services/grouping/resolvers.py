"""Per-dimension resolvers that place a comanda inside the grouping tree."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ...models.domain import GroupingValue
from ..records import dig, format_number, id_or_none, normalize_text, to_number

DEFAULT_LABEL = "—"
SORT_PAD_WIDTH = 12
MISSING_NUMBER_KEY = "__sin_nro__"


def sum_items_cantidad(items: Any) -> int | float:
    if not isinstance(items, (list, tuple)) or not items:
        return 0
    return sum(to_number(dig(item, "cantidad")) for item in items)


def format_products_summary(items: Any) -> str:
    """Summarize line items as ``"<descripcion> <presentacion> (<cantidad>)"`` joined by ``" - "``."""

    if not isinstance(items, (list, tuple)) or not items:
        return DEFAULT_LABEL

    summaries: list[str] = []
    for item in items:
        descripcion = normalize_text(dig(item, "codprod", "descripcion"))
        presentacion = normalize_text(dig(item, "codprod", "presentacion"))
        cantidad_text = format_number(dig(item, "cantidad")).strip()
        label = " ".join(part for part in (descripcion, presentacion) if part).strip()
        if not label or not cantidad_text:
            continue
        summaries.append(f"{label} ({cantidad_text})")

    return " - ".join(summaries) if summaries else DEFAULT_LABEL


def build_grouping_value(
    *,
    key: Any,
    label: Any,
    raw_value: Any = None,
    sort_value: Any = None,
    fallback_key: Optional[str] = None,
) -> GroupingValue:
    safe_label = str(label).strip() if label else DEFAULT_LABEL
    if key is not None and key != "":
        normalized_key = str(key)
    else:
        normalized_key = (fallback_key if fallback_key is not None else safe_label) or DEFAULT_LABEL

    if sort_value is not None:
        normalized_sort = str(sort_value).lower()
    else:
        normalized_sort = (safe_label or DEFAULT_LABEL).lower()

    return GroupingValue(
        key=normalized_key,
        label=safe_label or DEFAULT_LABEL,
        raw_value=raw_value,
        sort_value=normalized_sort,
    )


def _resolve_nrodecomanda(comanda: Any) -> GroupingValue:
    nro = dig(comanda, "nrodecomanda")
    if nro is None:
        return build_grouping_value(key=MISSING_NUMBER_KEY, label=DEFAULT_LABEL)
    label = format_number(nro).strip()
    return build_grouping_value(
        key=label,
        label=label,
        raw_value=nro,
        sort_value=label.rjust(SORT_PAD_WIDTH, "0"),
    )


def _resolve_cliente(comanda: Any) -> GroupingValue:
    cliente_id = id_or_none(dig(comanda, "codcli", "_id"))
    label = normalize_text(dig(comanda, "codcli", "razonsocial")) or DEFAULT_LABEL
    return build_grouping_value(
        key=cliente_id if cliente_id is not None else label.lower(),
        label=label,
        raw_value=cliente_id,
    )


def _resolve_ruta(comanda: Any) -> GroupingValue:
    ruta_id = id_or_none(dig(comanda, "codcli", "ruta", "_id")) or id_or_none(dig(comanda, "camion", "rutaId"))
    label = (
        normalize_text(dig(comanda, "codcli", "ruta", "ruta"))
        or normalize_text(dig(comanda, "camion", "ruta"))
        or DEFAULT_LABEL
    )
    return build_grouping_value(
        key=ruta_id if ruta_id is not None else label.lower(),
        label=label,
        raw_value=ruta_id,
    )


def _resolve_producto(comanda: Any) -> GroupingValue:
    summary = format_products_summary(dig(comanda, "items"))
    return build_grouping_value(key=summary.lower(), label=summary)


def _resolve_rubro(comanda: Any) -> GroupingValue:
    # The first line item decides the category of the whole comanda.
    rubro_id = id_or_none(dig(comanda, "items", 0, "codprod", "rubro", "_id"))
    label = normalize_text(dig(comanda, "items", 0, "codprod", "rubro", "descripcion")) or DEFAULT_LABEL
    return build_grouping_value(
        key=rubro_id if rubro_id is not None else label.lower(),
        label=label,
        raw_value=rubro_id,
    )


def _resolve_camion(comanda: Any) -> GroupingValue:
    camion_id = id_or_none(dig(comanda, "camion", "_id"))
    label = normalize_text(dig(comanda, "camion", "camion")) or DEFAULT_LABEL
    return build_grouping_value(
        key=camion_id if camion_id is not None else label.lower(),
        label=label,
        raw_value=camion_id,
    )


GROUPING_RESOLVERS: Dict[str, Callable[[Any], GroupingValue]] = {
    "nrodecomanda": _resolve_nrodecomanda,
    "cliente": _resolve_cliente,
    "ruta": _resolve_ruta,
    "producto": _resolve_producto,
    "rubro": _resolve_rubro,
    "camion": _resolve_camion,
}

ALLOWED_GROUPING_COLUMNS: tuple[str, ...] = tuple(GROUPING_RESOLVERS)
