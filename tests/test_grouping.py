import copy

from comandas.services.grouping import (
    DEFAULT_LABEL,
    build_comanda_groups,
    format_products_summary,
    iter_leaf_groups,
    sanitize_grouping,
    sum_items_cantidad,
)


def _comanda(nro, cliente_id, razonsocial, ruta_id=None, ruta=None, items=None, camion=None) -> dict:
    codcli = {"_id": cliente_id, "razonsocial": razonsocial}
    if ruta_id or ruta:
        codcli["ruta"] = {"_id": ruta_id, "ruta": ruta}
    return {
        "_id": f"com-{nro}",
        "nrodecomanda": nro,
        "codcli": codcli,
        "camion": camion,
        "items": items if items is not None else [],
    }


def _sample_comandas() -> list[dict]:
    return [
        _comanda(1, "c1", "Bravo", "r1", "Norte", items=[{"cantidad": 3}]),
        _comanda(2, "c2", "Alfa", "r1", "Norte", items=[{"cantidad": 1}, {"cantidad": 2}]),
        _comanda(3, "c3", "Charlie", "r2", "Centro", items=[{"cantidad": "4"}]),
    ]


def test_single_client_groups_into_one_node():
    groups = build_comanda_groups(
        [{"nrodecomanda": 1, "codcli": {"_id": "c1", "razonsocial": "Acme"}}],
        ["cliente"],
    )

    assert len(groups) == 1
    node = groups[0]
    assert node.label == "Acme"
    assert node.count == 1
    assert node.id == "cliente::c1"
    assert node.key == "c1"
    assert node.raw_value == "c1"
    assert node.cantidad_total == 0
    assert len(node.comandas) == 1


def test_sanitize_grouping_drops_unknown_and_repeated_columns():
    assert sanitize_grouping(["foo", "cliente", "cliente", "ruta", 7]) == ["cliente", "ruta"]
    assert sanitize_grouping([]) == []
    assert sanitize_grouping("cliente") == []
    assert sanitize_grouping(None) == []


def test_empty_grouping_or_records_yield_no_groups():
    comandas = _sample_comandas()

    assert build_comanda_groups(comandas, ["unknown"]) == []
    assert build_comanda_groups(comandas, []) == []
    assert build_comanda_groups([], ["cliente"]) == []
    assert build_comanda_groups(None, ["cliente"]) == []


def test_nested_groups_accumulate_counts_and_quantities():
    comandas = _sample_comandas()

    groups = build_comanda_groups(comandas, ["ruta", "cliente"])

    assert [group.label for group in groups] == ["Centro", "Norte"]
    centro, norte = groups
    assert centro.count == 1 and centro.cantidad_total == 4
    assert norte.count == 2 and norte.cantidad_total == 6
    assert norte.comandas == []

    assert [child.label for child in norte.groups] == ["Alfa", "Bravo"]
    alfa = norte.groups[0]
    assert alfa.id == "cliente::c2"
    assert alfa.cantidad_total == 3
    assert alfa.comandas == [comandas[1]]
    assert [(segment.column_id, segment.label, segment.key) for segment in alfa.path] == [
        ("ruta", "Norte", "r1"),
        ("cliente", "Alfa", "c2"),
    ]


def test_single_dimension_yields_one_node_per_distinct_key():
    comandas = [
        _comanda(1, "c1", "Bravo"),
        _comanda(2, "c2", "Alfa"),
        _comanda(3, "c1", "Bravo"),
        _comanda(4, "c2", "Alfa"),
        _comanda(5, "c3", "Alfa"),
    ]

    groups = build_comanda_groups(comandas, ["cliente"])

    distinct_keys = {comanda["codcli"]["_id"] for comanda in comandas}
    assert len(groups) <= len(distinct_keys)
    assert sorted(group.key for group in groups) == ["c1", "c2", "c3"]
    assert sum(group.count for group in groups) == len(comandas)
    assert [group.key for group in groups] == ["c2", "c3", "c1"]


def test_leaf_counts_and_quantities_cover_every_record():
    comandas = _sample_comandas()

    groups = build_comanda_groups(comandas, ["cliente", "producto", "nrodecomanda"])

    leaves = list(iter_leaf_groups(groups))
    assert sum(leaf.count for leaf in leaves) == len(comandas)
    assert sum(group.cantidad_total for group in groups) == sum(
        sum_items_cantidad(comanda["items"]) for comanda in comandas
    )


def test_order_numbers_sort_numerically():
    comandas = [
        {"nrodecomanda": 100},
        {"nrodecomanda": 9},
        {"codcli": {"razonsocial": "Sin numero"}},
        {"nrodecomanda": 10},
    ]

    groups = build_comanda_groups(comandas, ["nrodecomanda"])

    assert [group.label for group in groups] == ["9", "10", "100", DEFAULT_LABEL]
    assert groups[0].sort_value == "000000000009"
    assert groups[-1].key == "__sin_nro__"


def test_ties_keep_insertion_order():
    comandas = [
        _comanda(1, "a2", "Acme"),
        _comanda(2, "a1", "acme"),
    ]

    groups = build_comanda_groups(comandas, ["cliente"])

    assert [group.key for group in groups] == ["a2", "a1"]


def test_missing_data_falls_back_to_placeholder():
    groups = build_comanda_groups([{}], ["cliente", "ruta", "rubro", "camion", "producto"])

    node = groups[0]
    labels = [node.label]
    while node.groups:
        node = node.groups[0]
        labels.append(node.label)

    assert labels == [DEFAULT_LABEL] * 5
    assert node.comandas == [{}]


def test_ruta_falls_back_to_truck_route():
    comanda = {
        "codcli": {"_id": "c1", "razonsocial": "Acme"},
        "camion": {"_id": "t1", "camion": "Camión Azul", "rutaId": "r9", "ruta": "Ruta Oeste"},
    }

    groups = build_comanda_groups([comanda], ["ruta", "camion"])

    assert groups[0].label == "Ruta Oeste"
    assert groups[0].key == "r9"
    assert groups[0].groups[0].label == "Camión Azul"
    assert groups[0].groups[0].raw_value == "t1"


def test_rubro_uses_first_item_category():
    comanda = {
        "items": [
            {"cantidad": 1, "codprod": {"rubro": {"_id": "rb1", "descripcion": "Bebidas"}}},
            {"cantidad": 1, "codprod": {"rubro": {"_id": "rb2", "descripcion": "Almacén"}}},
        ]
    }

    groups = build_comanda_groups([comanda], ["rubro"])

    assert groups[0].label == "Bebidas"
    assert groups[0].id == "rubro::rb1"


def test_format_products_summary():
    items = [
        {"cantidad": 2, "codprod": {"descripcion": " Harina ", "presentacion": "1kg"}},
        {"cantidad": 3.0, "codprod": {"descripcion": "Azúcar"}},
        {"codprod": {"descripcion": "Sin cantidad"}},
        {"cantidad": 5, "codprod": {}},
    ]

    assert format_products_summary(items) == "Harina 1kg (2) - Azúcar (3)"
    assert format_products_summary([]) == DEFAULT_LABEL
    assert format_products_summary(None) == DEFAULT_LABEL
    assert format_products_summary([{"cantidad": 1}]) == DEFAULT_LABEL


def test_sum_items_cantidad_ignores_bad_quantities():
    items = [{"cantidad": 2}, {"cantidad": "3.5"}, {"cantidad": "n/a"}, {}, "broken"]

    assert sum_items_cantidad(items) == 5.5
    assert sum_items_cantidad(None) == 0


def test_grouping_is_pure_and_idempotent():
    comandas = _sample_comandas()
    snapshot = copy.deepcopy(comandas)

    first = build_comanda_groups(comandas, ["ruta", "cliente"])
    second = build_comanda_groups(comandas, ["ruta", "cliente"])

    assert comandas == snapshot
    assert [g.id for g in first] == [g.id for g in second]
    assert [[c.id for c in g.groups] for g in first] == [[c.id for c in g.groups] for g in second]
