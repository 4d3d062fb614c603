from __future__ import annotations

import random

from easy_box_packer.geometry import sorted_asc
from easy_box_packer.models import Container, Item, Packing, Space
from easy_box_packer.packing.first_fit import pack_items, packing_order, place_in_packing

from helpers import (
    assert_every_item_accounted,
    assert_no_overlaps,
    assert_within_container,
)


def cargo():
    return [
        Item(dimensions=(8, 8, 8)),
        Item(dimensions=(3, 3, 3)),
        Item(dimensions=(12, 1, 1)),
    ]


def test_packing_order_is_largest_first() -> None:
    items = [
        Item(dimensions=(3, 3, 3)),
        Item(dimensions=(1, 12, 1)),
        Item(dimensions=(8, 8, 8)),
        Item(dimensions=(3, 3, 3)),
    ]

    assert packing_order(items) == [1, 2, 0, 3]


def test_case_10_cube() -> None:
    """The long item never fits; the small cube has no room left next to the big one."""
    container = Container(dimensions=(10, 10, 10))
    items = cargo()

    result = pack_items(container, items)

    assert len(result.packings) == 2
    assert [p.item_index for p in result.packings[0].placements] == [0]
    assert [p.item_index for p in result.packings[1].placements] == [1]
    assert result.unpacked == [2]
    assert result.errors == ["Item: {dimensions=[12, 1, 1], weight=0} cannot be placed in container"]
    assert_every_item_accounted(result, len(items))


def test_case_11_cube() -> None:
    container = Container(dimensions=(11, 11, 11))
    items = cargo()

    result = pack_items(container, items)

    assert len(result.packings) == 1
    assert [p.item_index for p in result.packings[0].placements] == [0, 1]
    assert result.unpacked == [2]
    for packing in result.packings:
        assert_within_container(container, packing.placements)
        assert_no_overlaps(packing.placements)


def test_case_12_10_10() -> None:
    container = Container(dimensions=(10, 12, 10))
    items = cargo()

    result = pack_items(container, items)

    assert result.errors == []
    assert len(result.packings) == 1
    placements = result.packings[0].placements
    assert [p.item_index for p in placements] == [2, 0, 1]
    assert placements[0].dimensions == (12.0, 1.0, 1.0)
    assert placements[1].position == (0.0, 1.0, 0.0)
    assert_within_container(container, placements)
    assert_no_overlaps(placements)


def test_overweight_item_is_rejected() -> None:
    container = Container(dimensions=(10, 10, 10), weight_limit=1)

    result = pack_items(container, [Item(dimensions=(1, 1, 1), weight=5)])

    assert result.packings == []
    assert result.errors == ["Item: {dimensions=[1, 1, 1], weight=5} is too heavy for container"]
    assert result.unpacked == [0]


def test_too_big_item_is_rejected() -> None:
    container = Container(dimensions=(1, 1, 1), weight_limit=100)

    result = pack_items(container, [Item(dimensions=(2, 2, 2), weight=1)])

    assert result.packings == []
    assert len(result.errors) == 1
    assert "cannot be placed" in result.errors[0]


def test_zero_volume_container_rejects_everything() -> None:
    container = Container(dimensions=(0, 10, 10))
    items = [Item(dimensions=(1, 1, 1)), Item(dimensions=(2, 2, 2))]

    result = pack_items(container, items)

    assert result.packings == []
    assert len(result.errors) == 2
    assert sorted(result.unpacked) == [0, 1]


def test_weight_limit_opens_second_bin() -> None:
    container = Container(dimensions=(10, 10, 10), weight_limit=1000)
    items = [
        Item(dimensions=(2, 2, 2), weight=600),
        Item(dimensions=(2, 2, 2), weight=600),
    ]

    result = pack_items(container, items)

    assert result.errors == []
    assert len(result.packings) == 2
    assert [p.weight for p in result.packings] == [600, 600]


def test_spill_into_new_bin() -> None:
    """Items just under half the container each: two per bin, greedy stack too tall."""
    container = Container(dimensions=(10, 10, 10))
    items = [Item(dimensions=(10, 4.5, 10)) for _ in range(3)]

    result = pack_items(container, items)

    assert result.errors == []
    assert [len(p.placements) for p in result.packings] == [2, 1]
    for packing in result.packings:
        assert_within_container(container, packing.placements)
        assert_no_overlaps(packing.placements)


def test_fragmented_result_is_replaced_by_greedy_stack() -> None:
    """The long thin item splits the space so badly that the flat items spill over."""
    container = Container(dimensions=(12, 10, 3))
    items = [
        Item(dimensions=(12, 2, 1), weight=1),
        Item(dimensions=(10, 10, 1), weight=1),
        Item(dimensions=(10, 10, 1), weight=1),
    ]

    result = pack_items(container, items)

    assert result.errors == []
    assert len(result.packings) == 1
    packing = result.packings[0]
    assert packing.weight == 3
    assert [p.position for p in packing.placements] == [(0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 2.0)]
    assert_within_container(container, packing.placements)
    assert_no_overlaps(packing.placements)


def test_fragmented_result_is_kept_when_greedy_stack_is_too_heavy() -> None:
    container = Container(dimensions=(12, 10, 3), weight_limit=2)
    items = [
        Item(dimensions=(12, 2, 1), weight=1),
        Item(dimensions=(10, 10, 1), weight=1),
        Item(dimensions=(10, 10, 1), weight=1),
    ]

    result = pack_items(container, items)

    assert result.errors == []
    assert len(result.packings) == 2
    assert all(p.weight <= 2 for p in result.packings)


def test_random_items_respect_every_invariant() -> None:
    rng = random.Random(42)
    container = Container(dimensions=(20, 30, 40), weight_limit=50)
    items = [
        Item(dimensions=(rng.randint(1, 12), rng.randint(1, 12), rng.randint(1, 12)), weight=rng.randint(0, 8))
        for _ in range(120)
    ]
    items.append(Item(dimensions=(41, 1, 1)))
    items.append(Item(dimensions=(1, 1, 1), weight=51))

    result = pack_items(container, items)

    assert len(result.packings) > 1
    assert len(result.errors) >= 2
    assert_every_item_accounted(result, len(items))
    for packing in result.packings:
        assert packing.weight <= 50
        assert packing.weight == sum(p.weight for p in packing.placements)
        assert_within_container(container, packing.placements)
        assert_no_overlaps(packing.placements)
        assert all(s.volume > 0 for s in packing.spaces)


def test_pack_is_deterministic() -> None:
    container = Container(dimensions=(10, 10, 10), weight_limit=20)
    items = [Item(dimensions=(i % 5 + 1, i % 3 + 2, 4), weight=i % 4) for i in range(30)]

    assert pack_items(container, items) == pack_items(container, items)


def test_equal_spaces_are_used_in_list_order() -> None:
    """Spaces are kept smallest first; equal ones keep their list order."""
    packing = Packing(spaces=[
        Space(dimensions=(3, 3, 3), position=(0, 0, 0)),
        Space(dimensions=(5, 5, 5), position=(20, 0, 0)),
        Space(dimensions=(2, 2, 2), position=(10, 0, 0)),
        Space(dimensions=(2, 2, 2), position=(0, 10, 0)),
    ])

    first = place_in_packing(packing, Item(dimensions=(3, 3, 3)), 0)
    second = place_in_packing(packing, Item(dimensions=(1, 1, 1)), 1)

    assert first.position == (0.0, 0.0, 0.0)
    assert second.position == (10.0, 0.0, 0.0)
    assert (0.0, 10.0, 0.0) in [s.position for s in packing.spaces]


def test_free_spaces_stay_sorted_after_packing() -> None:
    rng = random.Random(7)
    container = Container(dimensions=(30, 20, 10))
    items = [Item(dimensions=(rng.randint(1, 9), rng.randint(1, 9), rng.randint(1, 9))) for _ in range(60)]

    result = pack_items(container, items)

    for packing in result.packings:
        keys = [sorted_asc(s.dimensions) for s in packing.spaces]
        assert keys == sorted(keys)


def test_fractional_extents_stay_inside_within_rounding() -> None:
    rng = random.Random(3)
    tenths = [k / 10 for k in range(1, 11)]
    container = Container(dimensions=(10, 3, 2.5), weight_limit=40)
    items = [Item(dimensions=(rng.choice(tenths), rng.choice(tenths), rng.choice(tenths)), weight=1) for _ in range(150)]

    result = pack_items(container, items)

    assert_every_item_accounted(result, len(items))
    for packing in result.packings:
        assert packing.weight <= 40
        assert_within_container(container, packing.placements)
        assert_no_overlaps(packing.placements)


def test_exact_fit_in_rotated_fractional_space() -> None:
    packing = Packing(spaces=[Space(dimensions=(0.3, 0.1, 0.7), position=(1, 2, 3))])

    placement = place_in_packing(packing, Item(dimensions=(0.7, 0.3, 0.1)), 0)

    assert placement is not None
    assert placement.position == (1.0, 2.0, 3.0)
    assert packing.spaces == []
