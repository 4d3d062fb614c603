# src/easy_box_packer/packing/first_fit.py

from __future__ import annotations

import logging
from typing import Optional, Sequence

from easy_box_packer.geometry import place, sorted_asc, sorted_desc, volume
from easy_box_packer.models import Container, Item, Packing, PackResult, Placement, Space
from easy_box_packer.packing.greedy import greedy_fits, greedy_packing
from easy_box_packer.packing.splitter import split_space

logger = logging.getLogger(__name__)


def describe_item(item: Item) -> str:
    L, W, H = item.dimensions
    return f"{{dimensions=[{L:g}, {W:g}, {H:g}], weight={item.weight:g}}}"


def packing_order(items: Sequence[Item]) -> list[int]:
    """Indices of items, largest first (extents sorted descending, compared lexicographically)."""
    # sorted() keeps equal items in caller order even with reverse=True
    return sorted(range(len(items)), key=lambda i: sorted_desc(items[i].dimensions), reverse=True)


def fits_weight(container: Container, current_weight: float, item: Item) -> bool:
    if container.weight_limit is None:
        return True
    return current_weight + item.weight <= container.weight_limit


def sort_spaces(packing: Packing) -> None:
    # minimum space first; stable sort keeps list order on ties
    packing.spaces.sort(key=lambda s: sorted_asc(s.dimensions))


def commit(packing: Packing, space_index: int, placement: Placement) -> None:
    """
    Record a placement and replace the consumed space by its non-degenerate
    residuals. Spaces stay sorted smallest first, so bins that did not
    change are never sorted again.
    """
    space = packing.spaces.pop(space_index)
    packing.placements.append(placement)
    packing.weight += placement.weight
    packing.spaces.extend(s for s in split_space(space, placement) if s.volume > 0)
    sort_spaces(packing)


def place_in_packing(packing: Packing, item: Item, item_index: int) -> Optional[Placement]:
    # products of ascending extents, so an exact fit is never skipped by rounding
    item_volume = volume(sorted_asc(item.dimensions))
    for i, space in enumerate(packing.spaces):
        if volume(sorted_asc(space.dimensions)) < item_volume:
            continue
        placement = place(item, space, item_index)
        if placement is None:
            continue
        commit(packing, i, placement)
        return placement
    return None


def pack_items(container: Container, items: Sequence[Item]) -> PackResult:
    """
    First-fit packer over as many container-sized bins as needed.
    - Items go in largest first
    - Existing bins are scanned in creation order, their spaces smallest first
    - A new bin is opened only when no existing bin takes the item
    - Items that are too heavy or too big are reported in ``errors``, never raised
    - When the result spans several bins and the greedy stack fits the
      container, the greedy single-bin packing replaces it
    """
    packings: list[Packing] = []
    errors: list[str] = []
    unpacked: list[int] = []

    for index in packing_order(items):
        item = items[index]

        if container.weight_limit is not None and item.weight > container.weight_limit:
            errors.append(f"Item: {describe_item(item)} is too heavy for container")
            unpacked.append(index)
            logger.debug("Item %d is too heavy (%g > %g)", index, item.weight, container.weight_limit)
            continue

        placed = False
        for packing in packings:
            # If this bin would be too heavy with this item skip to the next one
            if not fits_weight(container, packing.weight, item):
                continue
            if place_in_packing(packing, item, index) is not None:
                placed = True
                break
        if placed:
            continue

        # Nothing has room: try a fresh bin the size of the container
        space = Space(dimensions=sorted_desc(container.dimensions), position=(0.0, 0.0, 0.0))
        placement = place(item, space, index)
        if placement is None:
            # too big for the container, abandon this item
            errors.append(f"Item: {describe_item(item)} cannot be placed in container")
            unpacked.append(index)
            logger.debug("Item %d does not fit container %s", index, container.dimensions)
            continue

        packing = Packing(spaces=[space])
        commit(packing, 0, placement)
        packings.append(packing)
        logger.debug("Opened bin %d for item %d", len(packings), index)

    if len(packings) > 1 and greedy_fits(container, items):
        logger.warning(
            "Replacing %d-bin packing by a single greedy stack of %d items", len(packings), len(items)
        )
        packings = [greedy_packing(items, container)]
        errors = []
        unpacked = []

    result = PackResult(packings=packings, errors=errors, unpacked=unpacked)
    logger.info(
        "Packed %d/%d items into %d bin(s), %d error(s)",
        result.placed_count,
        len(items),
        len(result.packings),
        len(result.errors),
    )
    return result
