"""
Greedy box: every item laid flat and stacked in a single column.

The box is (longest extent of any item, longest middle extent of any item,
sum of every item's shortest extent). It is always a valid single-bin
packing, so it serves as a fallback for fragmented multi-bin results and
as an upper bound for the container search.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from easy_box_packer.geometry import fits, sorted_desc
from easy_box_packer.models import Container, Dims, Item, Packing, Placement

logger = logging.getLogger(__name__)


def item_greedy_box(items: Sequence[Item]) -> Dims:
    max_length = 0.0
    max_width = 0.0
    total_height = 0.0
    for item in items:
        length, width, height = sorted_desc(item.dimensions)
        max_length = max(max_length, length)
        max_width = max(max_width, width)
        total_height += height
    return (max_length, max_width, total_height)


def total_weight(items: Sequence[Item]) -> float:
    return sum(item.weight for item in items)


def greedy_fits(container: Container, items: Sequence[Item]) -> bool:
    """True when the greedy stack fits the container, by size and by weight."""
    box = item_greedy_box(items)
    if not fits(sorted_desc(box), sorted_desc(container.dimensions)):
        return False
    if container.weight_limit is not None and total_weight(items) > container.weight_limit:
        return False
    return True


def greedy_packing(items: Sequence[Item], container: Optional[Container] = None) -> Packing:
    """
    Single-bin packing matching ``item_greedy_box``.

    Items are stacked in caller order along the third axis of the box.
    Without a container the coordinates are those of the box itself, so the
    bounding box of the placements equals ``item_greedy_box(items)``. With
    a container the stack is turned into the container's frame (extents
    sorted descending along x, y, z); the caller checks ``greedy_fits``
    first.
    """
    box = item_greedy_box(items)
    if container is None:
        frame = [0, 1, 2]
    else:
        # container axis k takes box axis frame[k]
        frame = sorted(range(3), key=lambda a: -box[a])

    placements: list[Placement] = []
    height = 0.0
    weight = 0.0
    for index, item in enumerate(items):
        dims = sorted_desc(item.dimensions)
        pos = (0.0, 0.0, height)
        placements.append(
            Placement(
                item_index=index,
                dimensions=(dims[frame[0]], dims[frame[1]], dims[frame[2]]),
                position=(pos[frame[0]], pos[frame[1]], pos[frame[2]]),
                weight=item.weight,
            )
        )
        height += dims[2]
        weight += item.weight

    logger.debug("Greedy stack of %d items, box %s", len(placements), box)
    return Packing(placements=placements, spaces=[], weight=weight)
