"""
Smallest-container search.

Candidate shapes are grown from the largest item: at each step the current
shape is extended by the next item along one axis (componentwise max on the
other two), for 3 shape orientations x 3 item orientations x 3 axes. Shapes
whose volume reaches the summed item volume become possible containers;
the most cube-like fresh shape (lowest standard deviation of its extents)
is the only one grown further. Possible containers are then validated,
smallest first, by packing the full item set into them.
"""

from __future__ import annotations

import logging
import statistics
from typing import Optional, Sequence

from easy_box_packer.geometry import fits, orientations, sorted_asc, volume
from easy_box_packer.models import Container, Dims, Item
from easy_box_packer.packing.first_fit import pack_items, packing_order
from easy_box_packer.packing.greedy import greedy_fits, item_greedy_box

logger = logging.getLogger(__name__)


def size_key(dims: Dims) -> tuple[float, float]:
    return (volume(dims), sum(dims))


def dispersion(dims: Dims) -> float:
    return statistics.stdev(dims)


def grow(shape: Dims, item: Dims) -> list[Dims]:
    """Up to 27 shapes holding ``shape`` and ``item`` side by side, normalised ascending."""
    grown: list[Dims] = []
    for c0, c1, c2 in orientations(shape):
        for b0, b1, b2 in orientations(item):
            grown.append(sorted_asc((c0 + b0, max(c1, b1), max(c2, b2))))
            grown.append(sorted_asc((max(c0, b0), c1 + b1, max(c2, b2))))
            grown.append(sorted_asc((max(c0, b0), max(c1, b1), c2 + b2)))
    return grown


def choose_branch(shapes: Sequence[Dims]) -> Dims:
    """Most cube-like shape; ties go to the smaller volume, then the smaller sum."""
    return min(shapes, key=lambda c: (dispersion(c), volume(c), sum(c)))


def possible_containers(items: Sequence[Item]) -> list[Dims]:
    """
    Candidate container shapes, ascending by (volume, sum of extents).

    The recursion over items is run as an explicit stack of
    (shape, item index) frames. ``possible`` and ``invalid`` live only for
    this call.
    """
    dims = [items[i].dimensions for i in packing_order(items)]
    min_volume = sum(volume(d) for d in dims)

    possible: dict[Dims, None] = {}
    invalid: set[Dims] = set()
    stack: list[tuple[Dims, int]] = [(sorted_asc(dims[0]), 1)]

    while stack:
        shape, index = stack.pop()
        if index >= len(dims):
            continue

        fresh: list[Dims] = []
        for candidate in grow(shape, dims[index]):
            if candidate in possible or candidate in invalid or candidate in fresh:
                continue
            fresh.append(candidate)
        if not fresh:
            continue

        for candidate in sorted(fresh, key=size_key):
            if volume(candidate) >= min_volume:
                possible[candidate] = None
            else:
                invalid.add(candidate)

        best = choose_branch(fresh)
        logger.debug(
            "Step %d: %d fresh shapes, growing %s", index, len(fresh), best
        )
        stack.append((best, index + 1))

    return sorted(possible, key=size_key)


def packs_in_one_bin(shape: Dims, items: Sequence[Item]) -> bool:
    result = pack_items(Container(dimensions=shape), items)
    ok = len(result.packings) == 1 and not result.errors
    logger.debug("Candidate %s %s", shape, "accepted" if ok else "rejected")
    return ok


def prefer_greedy(shape: Dims, items: Sequence[Item]) -> Dims:
    """The greedy box when it fits inside ``shape``, else ``shape``."""
    if greedy_fits(Container(dimensions=shape), items):
        return sorted_asc(item_greedy_box(items))
    return shape


def find_smallest_containers(items: Sequence[Item], max_count: int) -> list[Dims]:
    """Up to ``max_count`` validated shapes, smallest first."""
    if len(items) == 1:
        return [items[0].dimensions]

    accepted: list[Dims] = []
    for shape in possible_containers(items):
        if len(accepted) >= max_count:
            break
        if packs_in_one_bin(shape, items):
            accepted.append(shape)

    shapes: list[Dims] = []
    for shape in accepted:
        shape = prefer_greedy(shape, items)
        if shape not in shapes:
            shapes.append(shape)
    shapes.sort(key=size_key)
    logger.info("Container search accepted %d shape(s) for %d items", len(shapes), len(items))
    return shapes


def find_smallest_container(items: Sequence[Item]) -> Dims:
    """
    Smallest validated shape. When nothing validates, the smallest
    generated shape is returned anyway (or the greedy box if the search
    generated nothing).
    """
    if len(items) == 1:
        return items[0].dimensions

    candidates = possible_containers(items)
    selected: Optional[Dims] = None
    for shape in candidates:
        if packs_in_one_bin(shape, items):
            selected = shape
            break

    if selected is None:
        if candidates:
            selected = candidates[0]
        else:
            selected = sorted_asc(item_greedy_box(items))
        logger.warning("No candidate container validated, falling back to %s", selected)

    return prefer_greedy(selected, items)


def find_smallest_container_with_limits(items: Sequence[Item], limit: Dims, max_count: int) -> Dims:
    """
    First validated shape (smallest first, at most ``max_count`` looked at)
    fitting inside ``limit``; the smallest one when none fits.
    """
    shapes = find_smallest_containers(items, max_count)
    if not shapes:
        return find_smallest_container(items)

    bound = sorted_asc(limit)
    for shape in shapes:
        if fits(sorted_asc(shape), bound):
            return shape
    logger.info("No container within %s, using smallest %s", limit, shapes[0])
    return shapes[0]
