"""Guillotine split of a free space after an item is placed at its origin."""

from __future__ import annotations

from easy_box_packer.geometry import sorted_asc
from easy_box_packer.models import Placement, Space

# Axis cut orders (0=x, 1=y, 2=z). The first axis gets the full-size slab.
CUT_ORDERS: tuple[tuple[int, int, int], ...] = (
    (2, 1, 0),
    (2, 0, 1),
    (0, 2, 1),
    (0, 1, 2),
    (1, 0, 2),
    (1, 2, 0),
)


def cut(space: Space, placement: Placement, order: tuple[int, int, int]) -> list[Space]:
    """
    Three residual spaces for one cut order.

    The slab along order[0] spans the whole space, the one along order[1]
    is bounded by the item on order[0], the last one is bounded by the item
    on both other axes. Together they cover the space minus the item and
    never overlap.
    """
    S = space.dimensions
    I = placement.dimensions
    P = space.position

    spaces = []
    for n, axis in enumerate(order):
        dims = list(S)
        dims[axis] = S[axis] - I[axis]
        for done in order[:n]:
            dims[done] = I[done]
        pos = list(P)
        pos[axis] = P[axis] + I[axis]
        spaces.append(Space(dimensions=(dims[0], dims[1], dims[2]), position=(pos[0], pos[1], pos[2])))
    return spaces


def _size_key(spaces: list[Space]) -> tuple:
    return tuple(sorted_asc(s.dimensions) for s in spaces)


def split_space(space: Space, placement: Placement) -> list[Space]:
    """
    Residual spaces left around an item placed at the origin of ``space``.

    All six cut orders are tried and the one producing the biggest spaces
    wins: triples are compared space by space on ascending-sorted extents,
    later orders win ties. Degenerate spaces are returned as well; callers
    drop them.

    Positions are P + I and extents S - I, so with non-integer extents a
    residual can be off by float rounding (around 1e-16) and a later item
    may end that far past the container or its neighbour. No tolerance is
    applied here.
    """
    best: list[Space] = []
    best_key = None
    for order in CUT_ORDERS:
        spaces = cut(space, placement, order)
        key = _size_key(spaces)
        if best_key is None or key >= best_key:
            best, best_key = spaces, key
    return best
