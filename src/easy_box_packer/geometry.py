"""Geometry utilities for box packing."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from easy_box_packer.models import Dims, Item, Placement, Space

# Index patterns over a descending-sorted triple. Each one picks a different
# extent as the leading axis; only these three are tried, never all six.
PERMUTATIONS: tuple[tuple[int, int, int], ...] = (
    (1, 2, 0),
    (0, 1, 2),
    (0, 2, 1),
)


def boxes_overlap(
    a: tuple[float, float, float, float, float, float],
    b: tuple[float, float, float, float, float, float],
) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def sorted_desc(dims: Iterable[float]) -> Dims:
    a, b, c = sorted((float(d) for d in dims), reverse=True)
    return (a, b, c)


def sorted_asc(dims: Iterable[float]) -> Dims:
    a, b, c = sorted(float(d) for d in dims)
    return (a, b, c)


def volume(dims: Sequence[float]) -> float:
    return float(dims[0]) * float(dims[1]) * float(dims[2])


def orientations(dims: Sequence[float]) -> list[Dims]:
    """
    The three orientations considered for a box.

    dims are sorted descending first, then each pattern of PERMUTATIONS
    is applied, so (4, 2, 3) yields (3, 2, 4), (4, 3, 2) and (4, 2, 3).
    """
    desc = sorted_desc(dims)
    return [(desc[i], desc[j], desc[k]) for i, j, k in PERMUTATIONS]


def fits(item_dims: Sequence[float], space_dims: Sequence[float]) -> bool:
    return all(float(i) <= float(s) for i, s in zip(item_dims, space_dims))


def place(item: Item, space: Space, item_index: int) -> Optional[Placement]:
    """
    Try to put an item at the origin of a free space.

    Space orientations are crossed with item orientations (3 x 3) and the
    first componentwise fit wins. The space's axes are tracked through its
    descending sort so the accepted orientation maps back onto x, y, z.
    Returns None when no combination fits.
    """
    # stable: equal extents keep x before y before z
    axes = sorted(range(3), key=lambda a: -space.dimensions[a])
    space_desc = [space.dimensions[a] for a in axes]
    item_desc = sorted_desc(item.dimensions)

    for s_perm in PERMUTATIONS:
        s_dims = [space_desc[i] for i in s_perm]
        s_axes = [axes[i] for i in s_perm]
        for b_perm in PERMUTATIONS:
            b_dims = [item_desc[i] for i in b_perm]
            if not fits(b_dims, s_dims):
                continue
            oriented = [0.0, 0.0, 0.0]
            for k in range(3):
                oriented[s_axes[k]] = b_dims[k]
            return Placement(
                item_index=item_index,
                dimensions=(oriented[0], oriented[1], oriented[2]),
                position=space.position,
                weight=item.weight,
            )
    return None
