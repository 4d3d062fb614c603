from easy_box_packer.geometry import boxes_overlap, sorted_desc

# residual spaces are built with + and -, so float extents drift by ~1e-16
EPS = 1e-9


def bounds_from_placement(p):
    return p.bounds()


def shrink(bounds, eps=EPS):
    x1, y1, z1, x2, y2, z2 = bounds
    return (x1 + eps, y1 + eps, z1 + eps, x2 - eps, y2 - eps, z2 - eps)


def assert_within_container(container, placements):
    L, W, H = sorted_desc(container.dimensions)
    for p in placements:
        x1, y1, z1, x2, y2, z2 = bounds_from_placement(p)
        assert x1 >= -EPS and y1 >= -EPS and z1 >= -EPS
        assert x2 <= L + EPS
        assert y2 <= W + EPS
        assert z2 <= H + EPS


def assert_no_overlaps(placements):
    bounds = [shrink(bounds_from_placement(p)) for p in placements]
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            assert not boxes_overlap(bounds[i], bounds[j])


def assert_every_item_accounted(result, n_items):
    placed = [p.item_index for packing in result.packings for p in packing.placements]
    assert len(result.errors) == len(result.unpacked)
    assert sorted(placed + result.unpacked) == list(range(n_items))
