from __future__ import annotations
from easy_box_packer.models import Container, Packing, Placement


def placement_volume(p: Placement) -> float:
    L, W, H = p.dimensions  # oriented (L,W,H)
    return float(L) * float(W) * float(H)


def compute_metrics(container: Container, packing: Packing) -> tuple[float, float, float]:
    used_volume = sum(placement_volume(p) for p in packing.placements)
    container_volume = container.volume
    fill_rate = 0.0 if container_volume == 0 else used_volume / container_volume
    return used_volume, container_volume, fill_rate
