"""
Public entry points of the packer.

Inputs may be model instances or plain mappings such as
``{"dimensions": [2, 3, 4], "weight": 1}``. Anything malformed is rejected
with ``InvalidInput`` before any packing starts.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from easy_box_packer.config import get_settings
from easy_box_packer.errors import InvalidInput
from easy_box_packer.models import Container, Dims, Item, PackResult
from easy_box_packer.packing import container_search
from easy_box_packer.packing.first_fit import pack_items


def to_items(items: Iterable[Any]) -> list[Item]:
    try:
        items = list(items)
    except TypeError as exc:
        raise InvalidInput("items must be a sequence of items") from exc
    if not items:
        raise InvalidInput("items must not be empty")

    out: list[Item] = []
    for i, item in enumerate(items):
        if isinstance(item, Item):
            out.append(item)
            continue
        try:
            out.append(Item.model_validate(item))
        except ValidationError as exc:
            raise InvalidInput(f"Invalid item at index {i}: {exc}") from exc
    return out


def to_container(container: Any) -> Container:
    if isinstance(container, Container):
        return container
    try:
        return Container.model_validate(container)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid container: {exc}") from exc


def to_dims(dims: Any, name: str) -> Dims:
    try:
        a, b, c = (float(d) for d in dims)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be three numbers, got {dims!r}") from exc
    if min(a, b, c) <= 0:
        raise InvalidInput(f"{name} must be positive, got {dims!r}")
    return (a, b, c)


def pack(container: Any, items: Sequence[Any]) -> PackResult:
    """Pack ``items`` into as many copies of ``container`` as needed."""
    return pack_items(to_container(container), to_items(items))


def find_smallest_container(items: Sequence[Any]) -> Dims:
    """Smallest shape found to hold every item in one bin (best effort)."""
    return container_search.find_smallest_container(to_items(items))


def find_smallest_containers(items: Sequence[Any], max_count: int) -> list[Dims]:
    """Validated shapes, smallest first, at most ``max_count`` of them."""
    if isinstance(max_count, bool) or not isinstance(max_count, int) or max_count < 1:
        raise InvalidInput(f"max_count must be a positive integer, got {max_count!r}")
    return container_search.find_smallest_containers(to_items(items), max_count)


def find_smallest_container_with_limits(
    items: Sequence[Any],
    limit: Sequence[float],
    max_count: Optional[int] = None,
) -> Dims:
    """Smallest validated shape fitting inside ``limit``, else the smallest validated shape."""
    limit_dims = to_dims(limit, "limit")
    if max_count is None:
        max_count = get_settings().limit_search_count
    elif isinstance(max_count, bool) or not isinstance(max_count, int) or max_count < 1:
        raise InvalidInput(f"max_count must be a positive integer, got {max_count!r}")
    return container_search.find_smallest_container_with_limits(to_items(items), limit_dims, max_count)
