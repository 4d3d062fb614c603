from __future__ import annotations

from typing import Annotated, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

PositiveExtent = Annotated[float, Field(gt=0)]
Extent = Annotated[float, Field(ge=0)]

Dims = Tuple[float, float, float]


class Item(BaseModel):
    """Item to pack: three extents (any order) and a weight."""

    model_config = ConfigDict(frozen=True)

    dimensions: Tuple[PositiveExtent, PositiveExtent, PositiveExtent] = Field(
        description="Extents of the item, in no particular axis order"
    )
    weight: float = Field(default=0.0, ge=0, description="Weight of the item")

    @field_validator("weight", mode="before")
    @classmethod
    def _missing_weight_is_zero(cls, value):
        return 0.0 if value is None else value

    @property
    def volume(self) -> float:
        L, W, H = self.dimensions
        return L * W * H


class Container(BaseModel):
    """Container model with dimensions and an optional weight limit."""

    model_config = ConfigDict(frozen=True)

    dimensions: Tuple[Extent, Extent, Extent] = Field(
        description="Extents of the container, in no particular axis order"
    )
    weight_limit: Optional[float] = Field(
        default=None,
        ge=0,
        description="Maximum total weight per bin, None for unlimited")

    @property
    def volume(self) -> float:
        L, W, H = self.dimensions
        return L * W * H


class Space(BaseModel):
    """Free box inside a bin. Extents are along x, y, z."""

    dimensions: Dims
    position: Dims = (0.0, 0.0, 0.0)

    @property
    def volume(self) -> float:
        L, W, H = self.dimensions
        return L * W * H


class Placement(BaseModel):
    """Placement model representing item position and oriented dimensions."""

    item_index: int = Field(ge=0, description="Index of the item in the caller's list")
    # Extents AFTER rotation, along x, y, z
    dimensions: Dims = Field(description="Oriented dimensions of the placed item")
    position: Dims = Field(description="Lowest corner of the placed item")
    weight: float = 0.0

    def bounds(self) -> tuple[float, float, float, float, float, float]:
        x, y, z = self.position
        L, W, H = self.dimensions
        return (x, y, z, x + L, y + W, z + H)


class Packing(BaseModel):
    """One bin: placed items, remaining free spaces and accumulated weight."""

    placements: list[Placement] = Field(default_factory=list)
    spaces: list[Space] = Field(default_factory=list)
    weight: float = 0.0


class PackResult(BaseModel):
    """Standard result returned by the packer."""

    packings: list[Packing] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    # Caller-list indices of the items behind ``errors``, same order
    unpacked: list[int] = Field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(len(p.placements) for p in self.packings)
