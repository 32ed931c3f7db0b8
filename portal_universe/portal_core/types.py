"""
Core type definitions for freeform portal detection.

Coordinates are integer voxel addresses in a sparse 3D world. Detection works
on one 2D slice of that world at a time (a Plane), where each voxel is
addressed by a UV key plus the constant third coordinate of the slice.
"""

from dataclasses import dataclass
from enum import Enum


class Plane(Enum):
    """
    The three fixed slices of the voxel grid.

    Axis mapping (u, v, constant):
    - HORIZONTAL: (x, z, y)
    - VERTICAL_X: (z, y, x)  - the YZ plane, portal faces along X
    - VERTICAL_Z: (x, y, z)  - the XY plane, portal faces along Z
    """
    HORIZONTAL = "horizontal"
    VERTICAL_X = "vertical_x"
    VERTICAL_Z = "vertical_z"

    @property
    def is_vertical(self) -> bool:
        return self is not Plane.HORIZONTAL


# Voxel coordinates (x, y, z)
@dataclass(frozen=True, order=True)
class Coordinate:
    """3D integer voxel address."""
    x: int
    y: int
    z: int

    def __iter__(self):
        """Allow tuple unpacking: x, y, z = coord"""
        return iter((self.x, self.y, self.z))

    def offset(self, dx: int, dy: int, dz: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy, self.z + dz)


# Plane-local coordinates (u, v)
@dataclass(frozen=True, order=True)
class UV:
    """2D traversal key on a plane. The constant axis is carried separately."""
    u: int
    v: int

    def __iter__(self):
        """Allow tuple unpacking: u, v = uv"""
        return iter((self.u, self.v))


@dataclass(frozen=True)
class Bounds:
    """Inclusive UV bounding box: (min_u, min_v) .. (max_u, max_v)."""
    min_u: int
    min_v: int
    max_u: int
    max_v: int

    @property
    def width(self) -> int:
        return self.max_u - self.min_u + 1

    @property
    def height(self) -> int:
        return self.max_v - self.min_v + 1


# Six face-adjacent offsets in 3D (up, down, west, east, south, north)
FACE_OFFSETS = (
    (0, 1, 0),
    (0, -1, 0),
    (-1, 0, 0),
    (1, 0, 0),
    (0, 0, 1),
    (0, 0, -1),
)


def bounds_of(cells) -> Bounds:
    """Bounding box of a non-empty iterable of UV keys."""
    us = [cell.u for cell in cells]
    vs = [cell.v for cell in cells]
    return Bounds(min(us), min(vs), max(us), max(vs))
