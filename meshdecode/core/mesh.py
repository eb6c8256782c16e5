"""Decoded mesh data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import numpy as np
import trimesh


class MeshFormat(str, Enum):
    """Wire formats understood by the decoders."""
    STL_ASCII = "stl_ascii"
    STL_BINARY = "stl_binary"
    OFF = "off"


def _frozen(array: np.ndarray, dtype=np.float32) -> np.ndarray:
    array = np.array(array, dtype=dtype)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class BoundingBox:
    """Axis-aligned bounding box."""

    min: np.ndarray
    max: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", _frozen(self.min, np.float64))
        object.__setattr__(self, "max", _frozen(self.max, np.float64))

    @property
    def center(self) -> np.ndarray:
        return (self.min + self.max) * 0.5

    @property
    def extents(self) -> np.ndarray:
        return self.max - self.min


@dataclass(frozen=True, eq=False)
class BoundingSphere:
    """Bounding sphere around the box center."""

    center: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _frozen(self.center, np.float64))
        object.__setattr__(self, "radius", float(self.radius))


@dataclass(frozen=True, eq=False)
class RawMesh:
    """Triangle soup as produced by a decoder, before normalization.

    Attributes:
        positions: (N, 3) corner positions, N a multiple of 3
        normals: Optional (N, 3) file-declared normals, one per corner
        colors: Optional (N, 3) colors already mapped to [0, 1]
        source_format: Format the soup was decoded from
    """

    positions: np.ndarray
    normals: Optional[np.ndarray] = None
    colors: Optional[np.ndarray] = None
    source_format: Optional[MeshFormat] = None

    @property
    def triangle_count(self) -> int:
        return len(self.positions) // 3


@dataclass(frozen=True, eq=False)
class Mesh:
    """Render-ready triangle soup.

    Every array is float32 with shape (N, 3) and is read-only. ``colors`` is
    None when the source file carried no color at all.
    """

    positions: np.ndarray
    normals: np.ndarray
    bounding_box: BoundingBox
    bounding_sphere: BoundingSphere
    colors: Optional[np.ndarray] = None
    source_format: Optional[MeshFormat] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", _frozen(self.positions))
        object.__setattr__(self, "normals", _frozen(self.normals))
        if self.colors is not None:
            object.__setattr__(self, "colors", _frozen(self.colors))

        if self.positions.shape != self.normals.shape:
            raise ValueError(
                f"normals shape {self.normals.shape} does not match "
                f"positions shape {self.positions.shape}"
            )
        if self.colors is not None and self.colors.shape != self.positions.shape:
            raise ValueError(
                f"colors shape {self.colors.shape} does not match "
                f"positions shape {self.positions.shape}"
            )
        if len(self.positions) % 3 != 0:
            raise ValueError(f"{len(self.positions)} corners is not a whole number of triangles")

    @property
    def vertex_count(self) -> int:
        """Number of triangle corners."""
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.positions) // 3

    @property
    def has_colors(self) -> bool:
        return self.colors is not None

    def triangles(self) -> np.ndarray:
        """Return positions grouped per triangle, shape (T, 3, 3)."""
        return self.positions.reshape((-1, 3, 3))

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to an unprocessed trimesh object.

        Corners are not merged, so face ``i`` uses vertices ``3i``, ``3i+1``
        and ``3i+2``.
        """
        faces = np.arange(self.vertex_count, dtype=np.int64).reshape((-1, 3))
        vertex_colors = None
        if self.colors is not None:
            vertex_colors = np.round(self.colors * 255).astype(np.uint8)
        return trimesh.Trimesh(
            vertices=np.array(self.positions, dtype=np.float64),
            faces=faces,
            vertex_normals=np.array(self.normals, dtype=np.float64),
            vertex_colors=vertex_colors,
            process=False,
        )

    def info(self) -> dict[str, Any]:
        """Summarize the mesh as plain Python values."""
        return {
            "format": self.source_format.value if self.source_format else None,
            "triangles": self.triangle_count,
            "vertices": self.vertex_count,
            "has_colors": self.has_colors,
            "bounds": {
                "min": self.bounding_box.min.tolist(),
                "max": self.bounding_box.max.tolist(),
            },
            "extents": self.bounding_box.extents.tolist(),
            "radius": float(self.bounding_sphere.radius),
        }
