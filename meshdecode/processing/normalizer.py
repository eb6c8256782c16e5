"""Shared post-processing for decoded triangle soup."""

from typing import Tuple

import numpy as np

from meshdecode.core.mesh import BoundingBox, BoundingSphere, Mesh, RawMesh


class MeshNormalizer:
    """Turns decoder output into a render-ready Mesh."""

    def __init__(self, center: bool = True):
        """Initialize mesh normalizer.

        Args:
            center: Whether to move the bounding box center to the origin
        """
        self.center = center

    def normalize(self, raw: RawMesh) -> Mesh:
        """Recompute normals, center and bound a decoded mesh.

        File-declared normals on ``raw`` are ignored; normals always come
        from the triangle winding.

        Args:
            raw: Decoder output

        Returns:
            Finalized Mesh
        """
        positions = np.array(raw.positions, dtype=np.float32).reshape((-1, 3))
        if len(positions) % 3 != 0:
            raise ValueError(f"{len(positions)} corners is not a whole number of triangles")

        normals = self.compute_normals(positions)

        if self.center:
            positions = self._center(positions)

        bounding_box, bounding_sphere = self.compute_bounds(positions)

        colors = None
        if raw.colors is not None:
            colors = np.array(raw.colors, dtype=np.float32).reshape((-1, 3))

        return Mesh(
            positions=positions,
            normals=normals,
            colors=colors,
            bounding_box=bounding_box,
            bounding_sphere=bounding_sphere,
            source_format=raw.source_format,
        )

    @staticmethod
    def compute_normals(positions: np.ndarray) -> np.ndarray:
        """Compute one unit normal per corner from triangle winding.

        Zero-area triangles get a zero normal.

        Args:
            positions: (N, 3) corner positions

        Returns:
            (N, 3) float32 normals
        """
        triangles = positions.reshape((-1, 3, 3)).astype(np.float64)
        a, b, c = triangles[:, 0], triangles[:, 1], triangles[:, 2]
        face_normals = np.cross(c - b, a - b)

        lengths = np.linalg.norm(face_normals, axis=1, keepdims=True)
        lengths[lengths == 0] = 1.0
        face_normals /= lengths

        return np.repeat(face_normals, 3, axis=0).astype(np.float32)

    def _center(self, positions: np.ndarray) -> np.ndarray:
        if len(positions) == 0:
            return positions
        box_min = positions.min(axis=0).astype(np.float64)
        box_max = positions.max(axis=0).astype(np.float64)
        offset = (box_min + box_max) * 0.5
        return (positions.astype(np.float64) - offset).astype(np.float32)

    @staticmethod
    def compute_bounds(positions: np.ndarray) -> Tuple[BoundingBox, BoundingSphere]:
        """Compute the bounding box and the sphere around its center.

        An empty mesh has a degenerate box at the origin and radius 0.
        """
        if len(positions) == 0:
            zero = np.zeros(3, dtype=np.float64)
            return (
                BoundingBox(min=zero.copy(), max=zero.copy()),
                BoundingSphere(center=zero.copy(), radius=0.0),
            )

        box_min = positions.min(axis=0).astype(np.float64)
        box_max = positions.max(axis=0).astype(np.float64)
        bounding_box = BoundingBox(min=box_min, max=box_max)

        center = bounding_box.center
        radius = float(np.sqrt(np.max(np.sum((positions - center) ** 2, axis=1))))
        return bounding_box, BoundingSphere(center=center, radius=radius)


def normalize_mesh(raw: RawMesh, center: bool = True) -> Mesh:
    """Convenience function to normalize decoder output.

    Args:
        raw: Decoder output
        center: Whether to center the mesh

    Returns:
        Finalized Mesh
    """
    normalizer = MeshNormalizer(center=center)
    return normalizer.normalize(raw)
