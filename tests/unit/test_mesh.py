"""Unit tests for the Mesh data model."""

import dataclasses

import numpy as np
import pytest
import trimesh

from meshdecode.core import BoundingBox, BoundingSphere, Mesh
from meshdecode.processing import decode_auto, decode_off


def _bounds():
    zero = np.zeros(3)
    return BoundingBox(min=zero, max=zero), BoundingSphere(center=zero, radius=0.0)


class TestMesh:
    """Test Mesh invariants and helpers."""

    def test_arrays_read_only(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)

        with pytest.raises(ValueError):
            mesh.positions[0, 0] = 1.0
        with pytest.raises(ValueError):
            mesh.normals[0, 0] = 1.0

    def test_frozen(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)

        with pytest.raises(dataclasses.FrozenInstanceError):
            mesh.colors = None

    def test_lengths_match(self, colored_cube_off: str):
        mesh = decode_off(colored_cube_off)

        assert len(mesh.positions) == len(mesh.normals) == len(mesh.colors)
        assert len(mesh.positions) % 3 == 0
        assert np.all(np.isfinite(mesh.positions))

    def test_shape_mismatch_rejected(self):
        box, sphere = _bounds()
        with pytest.raises(ValueError):
            Mesh(
                positions=np.zeros((3, 3)),
                normals=np.zeros((6, 3)),
                bounding_box=box,
                bounding_sphere=sphere,
            )

    def test_color_mismatch_rejected(self):
        box, sphere = _bounds()
        with pytest.raises(ValueError):
            Mesh(
                positions=np.zeros((3, 3)),
                normals=np.zeros((3, 3)),
                colors=np.zeros((6, 3)),
                bounding_box=box,
                bounding_sphere=sphere,
            )

    def test_independent_decodes(self, binary_box_stl: bytes):
        first = decode_auto(binary_box_stl)
        second = decode_auto(binary_box_stl)

        assert first.positions is not second.positions
        np.testing.assert_array_equal(first.positions, second.positions)

    def test_triangles_view(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)

        assert mesh.triangles().shape == (12, 3, 3)
        assert mesh.triangle_count == 12
        assert mesh.vertex_count == 36

    def test_to_trimesh(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)
        tm = mesh.to_trimesh()

        assert isinstance(tm, trimesh.Trimesh)
        assert len(tm.faces) == 12
        assert len(tm.vertices) == 36
        assert tm.volume == pytest.approx(48.0, rel=1e-5)

    def test_to_trimesh_colors(self, colored_cube_off: str):
        tm = decode_off(colored_cube_off).to_trimesh()

        np.testing.assert_array_equal(tm.visual.vertex_colors[0, :3], [255, 0, 0])

    def test_info(self, colored_cube_off: str):
        info = decode_off(colored_cube_off).info()

        assert info["format"] == "off"
        assert info["triangles"] == 12
        assert info["vertices"] == 36
        assert info["has_colors"] is True
        assert info["extents"] == pytest.approx([2, 2, 2])
        assert info["radius"] == pytest.approx(np.sqrt(3), rel=1e-6)
