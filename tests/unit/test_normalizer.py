"""Unit tests for mesh normalization."""

import numpy as np
import pytest

from meshdecode.core import MeshFormat, RawMesh
from meshdecode.processing import MeshNormalizer, decode_auto, decode_off, normalize_mesh


class TestNormals:
    """Test normal recomputation."""

    def test_counter_clockwise_faces_up(self, single_triangle):
        normals = MeshNormalizer.compute_normals(single_triangle.reshape((-1, 3)))

        np.testing.assert_allclose(normals, [[0, 0, 1]] * 3)

    def test_clockwise_faces_down(self, single_triangle):
        flipped = single_triangle[:, ::-1, :].reshape((-1, 3))
        normals = MeshNormalizer.compute_normals(flipped)

        np.testing.assert_allclose(normals, [[0, 0, -1]] * 3)

    def test_file_normals_are_replaced(self, single_triangle):
        raw = RawMesh(
            positions=single_triangle.reshape((-1, 3)),
            normals=np.full((3, 3), 7.0, dtype=np.float32),
        )
        mesh = normalize_mesh(raw)

        np.testing.assert_allclose(mesh.normals, [[0, 0, 1]] * 3)

    def test_degenerate_triangle_gets_zero_normal(self):
        positions = np.array([[0, 0, 0], [1, 1, 1], [2, 2, 2]], dtype=np.float32)
        normals = MeshNormalizer.compute_normals(positions)

        np.testing.assert_array_equal(normals, np.zeros((3, 3)))

    def test_unit_length(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)
        lengths = np.linalg.norm(mesh.normals, axis=1)

        np.testing.assert_allclose(lengths, 1.0, rtol=1e-6)

    def test_box_normals_match_trimesh(self, binary_box_stl: bytes, offset_box_mesh):
        mesh = decode_auto(binary_box_stl)

        np.testing.assert_allclose(
            mesh.normals[::3], offset_box_mesh.face_normals, atol=1e-6
        )


class TestCentering:
    """Test centering and bounds."""

    def test_box_centered(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)

        np.testing.assert_allclose(mesh.bounding_box.min, [-1, -2, -3], atol=1e-5)
        np.testing.assert_allclose(mesh.bounding_box.max, [1, 2, 3], atol=1e-5)
        np.testing.assert_allclose(mesh.bounding_box.center, 0, atol=1e-5)

    def test_sphere(self, binary_box_stl: bytes):
        mesh = decode_auto(binary_box_stl)

        np.testing.assert_allclose(mesh.bounding_sphere.center, 0, atol=1e-5)
        assert mesh.bounding_sphere.radius == pytest.approx(np.sqrt(1 + 4 + 9), rel=1e-6)

    def test_every_vertex_inside_sphere(self, tetrahedron_off: str):
        mesh = decode_off(tetrahedron_off)
        distances = np.linalg.norm(mesh.positions, axis=1)

        assert np.all(distances <= mesh.bounding_sphere.radius + 1e-5)

    def test_centering_uses_box_not_centroid(self):
        # Three corners piled at x=0, one triangle reaching to x=10
        positions = np.array(
            [[0, 0, 0], [0, 1, 0], [0, 0, 1], [0, 0, 0], [10, 0, 0], [0, 1, 0]],
            dtype=np.float32,
        )
        mesh = normalize_mesh(RawMesh(positions=positions))

        assert mesh.bounding_box.min[0] == pytest.approx(-5)
        assert mesh.bounding_box.max[0] == pytest.approx(5)

    def test_no_centering(self, single_triangle):
        positions = single_triangle.reshape((-1, 3)) + 5
        mesh = MeshNormalizer(center=False).normalize(RawMesh(positions=positions))

        np.testing.assert_array_equal(mesh.positions, positions)

    def test_empty_mesh(self):
        mesh = normalize_mesh(RawMesh(positions=np.zeros((0, 3), dtype=np.float32)))

        assert mesh.vertex_count == 0
        np.testing.assert_array_equal(mesh.bounding_box.min, [0, 0, 0])
        np.testing.assert_array_equal(mesh.bounding_box.max, [0, 0, 0])
        assert mesh.bounding_sphere.radius == 0.0

    def test_partial_triangle_rejected(self):
        with pytest.raises(ValueError):
            normalize_mesh(RawMesh(positions=np.zeros((4, 3), dtype=np.float32)))


class TestPassThrough:
    """Test attributes carried from the decoder."""

    def test_colors_carried(self, colored_cube_off: str):
        mesh = decode_off(colored_cube_off)

        assert mesh.colors.shape == (36, 3)
        assert mesh.source_format is MeshFormat.OFF

    def test_colors_absent(self, single_triangle):
        mesh = normalize_mesh(RawMesh(positions=single_triangle.reshape((-1, 3))))

        assert mesh.colors is None
        assert not mesh.has_colors
