"""Shared test fixtures and configuration."""

import shutil
import struct
import tempfile
from pathlib import Path
from typing import Generator, Optional

import numpy as np
import pytest
import trimesh

from meshdecode.core import Config


def make_binary_stl(
    triangles: np.ndarray,
    normals: Optional[np.ndarray] = None,
    header: bytes = b"binary test mesh",
    count: Optional[int] = None,
) -> bytes:
    """Build a binary STL buffer from (T, 3, 3) triangles."""
    triangles = np.asarray(triangles, dtype=np.float32).reshape((-1, 3, 3))
    if normals is None:
        normals = np.zeros((len(triangles), 3), dtype=np.float32)
    if count is None:
        count = len(triangles)

    parts = [header.ljust(80, b"\x00"), struct.pack("<I", count)]
    for normal, triangle in zip(normals, triangles):
        parts.append(struct.pack("<3f", *normal))
        parts.append(struct.pack("<9f", *triangle.reshape(-1)))
        parts.append(struct.pack("<H", 0))
    return b"".join(parts)


def make_ascii_stl(triangles: np.ndarray, normals: Optional[np.ndarray] = None) -> bytes:
    """Build an ASCII STL buffer from (T, 3, 3) triangles."""
    triangles = np.asarray(triangles, dtype=np.float64).reshape((-1, 3, 3))
    if normals is None:
        normals = np.zeros((len(triangles), 3))

    lines = ["solid test"]
    for normal, triangle in zip(normals, triangles):
        lines.append("facet normal {} {} {}".format(*normal))
        lines.append("outer loop")
        for vertex in triangle:
            lines.append("vertex {} {} {}".format(*vertex))
        lines.append("endloop")
        lines.append("endfacet")
    lines.append("endsolid test")
    return "\n".join(lines).encode("utf-8")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration."""
    return Config(
        logging={"level": "WARNING", "format": "plain"},
    )


@pytest.fixture
def simple_box_mesh() -> trimesh.Trimesh:
    """Create a simple box mesh for testing."""
    return trimesh.creation.box(extents=[1, 1, 1])


@pytest.fixture
def offset_box_mesh() -> trimesh.Trimesh:
    """Create a box that is not centered on the origin."""
    box = trimesh.creation.box(extents=[2, 4, 6])
    box.apply_translation([10, -5, 3])
    return box


@pytest.fixture
def single_triangle() -> np.ndarray:
    """A right triangle in the XY plane, counter-clockwise seen from +Z."""
    return np.array([[[0, 0, 0], [1, 0, 0], [0, 1, 0]]], dtype=np.float32)


@pytest.fixture
def binary_box_stl(offset_box_mesh: trimesh.Trimesh) -> bytes:
    """Binary STL buffer of the offset box."""
    return make_binary_stl(offset_box_mesh.triangles, offset_box_mesh.face_normals)


@pytest.fixture
def ascii_box_stl(offset_box_mesh: trimesh.Trimesh) -> bytes:
    """ASCII STL buffer of the offset box, as written by trimesh."""
    data = offset_box_mesh.export(file_type="stl_ascii")
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


@pytest.fixture
def tetrahedron_off() -> str:
    """OFF text with counts on their own line and no colors."""
    return "\n".join(
        [
            "OFF",
            "# a regular-ish tetrahedron",
            "4 4 6",
            "0 0 0",
            "1 0 0",
            "0 1 0",
            "0 0 1",
            "3 0 2 1",
            "3 0 1 3",
            "3 0 3 2",
            "3 1 2 3",
        ]
    )


@pytest.fixture
def colored_cube_off() -> str:
    """COFF text in OpenSCAD style: counts on the header line, 0-255 colors."""
    return "\n".join(
        [
            "OFF 8 6 0",
            "-1 -1 -1",
            "1 -1 -1",
            "1 1 -1",
            "-1 1 -1",
            "-1 -1 1",
            "1 -1 1",
            "1 1 1",
            "-1 1 1",
            "4 0 3 2 1 255 0 0 255",
            "4 4 5 6 7 0 255 0 255",
            "4 0 1 5 4 0 0 255 255",
            "4 1 2 6 5 255 255 0 255",
            "4 2 3 7 6 0 255 255 255",
            "4 3 0 4 7 255 0 255 255",
        ]
    )


@pytest.fixture
def sample_stl_path(temp_dir: Path, binary_box_stl: bytes) -> Path:
    """Create a sample binary STL file."""
    stl_path = temp_dir / "test_box.stl"
    stl_path.write_bytes(binary_box_stl)
    return stl_path


@pytest.fixture
def sample_off_path(temp_dir: Path, colored_cube_off: str) -> Path:
    """Create a sample COFF file."""
    off_path = temp_dir / "cube.off"
    off_path.write_text(colored_cube_off)
    return off_path


@pytest.fixture
def binary_stl_factory():
    """Builder for binary STL buffers."""
    return make_binary_stl


@pytest.fixture
def ascii_stl_factory():
    """Builder for ASCII STL buffers."""
    return make_ascii_stl


# Markers for different test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 1 second"
    )
