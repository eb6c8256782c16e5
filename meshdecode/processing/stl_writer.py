"""STL export of decoded meshes."""

from pathlib import Path
from typing import Union

import numpy as np

from meshdecode.core.mesh import Mesh
from meshdecode.processing.stl_binary import HEADER_SIZE, STL_RECORD_DTYPE


def encode_stl_binary(mesh: Mesh, header: bytes = b"meshdecode") -> bytes:
    """Encode a mesh as binary STL.

    The header is padded with spaces, never with ``solid``, so the result
    is sniffed as binary unless the caller's header starts with it.

    Args:
        mesh: Mesh to encode
        header: Up to 80 bytes of header text

    Returns:
        Binary STL bytes
    """
    if len(header) > HEADER_SIZE:
        raise ValueError(f"STL header is limited to {HEADER_SIZE} bytes")

    records = np.zeros(mesh.triangle_count, dtype=STL_RECORD_DTYPE)
    records["vertices"] = mesh.triangles()
    records["normal"] = mesh.normals[::3]

    count = np.array([mesh.triangle_count], dtype="<u4")
    return header.ljust(HEADER_SIZE, b" ") + count.tobytes() + records.tobytes()


def encode_stl_ascii(mesh: Mesh, name: str = "mesh") -> bytes:
    """Encode a mesh as ASCII STL.

    Args:
        mesh: Mesh to encode
        name: Solid name

    Returns:
        UTF-8 encoded ASCII STL
    """
    lines = [f"solid {name}"]
    for normal, triangle in zip(mesh.normals[::3], mesh.triangles()):
        lines.append("  facet normal {:.9e} {:.9e} {:.9e}".format(*normal))
        lines.append("    outer loop")
        for vertex in triangle:
            lines.append("      vertex {:.9e} {:.9e} {:.9e}".format(*vertex))
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return ("\n".join(lines) + "\n").encode("utf-8")


def save_mesh(mesh: Mesh, path: Union[str, Path], ascii: bool = False) -> Path:
    """Write a mesh to an STL file.

    Args:
        mesh: Mesh to write
        path: Output path
        ascii: Write ASCII instead of binary STL

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = encode_stl_ascii(mesh, name=path.stem) if ascii else encode_stl_binary(mesh)
    path.write_bytes(data)
    return path
