"""Binary STL decoding."""

import struct
from typing import Optional

import numpy as np

from meshdecode.core.config import DecoderConfig
from meshdecode.core.exceptions import MalformedNumeric, SizeMismatch, TruncatedInput
from meshdecode.core.mesh import MeshFormat, RawMesh
from meshdecode.processing.sniffer import Buffer
from meshdecode.utils.logging import get_logger

logger = get_logger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
RECORD_SIZE = 50

# normal, three corners, attribute byte count
STL_RECORD_DTYPE = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attributes", "<u2"),
    ]
)


def read_triangle_count(buffer: Buffer) -> int:
    """Read the declared triangle count from a binary STL buffer.

    Raises:
        TruncatedInput: If the buffer ends before the count field
    """
    if len(buffer) < HEADER_SIZE + COUNT_SIZE:
        raise TruncatedInput("binary STL header", HEADER_SIZE + COUNT_SIZE, len(buffer))
    return struct.unpack_from("<I", buffer, HEADER_SIZE)[0]


def parse_stl_binary(buffer: Buffer, config: Optional[DecoderConfig] = None) -> RawMesh:
    """Decode a binary STL buffer into triangle soup.

    Args:
        buffer: Complete file contents
        config: Optional decoder configuration

    Returns:
        RawMesh with positions and per-corner file normals

    Raises:
        TruncatedInput: If the buffer is shorter than the 84-byte preamble
        SizeMismatch: If the count is zero or needs more bytes than exist
        MalformedNumeric: If any coordinate is NaN or infinite
    """
    if config is None:
        config = DecoderConfig()

    count = read_triangle_count(buffer)
    expected_size = HEADER_SIZE + COUNT_SIZE + count * RECORD_SIZE
    if count == 0 or expected_size > len(buffer) + config.size_tolerance:
        raise SizeMismatch(count, expected_size, len(buffer))

    data = bytes(buffer[HEADER_SIZE + COUNT_SIZE:expected_size])
    shortfall = count * RECORD_SIZE - len(data)
    if shortfall > 0:
        # Only the trailing attribute bytes can be missing here
        data += b"\x00" * shortfall

    records = np.frombuffer(data, dtype=STL_RECORD_DTYPE, count=count)
    positions = records["vertices"].reshape((-1, 3)).astype(np.float32)
    normals = np.repeat(records["normal"], 3, axis=0).astype(np.float32)

    if not np.all(np.isfinite(positions)):
        bad = int(np.argwhere(~np.isfinite(positions))[0][0])
        raise MalformedNumeric(
            str(positions[bad].tolist()), f"binary STL triangle {bad // 3}"
        )

    logger.debug(
        "stl_binary_decoded",
        triangles=count,
        size=len(buffer),
        trailing_bytes=max(len(buffer) - expected_size, 0),
    )
    return RawMesh(
        positions=positions,
        normals=normals,
        source_format=MeshFormat.STL_BINARY,
    )
