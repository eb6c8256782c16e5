"""ASCII STL decoding."""

import math
import re
from typing import Optional, Union

import numpy as np

from meshdecode.core.config import DecoderConfig
from meshdecode.core.exceptions import MalformedNumeric
from meshdecode.core.mesh import MeshFormat, RawMesh
from meshdecode.processing.sniffer import Buffer
from meshdecode.utils.logging import get_logger

logger = get_logger(__name__)

FLOAT32_MAX = float(np.finfo(np.float32).max)

_NUM = r"([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_VERTEX = r"vertex\s+" + r"\s+".join([_NUM] * 3)

FACET_PATTERN = re.compile(
    r"facet\s+normal\s+" + r"\s+".join([_NUM] * 3)
    + r"\s+outer\s+loop\s+"
    + r"\s+".join([_VERTEX] * 3)
    + r"\s+endloop\s+endfacet"
)


def _to_float(token: str, facet: int) -> float:
    value = float(token)
    if not math.isfinite(value) or abs(value) > FLOAT32_MAX:
        raise MalformedNumeric(token, f"ASCII STL facet {facet}")
    return value


def parse_stl_ascii(buffer: Union[Buffer, str], config: Optional[DecoderConfig] = None) -> RawMesh:
    """Decode ASCII STL into triangle soup.

    Every facet matching the ``facet normal ... endfacet`` grammar is used
    in order of appearance. Anything else is skipped, including facets
    written in an unexpected layout or holding a token that is not a plain
    decimal number, so text with no facets gives an empty mesh.

    Args:
        buffer: File contents, UTF-8 encoded
        config: Optional decoder configuration (unused by this format)

    Returns:
        RawMesh with positions and per-corner file normals

    Raises:
        MalformedNumeric: If a matched number does not fit in float32
    """
    if isinstance(buffer, str):
        text = buffer
    else:
        text = bytes(buffer).decode("utf-8", errors="replace")

    positions: list[list[float]] = []
    normals: list[list[float]] = []
    for facet, match in enumerate(FACET_PATTERN.finditer(text)):
        values = [_to_float(token, facet) for token in match.groups()]
        normal = values[0:3]
        for corner in range(3):
            start = 3 + corner * 3
            positions.append(values[start:start + 3])
            normals.append(normal)

    logger.debug("stl_ascii_decoded", triangles=len(positions) // 3, size=len(buffer))
    return RawMesh(
        positions=np.array(positions, dtype=np.float32).reshape((-1, 3)),
        normals=np.array(normals, dtype=np.float32).reshape((-1, 3)),
        source_format=MeshFormat.STL_ASCII,
    )
