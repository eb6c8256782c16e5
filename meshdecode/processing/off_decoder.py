"""OFF/COFF decoding with per-face colors."""

import math
import re
from typing import Optional, Union

import numpy as np

from meshdecode.core.config import DecoderConfig
from meshdecode.core.exceptions import (
    FaceIndexError,
    InvalidHeader,
    MalformedNumeric,
    TruncatedInput,
)
from meshdecode.core.mesh import MeshFormat, RawMesh
from meshdecode.utils.logging import get_logger

logger = get_logger(__name__)

# OpenSCAD writes "OFF 8 6 0"; standard OFF puts the counts on the next line
HEADER_PATTERN = re.compile(r"^C?OFF\s*(.*)", re.IGNORECASE)

# Colors above this are taken as 0-255 integers
COLOR_RANGE_MAX = 1.0
COLOR_BYTE_MAX = 255.0

FLOAT32_MAX = float(np.finfo(np.float32).max)


def _split_lines(text: str) -> list[str]:
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


def _parse_float(token: str, context: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise MalformedNumeric(token, context) from None
    if not math.isfinite(value) or abs(value) > FLOAT32_MAX:
        raise MalformedNumeric(token, context)
    return value


def _parse_int(token: str, context: str) -> int:
    value = _parse_float(token, context)
    if not value.is_integer():
        raise MalformedNumeric(token, context)
    return int(value)


def _parse_counts(line: str) -> tuple[int, int, int]:
    tokens = line.split()
    if len(tokens) < 2:
        raise TruncatedInput("OFF counts", 2, len(tokens))
    counts = [_parse_int(token, "OFF counts") for token in tokens[:3]]
    if any(c < 0 for c in counts):
        raise MalformedNumeric(line, "OFF counts")
    # The edge count is optional and never used
    edge_count = counts[2] if len(counts) > 2 else 0
    return counts[0], counts[1], edge_count


class OFFDecoder:
    """Parses OFF/COFF text into colored triangle soup."""

    def __init__(self, config: Optional[DecoderConfig] = None):
        """Initialize OFF decoder.

        Args:
            config: Optional decoder configuration
        """
        self.config = config or DecoderConfig()

    def decode(self, text: Union[str, bytes]) -> RawMesh:
        """Decode OFF/COFF text.

        Polygons are fan-triangulated around their first vertex. When any
        face declares a color component above 1, every color in the file is
        divided by 255.

        Args:
            text: File contents

        Returns:
            RawMesh with positions and, if any face had one, colors

        Raises:
            InvalidHeader: If the first line is not an OFF/COFF header
            TruncatedInput: If the file ends before the declared counts
            FaceIndexError: If a face references a missing vertex
            MalformedNumeric: If a count, coordinate, index or color is not numeric
        """
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = bytes(text).decode("utf-8", errors="replace")

        lines = _split_lines(text)
        if not lines:
            raise InvalidHeader(None)
        header = HEADER_PATTERN.match(lines[0])
        if header is None:
            raise InvalidHeader(lines[0])
        idx = 1

        remainder = header.group(1).strip()
        if not remainder:
            if idx >= len(lines):
                raise TruncatedInput("OFF counts", 1, 0)
            remainder = lines[idx]
            idx += 1
        vertex_count, face_count, _ = _parse_counts(remainder)

        available = len(lines) - idx
        if available < vertex_count:
            raise TruncatedInput("OFF vertices", vertex_count, available)
        vertices = self._parse_vertices(lines[idx:idx + vertex_count])
        idx += vertex_count

        available = len(lines) - idx
        if available < face_count:
            raise TruncatedInput("OFF faces", face_count, available)
        positions, colors, has_color, needs_rescale = self._parse_faces(
            lines[idx:idx + face_count], vertices
        )

        if needs_rescale:
            colors /= 255.0

        logger.debug(
            "off_decoded",
            vertices=vertex_count,
            faces=face_count,
            triangles=len(positions) // 3,
            has_color=has_color,
            rescaled_colors=needs_rescale,
        )
        return RawMesh(
            positions=positions,
            colors=colors if has_color else None,
            source_format=MeshFormat.OFF,
        )

    def _parse_vertices(self, lines: list[str]) -> np.ndarray:
        vertices = np.empty((len(lines), 3), dtype=np.float32)
        for i, line in enumerate(lines):
            tokens = line.split()
            context = f"OFF vertex {i}"
            if len(tokens) < 3:
                raise TruncatedInput(context, 3, len(tokens))
            vertices[i] = [_parse_float(token, context) for token in tokens[:3]]
        return vertices

    def _parse_faces(
        self,
        lines: list[str],
        vertices: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray, bool, bool]:
        """Fan-triangulate face lines.

        Raw color values are kept as read; the caller applies the global
        rescale once every face has been seen.

        Returns:
            Tuple of (positions, colors, has_color, needs_rescale)
        """
        corner_indices: list[int] = []
        corner_colors: list[tuple[float, float, float]] = []
        has_color = False
        needs_rescale = False

        for face, line in enumerate(lines):
            tokens = line.split()
            context = f"OFF face {face}"
            degree = _parse_int(tokens[0], context)
            if degree < 0:
                raise MalformedNumeric(tokens[0], context)
            if len(tokens) < 1 + degree:
                raise TruncatedInput(context, degree, len(tokens) - 1)

            indices = [_parse_int(token, context) for token in tokens[1:1 + degree]]
            for index in indices:
                if index < 0 or index >= len(vertices):
                    raise FaceIndexError(face, index, len(vertices))

            color = self.config.default_color
            color_values = tokens[1 + degree:]
            if len(color_values) >= 3:
                # Alpha and anything after it is ignored
                color = tuple(_parse_float(token, context) for token in color_values[:3])
                if any(c < 0 or c > COLOR_BYTE_MAX for c in color):
                    raise MalformedNumeric(" ".join(color_values[:3]), f"{context} color")
                has_color = True
                if any(c > COLOR_RANGE_MAX for c in color):
                    needs_rescale = True

            for t in range(1, degree - 1):
                corner_indices.extend((indices[0], indices[t], indices[t + 1]))
                corner_colors.extend((color, color, color))

        positions = vertices[np.array(corner_indices, dtype=np.int64)].reshape((-1, 3))
        colors = np.array(corner_colors, dtype=np.float32).reshape((-1, 3))
        return positions, colors, has_color, needs_rescale


def parse_off(text: Union[str, bytes], config: Optional[DecoderConfig] = None) -> RawMesh:
    """Convenience function to decode OFF/COFF text into triangle soup.

    Args:
        text: File contents
        config: Optional decoder configuration

    Returns:
        RawMesh, not yet normalized
    """
    return OFFDecoder(config=config).decode(text)
