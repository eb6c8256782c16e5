"""Decode entry points and mesh file loading."""

from pathlib import Path
from typing import Optional, Union

from meshdecode.core.config import DecoderConfig
from meshdecode.core.exceptions import MeshLoadError
from meshdecode.core.mesh import Mesh, MeshFormat
from meshdecode.processing.normalizer import normalize_mesh
from meshdecode.processing.off_decoder import parse_off
from meshdecode.processing.sniffer import Buffer, sniff_format
from meshdecode.processing.stl_ascii import parse_stl_ascii
from meshdecode.processing.stl_binary import parse_stl_binary
from meshdecode.utils.logging import StructuredLogger, get_logger

logger = get_logger(__name__)


def decode_auto(buffer: Buffer, config: Optional[DecoderConfig] = None) -> Mesh:
    """Decode an STL buffer, sniffing ASCII vs binary.

    Args:
        buffer: Complete file contents
        config: Optional decoder configuration

    Returns:
        Normalized Mesh

    Raises:
        SizeMismatch: If a binary STL declares the wrong triangle count
        TruncatedInput: If a binary STL is shorter than its preamble
        MalformedNumeric: If a coordinate is not a finite number
    """
    fmt = sniff_format(buffer)
    logger.debug("format_sniffed", format=fmt.value, size=len(buffer))
    if fmt is MeshFormat.STL_ASCII:
        raw = parse_stl_ascii(buffer, config)
    else:
        raw = parse_stl_binary(buffer, config)
    return normalize_mesh(raw)


def decode_off(text: Union[str, bytes], config: Optional[DecoderConfig] = None) -> Mesh:
    """Decode OFF/COFF text.

    Args:
        text: File contents
        config: Optional decoder configuration

    Returns:
        Normalized Mesh, with colors if any face declared one

    Raises:
        InvalidHeader: If the header line is missing or malformed
        TruncatedInput: If fewer lines exist than the counts declare
        MalformedNumeric: If a token is not a finite number
    """
    return normalize_mesh(parse_off(text, config))


def decode(
    data: Union[Buffer, str],
    fmt: Union[MeshFormat, str, None] = None,
    config: Optional[DecoderConfig] = None,
) -> Mesh:
    """Decode with an explicit format, or sniff STL when none is given.

    Args:
        data: File contents
        fmt: MeshFormat or its value (``stl_ascii``, ``stl_binary``, ``off``);
            ``stl`` sniffs between the two STL flavours
        config: Optional decoder configuration

    Returns:
        Normalized Mesh
    """
    if fmt is None or fmt == "stl":
        if isinstance(data, str):
            data = data.encode("utf-8")
        return decode_auto(data, config)

    fmt = MeshFormat(fmt)
    if fmt is MeshFormat.OFF:
        return decode_off(data, config)
    if isinstance(data, str):
        data = data.encode("utf-8")
    if fmt is MeshFormat.STL_ASCII:
        return normalize_mesh(parse_stl_ascii(data, config))
    return normalize_mesh(parse_stl_binary(data, config))


class MeshLoader:
    """Reads mesh files from disk and decodes them."""

    SUFFIXES = {
        ".stl": "stl",
        ".off": MeshFormat.OFF,
    }

    def __init__(self, config: Optional[DecoderConfig] = None):
        """Initialize mesh loader.

        Args:
            config: Optional decoder configuration
        """
        self.config = config or DecoderConfig()

    def load(
        self,
        file_path: Union[str, Path],
        fmt: Union[MeshFormat, str, None] = None,
    ) -> Mesh:
        """Load a mesh file.

        Args:
            file_path: Path to an STL or OFF file
            fmt: Optional explicit format; by default chosen from the suffix

        Returns:
            Normalized Mesh

        Raises:
            MeshLoadError: If the file cannot be read
            MeshDecodeError: If the contents cannot be decoded
        """
        file_path = Path(file_path)
        self._validate_file(file_path, check_suffix=fmt is None)

        if fmt is None:
            fmt = self.SUFFIXES[file_path.suffix.lower()]

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise MeshLoadError(file_path, str(e))

        with StructuredLogger(logger, "decode", file=str(file_path), size=len(data)) as log:
            mesh = decode(data, fmt, self.config)
            log.update_context(
                format=mesh.source_format.value if mesh.source_format else None,
                triangles=mesh.triangle_count,
                has_colors=mesh.has_colors,
            )
        return mesh

    def _validate_file(self, file_path: Path, check_suffix: bool = True) -> None:
        """Validate file before loading.

        Args:
            file_path: Path to validate
            check_suffix: Whether the suffix must name a known format

        Raises:
            MeshLoadError: If file validation fails
        """
        if not file_path.exists():
            raise MeshLoadError(file_path, "File does not exist")

        if not file_path.is_file():
            raise MeshLoadError(file_path, "Path is not a file")

        file_size = file_path.stat().st_size

        if file_size == 0:
            raise MeshLoadError(file_path, "File is empty")

        if file_size > self.config.max_file_size:
            raise MeshLoadError(
                file_path,
                f"File too large ({file_size} bytes > {self.config.max_file_size} limit)",
            )

        if check_suffix and file_path.suffix.lower() not in self.SUFFIXES:
            raise MeshLoadError(
                file_path,
                f"Unsupported file extension: {file_path.suffix}",
            )


def load_mesh(
    file_path: Union[str, Path],
    fmt: Union[MeshFormat, str, None] = None,
    config: Optional[DecoderConfig] = None,
) -> Mesh:
    """Convenience function to load a mesh file.

    Args:
        file_path: Path to STL or OFF file
        fmt: Optional explicit format
        config: Optional decoder configuration

    Returns:
        Normalized Mesh
    """
    loader = MeshLoader(config=config)
    return loader.load(file_path, fmt=fmt)
