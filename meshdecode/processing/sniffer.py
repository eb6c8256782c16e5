"""Binary/ASCII STL detection."""

from typing import Union

from meshdecode.core.mesh import MeshFormat

Buffer = Union[bytes, bytearray, memoryview]

# Only the binary STL header region is inspected
SNIFF_LENGTH = 80

# Latin-1 whitespace skipped before the keyword; C0 separators and NEL are not
LEADING_WHITESPACE = " \t\n\r\x0b\x0c\xa0"


def is_ascii_stl(buffer: Buffer) -> bool:
    """Check whether a buffer looks like ASCII STL.

    The leading bytes are read as single-byte characters and, once leading
    whitespace is stripped, must start with ``solid``. A binary file whose
    header happens to begin with ``solid`` is reported as ASCII; callers that
    need certainty must pass the format explicitly.

    Args:
        buffer: Raw file contents

    Returns:
        True if ASCII, False if binary
    """
    header = bytes(buffer[:SNIFF_LENGTH]).decode("latin-1")
    return header.lstrip(LEADING_WHITESPACE).startswith("solid")


def sniff_format(buffer: Buffer) -> MeshFormat:
    """Classify an STL buffer, falling back to binary."""
    if is_ascii_stl(buffer):
        return MeshFormat.STL_ASCII
    return MeshFormat.STL_BINARY
