"""Custom exceptions for meshdecode."""

from pathlib import Path
from typing import Any, Optional


class MeshDecodeError(Exception):
    """Base exception for meshdecode."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(MeshDecodeError):
    """Raised when configuration is invalid."""

    pass


class InvalidHeader(MeshDecodeError):
    """Raised when an OFF/COFF header line is missing or malformed."""

    def __init__(self, line: Optional[str]):
        if line is None:
            reason = "missing header"
        else:
            reason = f"expected 'OFF' or 'COFF', got {line[:40]!r}"
        super().__init__(f"Invalid OFF: {reason}", {"line": line})
        self.line = line


class TruncatedInput(MeshDecodeError):
    """Raised when fewer lines or bytes are available than declared."""

    def __init__(self, section: str, expected: int, available: int):
        super().__init__(
            f"Truncated input in {section}: expected {expected}, only {available} available",
            {"section": section, "expected": expected, "available": available},
        )
        self.section = section
        self.expected = expected
        self.available = available


class FaceIndexError(TruncatedInput):
    """Raised when an OFF face references a vertex past the vertex table."""

    def __init__(self, face: int, index: int, vertex_count: int):
        MeshDecodeError.__init__(
            self,
            f"Face {face} references vertex {index} but only {vertex_count} vertices exist",
            {"face": face, "index": index, "vertex_count": vertex_count},
        )
        self.section = "faces"
        self.expected = index + 1
        self.available = vertex_count
        self.face = face
        self.index = index


class SizeMismatch(MeshDecodeError):
    """Raised when a binary STL triangle count disagrees with the buffer size."""

    def __init__(self, triangle_count: int, expected_size: int, actual_size: int):
        super().__init__(
            f"Invalid binary STL: {triangle_count} triangles, "
            f"expected {expected_size} bytes but got {actual_size}",
            {
                "triangle_count": triangle_count,
                "expected_size": expected_size,
                "actual_size": actual_size,
            },
        )
        self.triangle_count = triangle_count
        self.expected_size = expected_size
        self.actual_size = actual_size


class MalformedNumeric(MeshDecodeError):
    """Raised when a token expected to be numeric cannot be used as one."""

    def __init__(self, token: str, context: str):
        super().__init__(
            f"Malformed numeric value {token!r} in {context}",
            {"token": token, "context": context},
        )
        self.token = token
        self.context = context


class MeshLoadError(MeshDecodeError):
    """Raised when a mesh file cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to load mesh file '{path}': {reason}")
        self.path = path
        self.reason = reason
