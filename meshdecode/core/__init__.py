"""Core functionality for meshdecode."""

from meshdecode.core.config import (
    Config,
    DecoderConfig,
    LoggingConfig,
    get_default_config,
    load_config,
)
from meshdecode.core.exceptions import (
    ConfigurationError,
    FaceIndexError,
    InvalidHeader,
    MalformedNumeric,
    MeshDecodeError,
    MeshLoadError,
    SizeMismatch,
    TruncatedInput,
)
from meshdecode.core.mesh import BoundingBox, BoundingSphere, Mesh, MeshFormat, RawMesh

__all__ = [
    # Config classes
    "Config",
    "DecoderConfig",
    "LoggingConfig",
    # Config functions
    "get_default_config",
    "load_config",
    # Data model
    "Mesh",
    "RawMesh",
    "MeshFormat",
    "BoundingBox",
    "BoundingSphere",
    # Exceptions
    "MeshDecodeError",
    "ConfigurationError",
    "InvalidHeader",
    "TruncatedInput",
    "FaceIndexError",
    "SizeMismatch",
    "MalformedNumeric",
    "MeshLoadError",
]
