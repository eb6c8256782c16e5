"""meshdecode - Decode STL and OFF/COFF files into render-ready triangle meshes."""

import logging

from meshdecode.core import (
    BoundingBox,
    BoundingSphere,
    Config,
    DecoderConfig,
    FaceIndexError,
    InvalidHeader,
    MalformedNumeric,
    Mesh,
    MeshDecodeError,
    MeshFormat,
    MeshLoadError,
    SizeMismatch,
    TruncatedInput,
)
from meshdecode.processing import decode, decode_auto, decode_off, load_mesh

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "decode",
    "decode_auto",
    "decode_off",
    "load_mesh",
    "Mesh",
    "MeshFormat",
    "BoundingBox",
    "BoundingSphere",
    "Config",
    "DecoderConfig",
    "MeshDecodeError",
    "InvalidHeader",
    "TruncatedInput",
    "FaceIndexError",
    "SizeMismatch",
    "MalformedNumeric",
    "MeshLoadError",
]
