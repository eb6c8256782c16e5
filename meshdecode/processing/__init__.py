"""Mesh decoding functionality for meshdecode."""

from meshdecode.processing.mesh_loader import (
    MeshLoader,
    decode,
    decode_auto,
    decode_off,
    load_mesh,
)
from meshdecode.processing.normalizer import MeshNormalizer, normalize_mesh
from meshdecode.processing.off_decoder import OFFDecoder, parse_off
from meshdecode.processing.sniffer import is_ascii_stl, sniff_format
from meshdecode.processing.stl_ascii import parse_stl_ascii
from meshdecode.processing.stl_binary import parse_stl_binary
from meshdecode.processing.stl_writer import encode_stl_ascii, encode_stl_binary, save_mesh

__all__ = [
    "MeshLoader",
    "decode",
    "decode_auto",
    "decode_off",
    "load_mesh",
    "MeshNormalizer",
    "normalize_mesh",
    "OFFDecoder",
    "parse_off",
    "parse_stl_ascii",
    "parse_stl_binary",
    "is_ascii_stl",
    "sniff_format",
    "encode_stl_ascii",
    "encode_stl_binary",
    "save_mesh",
]
