"""
Binary /vcs event pairs.

Kyma's protocol documentation describes the /vcs blob as a list of big-endian
(int32 EventID, float32 value) pairs, one per widget that changed value:

    byteCount / 8 pairs of { int_id, float_value }

Depending on the Kyma version and preferences, the pairs arrive uncompressed,
as a gzip member, or as a raw DEFLATE stream prefixed with a single '?' byte
(Kyma strips the gzip header in that case).
"""

import zlib
from collections import namedtuple

import numpy as np

from ..blob_decoder.blob_decoder import DEFAULT_MAX_LENGTH, GZIP_MAGIC, inflate_gzip
from ..blob_decoder.errors import Decompression

KYMA_DEFLATE_MARKER = b"?"
EVENT_PAIR_SIZE = 8

# Big-endian EventID / value record
EVENT_PAIR_DTYPE = np.dtype([("event_id", ">i4"), ("value", ">f4")])

VcsEvent = namedtuple("VcsEvent", ["event_id", "value"])


def _inflate_kyma_deflate(stream: bytes, max_length) -> bytes:
    """Inflate Kyma's headerless deflate stream, with the same rules as gzip."""
    inflater = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        if max_length is None:
            data = inflater.decompress(stream)
        else:
            data = inflater.decompress(stream, max_length + 1)
    except zlib.error as e:
        raise Decompression(f"Kyma headerless deflate: {e}") from e

    if max_length is not None and len(data) > max_length:
        raise Decompression(f"Kyma headerless deflate: output exceeds {max_length} bytes")
    if not inflater.eof:
        raise Decompression("Kyma headerless deflate: unexpected end of stream")
    if inflater.unused_data.strip(b"\x00"):
        raise Decompression(
            f"Kyma headerless deflate: {len(inflater.unused_data)} trailing bytes after stream"
        )
    return data


def inflate_vcs_pairs(blob: bytes, max_length=DEFAULT_MAX_LENGTH) -> bytes:
    """
    Undo the optional compression applied to a binary /vcs blob.

    Args:
        blob: Blob payload as extracted from the OSC message
        max_length: Largest accepted decompressed size in bytes, or None

    Returns:
        Uncompressed pair data.

    Raises:
        Decompression: If a compressed stream is corrupt or too large
    """
    blob = bytes(blob)
    if blob.startswith(KYMA_DEFLATE_MARKER):
        return _inflate_kyma_deflate(blob[1:], max_length)
    if len(blob) > 2 and blob.startswith(GZIP_MAGIC):
        return inflate_gzip(blob, max_length)
    return blob


def parse_event_pairs(data: bytes):
    """
    Parse uncompressed pair data into VcsEvent records.

    Args:
        data: Concatenated 8-byte big-endian (int32, float32) pairs

    Returns:
        List of VcsEvent(event_id, value), in blob order. Empty for empty data.

    Raises:
        ValueError: If the data length is not a multiple of 8
    """
    if len(data) % EVENT_PAIR_SIZE != 0:
        raise ValueError("Blob length is not a multiple of 8")
    pairs = np.frombuffer(bytes(data), dtype=EVENT_PAIR_DTYPE)
    return [VcsEvent(int(p["event_id"]), float(p["value"])) for p in pairs]


def decode_event_pairs(blob: bytes, max_length=DEFAULT_MAX_LENGTH):
    """Inflate (if needed) and parse a binary /vcs blob."""
    return parse_event_pairs(inflate_vcs_pairs(blob, max_length))
