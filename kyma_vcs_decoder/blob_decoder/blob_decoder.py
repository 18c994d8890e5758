"""
BlobDecoder - Decoder for optimized Kyma "/vcs" blob arguments.

When "Optimize Kyma Control Communication" is enabled in Kyma's Performance
Preferences, the Paca(rana) reports VCS widget changes as a /vcs message with
a single blob argument. The blob holds a gzip-compressed UTF-8 JSON document.

Two input forms are accepted, through two entry points:

    decode_blob(payload)        the N payload bytes of the blob, as handed
                                over by an OSC library for a 'b' argument
    decode_framed_blob(data)    the OSC wire form of the argument: a 4-byte
                                big-endian length N, the N bytes, then zero
                                padding up to a multiple of 4

Passing one form to the other entry point fails loudly: a framed blob given
to decode_blob starts with its length prefix and raises NotGzip, and a bare
gzip payload given to decode_framed_blob reads the gzip magic as an absurd
length and raises LengthMismatch.

Decoding is a pure function of its input. Nothing is cached, logged or
retained between calls, so the functions are safe to call from any thread.
"""

import json
import struct
import zlib

from .errors import (
    Decompression,
    InvalidJson,
    InvalidUtf8,
    LengthMismatch,
    NotGzip,
    Truncated,
)

GZIP_MAGIC = b"\x1f\x8b"
GZIP_HEADER_SIZE = 10
OSC_LENGTH_PREFIX_SIZE = 4

# Upper bound on inflated output, well above any VCS state message.
DEFAULT_MAX_LENGTH = 16 * 1024 * 1024

# wbits for zlib: gzip container only, 32K window.
_GZIP_WBITS = 16 + zlib.MAX_WBITS


def _as_bytes(payload) -> bytes:
    """Copy a bytes-like object into immutable bytes (rejects str and int)."""
    return memoryview(payload).tobytes()


def _osc_padded(n: int) -> int:
    return (n + 3) & ~0x03


def unframe_blob(data) -> bytes:
    """
    Strip the OSC length prefix and padding from a blob argument.

    Args:
        data: OSC wire form of a blob argument (length prefix, bytes, padding)

    Returns:
        The N payload bytes declared by the prefix.

    Raises:
        Truncated: fewer than 4 bytes, so no length prefix
        LengthMismatch: the prefix disagrees with the bytes that follow
    """
    data = _as_bytes(data)
    if len(data) < OSC_LENGTH_PREFIX_SIZE:
        raise Truncated(len(data), OSC_LENGTH_PREFIX_SIZE)

    declared = struct.unpack(">I", data[:OSC_LENGTH_PREFIX_SIZE])[0]
    body = data[OSC_LENGTH_PREFIX_SIZE:]
    actual = len(body)

    if actual == declared:
        return body
    if actual == _osc_padded(declared) and not body[declared:].strip(b"\x00"):
        return body[:declared]
    raise LengthMismatch(declared, actual)


def check_gzip_header(payload: bytes):
    """
    Validate the size and magic bytes of a gzip payload.

    Raises:
        Truncated: payload is empty, a single byte, or a cut-off gzip header
        NotGzip: payload does not start with 0x1F 0x8B
    """
    if len(payload) < len(GZIP_MAGIC):
        raise Truncated(len(payload), len(GZIP_MAGIC))
    if payload[:2] != GZIP_MAGIC:
        raise NotGzip(payload[:2])
    if len(payload) < GZIP_HEADER_SIZE:
        raise Truncated(len(payload), GZIP_HEADER_SIZE)


def inflate_gzip(payload: bytes, max_length=DEFAULT_MAX_LENGTH) -> bytes:
    """
    Inflate a single gzip member held entirely in memory.

    The whole stream must be consumed: a missing trailer, a CRC32 or size
    mismatch, or non-zero bytes after the member all fail. Zero bytes after
    the member are tolerated as OSC padding.

    Args:
        payload: Complete gzip member
        max_length: Largest accepted output in bytes, or None for no limit

    Returns:
        The inflated bytes.

    Raises:
        Decompression: on any stream error
    """
    inflater = zlib.decompressobj(_GZIP_WBITS)
    try:
        if max_length is None:
            inflated = inflater.decompress(payload)
        else:
            inflated = inflater.decompress(payload, max_length + 1)
    except zlib.error as e:
        raise Decompression(str(e)) from e

    if max_length is not None and len(inflated) > max_length:
        raise Decompression(f"output exceeds {max_length} bytes")
    if not inflater.eof:
        raise Decompression("unexpected end of gzip stream")
    if inflater.unused_data.strip(b"\x00"):
        raise Decompression(
            f"{len(inflater.unused_data)} trailing bytes after gzip member"
        )
    return inflated


def _decode_utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8(e.start, e.reason) from e


def decode_blob(payload, max_length=DEFAULT_MAX_LENGTH) -> str:
    """
    Decode the payload of an optimized /vcs blob into JSON text.

    Args:
        payload: The N blob bytes (bytes, bytearray or memoryview), without
            the OSC length prefix
        max_length: Largest accepted decompressed size in bytes, or None

    Returns:
        The JSON document as a str, exactly as Kyma compressed it.

    Raises:
        Truncated, NotGzip, Decompression, InvalidUtf8 (all DecodeError)
    """
    data = _as_bytes(payload)
    check_gzip_header(data)
    return _decode_utf8(inflate_gzip(data, max_length))


def decode_framed_blob(data, max_length=DEFAULT_MAX_LENGTH) -> str:
    """
    Decode a /vcs blob argument in its OSC wire form into JSON text.

    Args:
        data: 4-byte big-endian length N, N payload bytes, optional zero
            padding to a 4-byte boundary
        max_length: Largest accepted decompressed size in bytes, or None

    Returns:
        The JSON document as a str.

    Raises:
        LengthMismatch, Truncated, NotGzip, Decompression, InvalidUtf8
    """
    return decode_blob(unframe_blob(data), max_length)


def decode_blob_json(payload, framed=False, max_length=DEFAULT_MAX_LENGTH):
    """
    Decode a /vcs blob and parse the JSON document it carries.

    Args:
        payload: Blob bytes, bare or in OSC wire form (see ``framed``)
        framed: True if ``payload`` still has its OSC length prefix
        max_length: Largest accepted decompressed size in bytes, or None

    Returns:
        The parsed JSON value (normally a dict describing a widget change).

    Raises:
        InvalidJson: the text decoded but is not JSON
        Any other DecodeError from the raw decode path
    """
    if framed:
        text = decode_framed_blob(payload, max_length)
    else:
        text = decode_blob(payload, max_length)
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise InvalidJson(str(e)) from e


class BlobDecoder:
    """
    Configured decoder for /vcs blobs.

    Holds options only; every call is independent of the ones before it.

    Example usage:
        decoder = BlobDecoder(framed=False)
        text = decoder.decode(blob)          # '{"widget":3,"value":0.42}'
        event = decoder.decode_json(blob)    # {'widget': 3, 'value': 0.42}
    """

    def __init__(self, framed: bool = False, max_length=DEFAULT_MAX_LENGTH):
        """
        Args:
            framed: Expect the OSC wire form (length prefix and padding)
            max_length: Largest accepted decompressed size, or None
        """
        self.framed = framed
        self.max_length = max_length

    def decode(self, payload) -> str:
        """Decode a blob into its JSON text."""
        if self.framed:
            return decode_framed_blob(payload, self.max_length)
        return decode_blob(payload, self.max_length)

    def decode_json(self, payload):
        """Decode a blob and parse its JSON document."""
        return decode_blob_json(payload, framed=self.framed, max_length=self.max_length)

    def __repr__(self):
        return f"BlobDecoder(framed={self.framed}, max_length={self.max_length})"
