"""
BlobDecoder - Validation and decompression of optimized Kyma /vcs blobs.

Example usage:
    from kyma_vcs_decoder.blob_decoder import decode_blob, DecodeError

    try:
        text = decode_blob(blob)            # blob: bytes from a /vcs,b message
    except NotGzip:
        text = blob.decode("utf-8")         # optimization is off, plain text
    except DecodeError as e:
        print(f"dropping /vcs blob: {e.kind}: {e}")

Input forms:
    decode_blob          bare N-byte payload (what OSC libraries deliver)
    decode_framed_blob   OSC wire form: big-endian int32 length, payload, padding
"""

from .blob_decoder import (
    DEFAULT_MAX_LENGTH,
    BlobDecoder,
    check_gzip_header,
    decode_blob,
    decode_blob_json,
    decode_framed_blob,
    inflate_gzip,
    unframe_blob,
)
from .errors import (
    DecodeError,
    Decompression,
    InvalidJson,
    InvalidUtf8,
    LengthMismatch,
    NotGzip,
    Truncated,
)

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "BlobDecoder",
    "check_gzip_header",
    "decode_blob",
    "decode_blob_json",
    "decode_framed_blob",
    "inflate_gzip",
    "unframe_blob",
    "DecodeError",
    "Decompression",
    "InvalidJson",
    "InvalidUtf8",
    "LengthMismatch",
    "NotGzip",
    "Truncated",
]
