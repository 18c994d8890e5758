"""
Error types raised while decoding a /vcs blob.

Every failure is a subclass of DecodeError, so callers can catch the whole
family at once or branch on the concrete class. Each class also carries a
short ``kind`` string that is stable across releases and convenient as a
log field or counter key.
"""


class DecodeError(ValueError):
    """Base class for all blob decoding failures."""

    kind = "decode_error"


class LengthMismatch(DecodeError):
    """The OSC length prefix does not match the number of bytes that follow it."""

    kind = "length_mismatch"

    def __init__(self, declared: int, actual: int):
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"OSC blob declares {declared} bytes but {actual} bytes follow the prefix"
        )


class Truncated(DecodeError):
    """The input is too short to hold a length prefix or a gzip header."""

    kind = "truncated"

    def __init__(self, size: int, required: int):
        self.size = size
        self.required = required
        super().__init__(f"blob is truncated: {size} bytes, need at least {required}")


class NotGzip(DecodeError):
    """
    The payload does not start with the gzip magic bytes.

    This usually means Kyma's optimized communication is turned off and a
    plain /vcs response reached the blob path. The caller may choose to treat
    the bytes as uncompressed text instead.
    """

    kind = "not_gzip"

    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f"blob is not gzip data (starts with {magic.hex() or 'nothing'})")


class Decompression(DecodeError):
    """The gzip stream is corrupt, incomplete, or fails its checksum."""

    kind = "decompression"

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"gzip decompression failed: {details}")


class InvalidUtf8(DecodeError):
    """The inflated bytes are not valid UTF-8 text."""

    kind = "invalid_utf8"

    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason
        super().__init__(f"decompressed blob is not UTF-8 at byte {position}: {reason}")


class InvalidJson(DecodeError):
    """The decoded text is not a JSON document (convenience path only)."""

    kind = "invalid_json"

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"decoded blob is not JSON: {details}")
