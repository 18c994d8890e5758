"""
OscReader - Minimal OSC (Open Sound Control) message parser.

This module provides a lightweight OSC reader for parsing binary OSC messages
received over UDP. It's designed for pulling the blob argument out of the
/vcs notifications a Kyma sound engine sends.
"""

import struct

VCS_ADDRESS = "/vcs"


class OscReader:
    """
    Tiny OSC reader for parsing a single OSC message packet.

    Handles the basic OSC message format with support for int32, float32,
    string and blob argument types. Blob arguments are returned as bytes with
    the length prefix and padding removed.

    Example usage:
        data = sock.recvfrom(65535)[0]
        reader = OscReader(data)
        address, args = reader.read_message()
        # address = "/vcs"
        # args = [b'\\x1f\\x8b\\x08...']
    """

    def __init__(self, data: bytes):
        """
        Initialize the OSC reader with raw packet data.

        Args:
            data: Raw bytes from UDP packet containing OSC message
        """
        self.data = bytes(data)
        self.i = 0
        self.n = len(self.data)

    def _read_padded_string(self):
        """Read a null-terminated, 4-byte padded string."""
        start = self.i
        try:
            end = self.data.index(b'\x00', start)
        except ValueError:
            raise ValueError("OSC string not null-terminated")
        s = self.data[start:end].decode('utf-8', errors='replace')
        self.i = (end + 4) & ~0x03
        if self.i > self.n:
            raise ValueError("OSC string padding overflow")
        return s

    def _read_int32(self):
        """Read a big-endian 32-bit integer."""
        if self.i + 4 > self.n:
            raise ValueError("OSC int32 truncated")
        val = struct.unpack(">i", self.data[self.i:self.i+4])[0]
        self.i += 4
        return val

    def _read_float32(self):
        """Read a big-endian 32-bit float."""
        if self.i + 4 > self.n:
            raise ValueError("OSC float32 truncated")
        val = struct.unpack(">f", self.data[self.i:self.i+4])[0]
        self.i += 4
        return val

    def _read_blob(self):
        """Read a length-prefixed, 4-byte padded blob."""
        size = self._read_int32()
        if size < 0:
            raise ValueError("OSC blob has negative length")
        end = self.i + size
        if end > self.n:
            raise ValueError("OSC blob truncated")
        blob = self.data[self.i:end]
        # Some senders omit the trailing pad of the last argument.
        self.i = min((end + 3) & ~0x03, self.n)
        return blob

    def read_message(self):
        """
        Parse the OSC message and return address and arguments.

        Returns:
            Tuple of (address: str, args: list) where:
                - address is the OSC address pattern (e.g., "/vcs")
                - args is a list of parsed arguments (int, float, str or bytes)

        Raises:
            ValueError: If the message is malformed
        """
        address = self._read_padded_string()
        if not address:
            raise ValueError("Empty OSC address")
        if address.startswith("#bundle"):
            raise ValueError("OSC bundles are not supported")
        if self.i >= self.n:
            return address, []
        typetags = self._read_padded_string()
        if not typetags.startswith(','):
            raise ValueError("OSC typetags missing ',' prefix")
        argspec = typetags[1:]
        args = []
        for t in argspec:
            if t == 'i':
                args.append(self._read_int32())
            elif t == 'f':
                args.append(self._read_float32())
            elif t == 's':
                args.append(self._read_padded_string())
            elif t == 'b':
                args.append(self._read_blob())
            else:
                raise ValueError(f"Unsupported OSC arg type: {t}")
        return address, args


def read_vcs_blob(packet: bytes) -> bytes:
    """
    Extract the blob payload from a raw "/vcs,b" OSC packet.

    Args:
        packet: Complete OSC message as received over UDP

    Returns:
        The blob bytes, without length prefix or padding.

    Raises:
        ValueError: If the packet is malformed or is not a /vcs blob message
    """
    address, args = OscReader(packet).read_message()
    if address != VCS_ADDRESS:
        raise ValueError(f"Unexpected address pattern: {address} (expected '{VCS_ADDRESS}')")
    if len(args) != 1 or not isinstance(args[0], bytes):
        raise ValueError("Invalid type tag, expected ',b'")
    return args[0]
