"""
Shared fixtures for building /vcs blobs and OSC packets.
"""
import gzip
import os
import struct
import sys

import pytest

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)


def _pad4(data: bytes) -> bytes:
    return data + b"\x00" * (-len(data) % 4)


def _osc_string(s: str) -> bytes:
    return _pad4(s.encode("utf-8") + b"\x00")


@pytest.fixture
def gzip_text():
    """Gzip-compress a str the way Kyma does for optimized responses."""
    def _gzip_text(text: str) -> bytes:
        return gzip.compress(text.encode("utf-8"))
    return _gzip_text


@pytest.fixture
def osc_frame():
    """Wrap a payload in the OSC blob wire form: length prefix plus padding."""
    def _osc_frame(payload: bytes) -> bytes:
        return _pad4(struct.pack(">I", len(payload)) + payload)
    return _osc_frame


@pytest.fixture
def osc_packet():
    """
    Build a single OSC message.

    Arguments are encoded according to their type tag: 'i', 'f', 's', 'b'.
    """
    def _osc_packet(address: str, typetags: str, *args) -> bytes:
        buf = _osc_string(address) + _osc_string("," + typetags)
        for tag, value in zip(typetags, args):
            if tag == "i":
                buf += struct.pack(">i", value)
            elif tag == "f":
                buf += struct.pack(">f", value)
            elif tag == "s":
                buf += _osc_string(value)
            elif tag == "b":
                buf += _pad4(struct.pack(">I", len(value)) + value)
        return buf
    return _osc_packet


@pytest.fixture
def vcs_packet(osc_packet):
    """Build a /vcs,b packet around a blob."""
    def _vcs_packet(blob: bytes) -> bytes:
        return osc_packet("/vcs", "b", blob)
    return _vcs_packet
