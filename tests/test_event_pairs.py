"""
Tests for the binary EventID/value pair layout of /vcs blobs.
"""

import gzip
import struct
import zlib

import pytest

from kyma_vcs_decoder.blob_decoder import DEFAULT_MAX_LENGTH, Decompression
from kyma_vcs_decoder.utils import (
    VcsEvent,
    decode_event_pairs,
    inflate_vcs_pairs,
    parse_event_pairs,
)


def _pairs(*events):
    return b"".join(struct.pack(">if", event_id, value) for event_id, value in events)


def _kyma_deflate(data):
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    return b"?" + compressor.compress(data) + compressor.flush()


class TestParseEventPairs:

    def test_single_pair(self):
        events = parse_event_pairs(_pairs((42, 3.14)))
        assert len(events) == 1
        assert events[0].event_id == 42
        assert events[0].value == pytest.approx(3.14, abs=1e-6)

    def test_multiple_pairs_keep_order(self):
        events = parse_event_pairs(_pairs((1, 0.0), (-7, -1.5), (1048577, 1.0)))
        assert events == [VcsEvent(1, 0.0), VcsEvent(-7, -1.5), VcsEvent(1048577, 1.0)]

    def test_returns_python_scalars(self):
        event = parse_event_pairs(_pairs((5, 0.25)))[0]
        assert type(event.event_id) is int
        assert type(event.value) is float

    def test_empty(self):
        assert parse_event_pairs(b"") == []

    def test_rejects_partial_pair(self):
        with pytest.raises(ValueError, match="multiple of 8"):
            parse_event_pairs(bytes([0, 1, 2, 3, 4, 5, 6]))


class TestInflateVcsPairs:

    def test_uncompressed_passthrough(self):
        data = _pairs((42, 3.14))
        assert inflate_vcs_pairs(data) == data

    def test_kyma_headerless_deflate(self):
        data = _pairs((123, -1.23))
        assert inflate_vcs_pairs(_kyma_deflate(data)) == data

    def test_gzip(self):
        data = _pairs((9, 0.5), (10, 0.75))
        assert inflate_vcs_pairs(gzip.compress(data)) == data

    def test_corrupt_headerless_deflate(self):
        with pytest.raises(Decompression):
            inflate_vcs_pairs(b"?" + b"\xff" * 8)

    def test_cut_off_headerless_deflate(self):
        with pytest.raises(Decompression):
            inflate_vcs_pairs(_kyma_deflate(_pairs((1, 1.0), (2, 2.0)))[:-3])

    def test_corrupt_gzip(self):
        with pytest.raises(Decompression):
            inflate_vcs_pairs(bytes([0x1F, 0x8B, 0, 1, 2, 3, 4, 5, 6, 7]))

    def test_headerless_deflate_output_limit(self):
        blob = _kyma_deflate(b"\x00" * 4096)
        with pytest.raises(Decompression, match="exceeds"):
            inflate_vcs_pairs(blob, max_length=1024)

    def test_headerless_deflate_default_limit(self):
        blob = _kyma_deflate(b"\x00" * (DEFAULT_MAX_LENGTH + 8))
        assert len(blob) < 65536
        with pytest.raises(Decompression, match="exceeds"):
            inflate_vcs_pairs(blob)

    def test_headerless_deflate_no_limit(self):
        data = _pairs((1, 1.0)) * 512
        assert inflate_vcs_pairs(_kyma_deflate(data), max_length=None) == data

    def test_gzip_output_limit(self):
        with pytest.raises(Decompression):
            inflate_vcs_pairs(gzip.compress(_pairs((1, 1.0)) * 8), max_length=16)

    def test_headerless_deflate_trailing_garbage(self):
        with pytest.raises(Decompression, match="trailing"):
            inflate_vcs_pairs(_kyma_deflate(b"\x00" * 8) + b"junkjunk")

    def test_headerless_deflate_trailing_zero_padding(self):
        data = _pairs((3, 0.5))
        assert inflate_vcs_pairs(_kyma_deflate(data) + b"\x00\x00") == data


def test_decode_event_pairs():
    events = decode_event_pairs(_kyma_deflate(_pairs((123, -1.23))))
    assert events[0].event_id == 123
    assert events[0].value == pytest.approx(-1.23, abs=1e-6)
