"""
Kyma VCS Decoder - Decoding of optimized Kyma "/vcs" OSC notifications.

With "Optimize Kyma Control Communication" turned on, Kyma reports Virtual
Control Surface changes as a /vcs message whose single blob argument is a
gzip-compressed UTF-8 JSON document. This package validates and inflates
those blobs, and ships a small OSC receiver around the decoder.

Main classes:
    - decode_blob / BlobDecoder: Blob payload -> JSON text
    - OscReader: Parses a single OSC message, including blob arguments
    - VcsReceiver: Receives and decodes /vcs notifications over UDP

Example usage:
    from kyma_vcs_decoder import decode_blob, read_vcs_blob

    blob = read_vcs_blob(packet)       # packet: raw UDP datagram
    text = decode_blob(blob)           # '{"widget":3,"value":0.42}'

    # Or let the receiver do everything
    from kyma_vcs_decoder import VcsReceiver

    receiver = VcsReceiver(port=8000)
    receiver.start()
    while running:
        for message in receiver.drain_messages():
            print(message.payload)
    receiver.stop()
"""

# Import from subpackages
from .blob_decoder import (
    BlobDecoder,
    DecodeError,
    Decompression,
    InvalidJson,
    InvalidUtf8,
    LengthMismatch,
    NotGzip,
    Truncated,
    decode_blob,
    decode_blob_json,
    decode_framed_blob,
)
from .utils import VcsEvent, decode_event_pairs, inflate_vcs_pairs, parse_event_pairs
from .vcs_receiver import OscReader, VcsMessage, VcsReceiver, read_vcs_blob

__version__ = "0.1.0"
__all__ = [
    "BlobDecoder",
    "DecodeError",
    "Decompression",
    "InvalidJson",
    "InvalidUtf8",
    "LengthMismatch",
    "NotGzip",
    "Truncated",
    "decode_blob",
    "decode_blob_json",
    "decode_framed_blob",
    "VcsEvent",
    "decode_event_pairs",
    "inflate_vcs_pairs",
    "parse_event_pairs",
    "OscReader",
    "VcsMessage",
    "VcsReceiver",
    "read_vcs_blob",
]
