#!/usr/bin/env python3
"""
Example: Decode a captured /vcs blob from a file.

The file may hold the bare blob payload, the OSC wire form of the blob
argument (--framed), or a whole /vcs OSC packet (--packet).

Usage:
    python decode_blob.py capture.bin
    python decode_blob.py capture.bin --framed
    python decode_blob.py packet.bin --packet --pretty
"""

import argparse
import json
import os
import sys

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from kyma_vcs_decoder import DecodeError, decode_blob, decode_framed_blob, read_vcs_blob


def main():
    parser = argparse.ArgumentParser(description="Decode a captured Kyma /vcs blob")
    parser.add_argument("path", help="File holding the captured bytes")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--framed", action="store_true",
                       help="File holds the length-prefixed OSC blob argument")
    group.add_argument("--packet", action="store_true",
                       help="File holds a complete /vcs OSC packet")
    parser.add_argument("--pretty", action="store_true",
                        help="Parse and pretty-print the JSON document")
    args = parser.parse_args()

    with open(args.path, "rb") as f:
        data = f.read()

    try:
        if args.packet:
            text = decode_blob(read_vcs_blob(data))
        elif args.framed:
            text = decode_framed_blob(data)
        else:
            text = decode_blob(data)
    except DecodeError as e:
        print(f"{e.kind}: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"osc: {e}", file=sys.stderr)
        return 1

    if args.pretty:
        print(json.dumps(json.loads(text), indent=2))
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
