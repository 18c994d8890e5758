#!/usr/bin/env python3
"""
Example: Receive and print Kyma VCS notifications via OSC protocol.

This script demonstrates how to use the VcsReceiver class to receive
optimized /vcs notifications from Kyma and print the decoded widget changes.
Ask Kyma to send them first (/osc/respond_to and /osc/notify_vcs_changes).

Usage:
    python receive_vcs.py --port 8000
    python receive_vcs.py --port 8000 --verbose
"""

import argparse
import logging
import os
import sys
import time

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from kyma_vcs_decoder import VcsReceiver

logger = logging.getLogger("receive_vcs")


def main():
    parser = argparse.ArgumentParser(description="Receive and print Kyma /vcs notifications")

    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="UDP port to listen for OSC data (default: 8000)",
    )

    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface to bind (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--allow_uncompressed",
        action="store_true",
        default=False,
        help="Also accept /vcs blobs sent with optimization turned off",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print the raw JSON text and sender of every message",
    )

    parser.add_argument(
        "--print_rate",
        action="store_true",
        default=False,
        help="Print receive rate and error statistics",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    receiver = VcsReceiver(port=args.port, host=args.host,
                           allow_uncompressed=args.allow_uncompressed)
    receiver.start()

    stats_start_time = time.time()
    stats_interval = 2.0

    logger.info(f"Waiting for /vcs notifications on port {args.port}, Ctrl+C to stop")

    try:
        while True:
            messages = receiver.drain_messages()
            if not messages:
                time.sleep(0.005)

            for message in messages:
                if args.verbose:
                    print(f"[{message.received_at:.3f}] {message.sender}: {message.text}")
                else:
                    print(message.payload)

            if args.print_rate:
                current_time = time.time()
                if current_time - stats_start_time >= stats_interval:
                    logger.info(f"OSC receive rate: {receiver.get_receive_rate():.1f} Hz, "
                                f"errors: {receiver.get_error_counts()}")
                    stats_start_time = current_time

    except KeyboardInterrupt:
        logger.info("Stopping...")
    finally:
        receiver.stop()


if __name__ == "__main__":
    main()
