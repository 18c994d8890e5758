"""
VcsReceiver - Real-time Kyma VCS notification receiver via OSC protocol.

This module provides the VcsReceiver class for receiving optimized /vcs
notifications from a Kyma sound engine over UDP. Packets are parsed, their
blobs decoded and their JSON parsed in a background thread.
"""

import json
import logging
import socket
import threading
import time
from collections import Counter, deque, namedtuple

from ..blob_decoder import BlobDecoder, DecodeError, NotGzip
from .osc_reader import VCS_ADDRESS, OscReader

logger = logging.getLogger(__name__)

# Kyma replies to the port given in /osc/respond_to; 8000 is its usual choice.
DEFAULT_PORT = 8000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_QUEUE_SIZE = 256

VcsMessage = namedtuple("VcsMessage", ["payload", "text", "sender", "received_at"])


class VcsReceiver:
    """
    Manages OSC reception and /vcs blob decoding in a background thread.

    The data flow:
    1. UDP packets arrive containing OSC messages (/vcs,b)
    2. The blob argument is pulled out of each message
    3. The blob is gunzipped and its JSON parsed
    4. Decoded messages are stored in a queue, in receipt order

    Example usage:
        receiver = VcsReceiver(port=8000)
        receiver.start()

        while running:
            for message in receiver.drain_messages():
                print(f"{message.sender}: {message.payload}")

        receiver.stop()

    Messages are VcsMessage tuples:
        payload       parsed JSON document (usually a dict)
        text          the JSON text as decoded from the blob
        sender        (host, port) of the Kyma that sent it
        received_at   time.time() when the packet arrived
    """

    def __init__(self, port: int = DEFAULT_PORT, host: str = DEFAULT_HOST,
                 queue_size: int = DEFAULT_QUEUE_SIZE, decoder=None,
                 allow_uncompressed: bool = False):
        """
        Initialize the VcsReceiver.

        Args:
            port: UDP port to listen on (default: 8000)
            host: Interface to bind (default: all interfaces)
            queue_size: Maximum number of undrained messages kept
            decoder: BlobDecoder to use (default: bare-payload decoder)
            allow_uncompressed: Accept blobs without gzip magic as plain
                UTF-8 JSON, for Kymas with optimization turned off
        """
        self.port = port
        self.host = host
        self.decoder = decoder or BlobDecoder()
        self.allow_uncompressed = allow_uncompressed
        self.thread = None
        self.sock = None
        self.running = False
        self.lock = threading.Lock()
        self.messages = deque(maxlen=queue_size)
        self.error_counts = Counter()
        self.recv_count = 0
        self.last_rate_time = time.time()
        self.recv_rate_hz = 0.0

    def reset(self):
        """Reset all internal state and buffers."""
        with self.lock:
            self.messages.clear()
            self.error_counts.clear()
            self.recv_count = 0
            self.recv_rate_hz = 0.0
            self.last_rate_time = time.time()

    def start(self):
        """Start the UDP server thread."""
        self.reset()
        self.running = True
        self.thread = threading.Thread(target=self._udp_server_loop, daemon=True)
        self.thread.start()
        logger.debug(f"[VcsReceiver] Starting on UDP {self.host}:{self.port}")

    def stop(self):
        """Stop the UDP server thread."""
        self.running = False
        if self.sock:
            try:
                self.sock.close()
            except OSError as e:
                logger.debug(f"[VcsReceiver] Socket close error: {e}")
        if self.thread:
            self.thread.join(timeout=1.0)
        self.thread = None
        self.sock = None
        self.reset()
        logger.info("[VcsReceiver] Stopped")

    def get_latest_message(self):
        """
        Get the most recent decoded message, clearing older ones.

        Returns:
            VcsMessage if available, None otherwise.
        """
        with self.lock:
            if not self.messages:
                return None
            message = self.messages.pop()
            self.messages.clear()
            return message

    def drain_messages(self):
        """
        Take every queued message.

        Returns:
            List of VcsMessage, oldest first.
        """
        with self.lock:
            drained = list(self.messages)
            self.messages.clear()
            return drained

    def get_receive_rate(self):
        """
        Get the current packet receive rate.

        Returns:
            Receive rate in Hz (packets per second)
        """
        return self.recv_rate_hz

    def get_error_counts(self):
        """
        Get the number of dropped packets per failure kind.

        Returns:
            Dict mapping kind (e.g. "not_gzip", "osc_parse") to count
        """
        with self.lock:
            return dict(self.error_counts)

    def _count_error(self, kind):
        with self.lock:
            self.error_counts[kind] += 1

    def _decode_text(self, blob):
        try:
            return self.decoder.decode(blob)
        except NotGzip:
            if not self.allow_uncompressed:
                raise
            return bytes(blob).decode("utf-8")

    def handle_packet(self, data, addr=None):
        """
        Parse and decode one UDP datagram.

        Args:
            data: Raw datagram bytes
            addr: Sender address as returned by recvfrom

        Returns:
            The queued VcsMessage, or None if the packet was ignored or dropped.
        """
        try:
            address, args = OscReader(data).read_message()
        except ValueError as e:
            logger.warning(f"[VcsReceiver] OSC parse error: {e}")
            self._count_error("osc_parse")
            return None

        if address != VCS_ADDRESS:
            return None

        if len(args) != 1 or not isinstance(args[0], bytes):
            logger.warning(f"[VcsReceiver] Expected a single blob argument, got {len(args)} args")
            self._count_error("bad_args")
            return None

        try:
            text = self._decode_text(args[0])
        except DecodeError as e:
            logger.warning(f"[VcsReceiver] Dropping /vcs blob from {addr}: {e}")
            self._count_error(e.kind)
            return None
        except UnicodeDecodeError as e:
            logger.warning(f"[VcsReceiver] Uncompressed /vcs blob is not UTF-8: {e}")
            self._count_error("invalid_utf8")
            return None

        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning(f"[VcsReceiver] /vcs blob is not JSON: {e}")
            self._count_error("invalid_json")
            return None

        now = time.time()
        message = VcsMessage(payload=payload, text=text, sender=addr, received_at=now)
        with self.lock:
            self.messages.append(message)

            # Update receive rate
            self.recv_count += 1
            dt = now - self.last_rate_time
            if dt >= 1.0:
                self.recv_rate_hz = self.recv_count / dt
                self.recv_count = 0
                self.last_rate_time = now
        return message

    def _udp_server_loop(self):
        """Background thread that receives OSC packets and decodes /vcs blobs."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError:
            logger.debug("[VcsReceiver] SO_REUSEADDR not available")
        try:
            sock.bind((self.host, self.port))
        except OSError as e:
            logger.error(f"[VcsReceiver] Bind to {self.host}:{self.port} failed: {e}")
            sock.close()
            self.running = False
            return
        sock.settimeout(0.5)
        self.sock = sock
        logger.info(f"[VcsReceiver] Listening on UDP {self.host}:{self.port}")

        try:
            while self.running:
                try:
                    data, addr = sock.recvfrom(65535)
                except socket.timeout:
                    continue
                except OSError:
                    break

                try:
                    self.handle_packet(data, addr)
                except Exception as e:
                    logger.exception(f"[VcsReceiver] Unexpected error handling packet from {addr}: {e}")
                    self._count_error("internal")
        finally:
            try:
                sock.close()
            except OSError:
                pass
            self.sock = None
