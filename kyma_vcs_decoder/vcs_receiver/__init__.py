"""
VcsReceiver - Real-time Kyma VCS notification receiver via OSC protocol.

This package provides tools for receiving optimized /vcs notifications from a
Kyma sound engine over UDP using the OSC protocol.

Example usage:
    from kyma_vcs_decoder.vcs_receiver import VcsReceiver

    # Initialize receiver
    receiver = VcsReceiver(port=8000)

    # Start receiving
    receiver.start()

    # Main loop
    while running:
        message = receiver.get_latest_message()
        if message:
            print(f"{message.sender}: {message.payload}")

    # Cleanup
    receiver.stop()

Message format:
    VcsMessage(
        payload=dict,        # Parsed JSON, e.g. {"widget": 3, "value": 0.42}
        text=str,            # JSON text exactly as decoded from the blob
        sender=(host, port), # Kyma address
        received_at=float,   # Receive timestamp (time.time())
    )
"""

from .osc_reader import OscReader, read_vcs_blob
from .vcs_receiver import VcsMessage, VcsReceiver

__all__ = ["OscReader", "read_vcs_blob", "VcsMessage", "VcsReceiver"]
