"""
Utility functions for the binary /vcs layout.

This module provides:
    - event_pairs: EventID/value pair parsing and Kyma's '?' deflate variant
"""

from .event_pairs import (
    VcsEvent,
    decode_event_pairs,
    inflate_vcs_pairs,
    parse_event_pairs,
)

__all__ = [
    "VcsEvent",
    "decode_event_pairs",
    "inflate_vcs_pairs",
    "parse_event_pairs",
]
