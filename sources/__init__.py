"""
Message and contact sources.

This package contains adapters that turn files on disk into the inputs of
the report pipeline.

Supported Sources:
    - MboxSource: Unix mbox archive (standard library mailbox)
    - load_directory: contacts CSV export
"""

from sources.base import MessageSource
from sources.contacts import load_directory, read_contact_rows
from sources.decoder import DecodeError, decode_message
from sources.mbox import MboxSource

__all__ = [
    "MessageSource",
    "MboxSource",
    "DecodeError",
    "decode_message",
    "load_directory",
    "read_contact_rows",
]
