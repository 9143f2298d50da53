"""
mbox archive source.

Reads messages from a Unix mbox file using the standard library mailbox
module.
"""

import logging
import mailbox
import os
from typing import Iterator, Optional, Tuple

from sources.base import MessageSource

logger = logging.getLogger(__name__)


class MboxSource(MessageSource):
    """
    Message source backed by an mbox file.

    Example:
        with MboxSource("~/reports.mbox") as source:
            for source_id, raw in source.iter_raw():
                ...
    """

    name = "mbox"

    def __init__(self, path: str):
        """
        Initialize the mbox source.

        Args:
            path: Path to the mbox archive
        """
        self.path = os.path.expanduser(path)
        self._mbox: Optional[mailbox.mbox] = None

    def open(self) -> None:
        """Open the archive without creating it."""
        if self._mbox is not None:
            return
        if not os.path.isfile(self.path):
            raise FileNotFoundError(f"Mailbox archive not found: {self.path}")
        self._mbox = mailbox.mbox(self.path, create=False)
        logger.info(f"Opened mbox {self.path}")

    def close(self) -> None:
        if self._mbox is not None:
            try:
                self._mbox.close()
            finally:
                self._mbox = None
        logger.debug("mbox closed")

    def iter_raw(self) -> Iterator[Tuple[str, bytes]]:
        if self._mbox is None:
            raise RuntimeError("mbox source is not open")
        for key in self._mbox.iterkeys():
            yield str(key), self._mbox.get_bytes(key)
