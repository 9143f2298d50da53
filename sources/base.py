"""
Abstract base class for message sources.

Defines the interface that message archives implement so the report
pipeline can consume decoded messages regardless of where they are stored.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from core.models import MessageRecord
from sources.decoder import DecodeError, decode_message

logger = logging.getLogger(__name__)


class MessageSource(ABC):
    """
    Abstract base class for message source implementations.

    Sources split an archive into raw RFC 822 blobs. The class supports the
    context manager protocol for clean file handling.

    Example:
        with MboxSource("reports.mbox") as source:
            messages, errors = source.load_messages()

    Attributes:
        name: Human-readable source name
    """

    name: str = "abstract"

    def __enter__(self) -> "MessageSource":
        """Context manager entry - open the archive."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close the archive."""
        self.close()

    @abstractmethod
    def open(self) -> None:
        """
        Open the underlying archive.

        Raises:
            FileNotFoundError: If the archive does not exist
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Release the underlying archive.

        Should be idempotent (safe to call multiple times).
        """
        pass

    @abstractmethod
    def iter_raw(self) -> Iterator[Tuple[str, bytes]]:
        """
        Yield raw messages from the archive.

        Returns:
            Iterator of (source_id, raw message bytes) in archive order
        """
        pass

    def load_messages(self) -> Tuple[List[MessageRecord], List[str]]:
        """
        Decode every message in the archive.

        Messages that fail to decode are logged and skipped; they never
        abort the run.

        Returns:
            Tuple of (decoded messages, per-message error descriptions)
        """
        messages = []
        errors = []
        for source_id, raw in self.iter_raw():
            try:
                messages.append(decode_message(raw, source_id=source_id))
            except DecodeError as e:
                logger.warning(f"Skipping message {source_id}: {e}")
                errors.append(f"{source_id}: {e}")
            except Exception as e:
                logger.warning(f"Skipping message {source_id}: unexpected decode failure", exc_info=True)
                errors.append(f"{source_id}: {e}")
        logger.info(f"Decoded {len(messages)} messages from {self.name} ({len(errors)} failed)")
        return messages, errors
