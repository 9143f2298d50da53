"""
Message decoder.

Turns a raw RFC 822 message into a MessageRecord.
"""

import logging
from email import policy
from email.parser import BytesParser
from typing import Optional, Tuple

from core.models import MessageRecord

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """Raised when a raw message cannot be turned into a MessageRecord."""


def _addresses(header) -> Tuple:
    if header is None:
        return ()
    return tuple(getattr(header, "addresses", ()))


def _sender(msg) -> Tuple[Optional[str], Optional[str]]:
    """Return (address, display name) of the first 'From' address."""
    addresses = _addresses(msg["From"])
    if not addresses:
        return None, None
    first = addresses[0]
    return first.addr_spec or None, first.display_name or None


def _body_text(msg) -> Optional[str]:
    """Return the plain-text body, or None if the message has none."""
    part = msg.get_body(preferencelist=("plain",))
    if part is None:
        return None
    try:
        return part.get_content()
    except (LookupError, UnicodeError) as e:
        raise DecodeError(f"Undecodable body: {e}") from e


def decode_message(raw: bytes, source_id: Optional[str] = None) -> MessageRecord:
    """
    Decode a raw message.

    Args:
        raw: Raw message bytes (headers and body)
        source_id: Identifier of the message inside its archive

    Returns:
        MessageRecord with sender, recipients, subject, date and body

    Raises:
        DecodeError: If the message has no usable 'Date' header or its
                     body cannot be decoded
    """
    msg = BytesParser(policy=policy.default).parsebytes(raw)

    try:
        date_header = msg["Date"]
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid Date header: {e}") from e
    date = getattr(date_header, "datetime", None) if date_header is not None else None
    if date is None:
        raise DecodeError(f"Missing or invalid Date header: {date_header!r}")

    sender_address, sender_display = _sender(msg)
    subject = msg["Subject"]

    record = MessageRecord(
        sender_address=sender_address,
        subject=str(subject) if subject is not None else None,
        date=date,
        body_text=_body_text(msg),
        sender_display=sender_display,
        recipients=tuple(a.addr_spec for a in _addresses(msg["To"]) if a.addr_spec),
        source_id=source_id,
    )
    logger.debug(f"Decoded message {source_id}: {sender_address} {record.subject!r}")
    return record
