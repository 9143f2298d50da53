"""
Pytest configuration shared across the report statistics tests.
"""

import mailbox
from datetime import datetime, timezone
from email.message import EmailMessage

import pytest

from core.models import MessageRecord


def make_record(
    sender="alice@co.com",
    subject="Weekly report",
    day=5,
    body="x" * 10,
    month=3,
    year=2024,
):
    return MessageRecord(
        sender_address=sender,
        subject=subject,
        date=datetime(year, month, day, 17, 30, tzinfo=timezone.utc),
        body_text=body,
    )


@pytest.fixture
def record():
    """Factory for MessageRecord instances."""
    return make_record


def make_email(sender, subject, date, body, to="team@co.com"):
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    if date is not None:
        msg["Date"] = date
    msg.set_content(body)
    return msg


@pytest.fixture
def mail():
    """Factory for raw EmailMessage objects."""
    return make_email


@pytest.fixture
def write_mbox(tmp_path):
    """Write EmailMessages to an mbox file and return its path."""
    def _write(messages, name="reports.mbox"):
        path = tmp_path / name
        box = mailbox.mbox(str(path))
        box.lock()
        try:
            for msg in messages:
                box.add(msg)
            box.flush()
        finally:
            box.unlock()
            box.close()
        return path
    return _write


@pytest.fixture
def write_contacts(tmp_path):
    """Write contact rows as a UTF-16 CSV file and return its path."""
    def _write(lines, name="contacts.csv", encoding="utf-16"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path
    return _write
