from datetime import datetime, timedelta, timezone

import pytest

from sources.base import MessageSource
from sources.decoder import DecodeError, decode_message
from sources.mbox import MboxSource

DATE = "Tue, 05 Mar 2024 10:00:00 +0100"


def test_decode_message_fields(mail):
    raw = mail('"Alice Smith" <alice@co.com>', "Weekly report", DATE, "All good").as_bytes()

    record = decode_message(raw, source_id="7")

    assert record.sender_address == "alice@co.com"
    assert record.sender_display == "Alice Smith"
    assert record.recipients == ("team@co.com",)
    assert record.subject == "Weekly report"
    assert record.date == datetime(2024, 3, 5, 10, 0, tzinfo=timezone(timedelta(hours=1)))
    assert record.body_text == "All good\n"
    assert record.source_id == "7"


def test_decode_keeps_sender_timezone(mail):
    raw = mail("alice@co.com", "Late report", "Mon, 04 Mar 2024 23:30:00 -0500", "x").as_bytes()

    assert decode_message(raw).date.day == 4


def test_decode_prefers_plain_text_part(mail):
    msg = mail("alice@co.com", "Report", DATE, "plain body")
    msg.add_alternative("<p>html body</p>", subtype="html")

    assert decode_message(msg.as_bytes()).body_text == "plain body\n"


def test_decode_html_only_message_has_no_text():
    raw = (
        b"From: alice@co.com\r\nDate: " + DATE.encode() + b"\r\n"
        b"Content-Type: text/html; charset=utf-8\r\n\r\n<p>html body</p>\r\n"
    )

    assert decode_message(raw).body_text is None


def test_decode_without_sender():
    raw = b"Subject: hi\r\nDate: " + DATE.encode() + b"\r\n\r\nbody\r\n"

    record = decode_message(raw)

    assert record.sender_address is None
    assert record.subject == "hi"


def test_decode_without_subject():
    raw = b"From: bob@co.com\r\nDate: " + DATE.encode() + b"\r\n\r\nbody\r\n"

    assert decode_message(raw).subject is None


def test_decode_without_date_fails(mail):
    raw = mail("alice@co.com", "Report", None, "body").as_bytes()

    with pytest.raises(DecodeError):
        decode_message(raw)


def test_mbox_source_yields_raw_messages(write_mbox, mail):
    path = write_mbox([
        mail("alice@co.com", "One", DATE, "first"),
        mail("bob@co.com", "Two", DATE, "second"),
    ])

    with MboxSource(str(path)) as source:
        raw = list(source.iter_raw())

    assert len(raw) == 2
    assert all(isinstance(blob, bytes) for _, blob in raw)
    assert b"Subject: One" in raw[0][1]


def test_load_messages_skips_undecodable(write_mbox, mail):
    path = write_mbox([
        mail("alice@co.com", "One", DATE, "first"),
        mail("bob@co.com", "No date", None, "second"),
        mail("carol@co.com", "Three", DATE, "third"),
    ])

    with MboxSource(str(path)) as source:
        messages, errors = source.load_messages()

    assert [m.sender_address for m in messages] == ["alice@co.com", "carol@co.com"]
    assert len(errors) == 1
    assert "Date" in errors[0]


def test_missing_mbox_raises(tmp_path):
    source = MboxSource(str(tmp_path / "missing.mbox"))

    with pytest.raises(FileNotFoundError):
        source.open()
    assert not (tmp_path / "missing.mbox").exists()


def test_iter_raw_requires_open(tmp_path):
    with pytest.raises(RuntimeError):
        list(MboxSource(str(tmp_path / "x.mbox")).iter_raw())


def test_close_is_idempotent(write_mbox, mail):
    source = MboxSource(str(write_mbox([mail("a@co.com", "x", DATE, "y")])))
    source.open()
    source.close()
    source.close()


class ListSource(MessageSource):
    """In-memory source over (source_id, raw bytes) pairs."""

    name = "list"

    def __init__(self, blobs):
        self.blobs = blobs

    def open(self):
        pass

    def close(self):
        pass

    def iter_raw(self):
        return iter(self.blobs)


def test_load_messages_survives_unexpected_decoder_failure(mail, monkeypatch):
    def flaky_decode(raw, source_id=None):
        if source_id == "broken":
            raise KeyError("charset")
        return decode_message(raw, source_id=source_id)

    monkeypatch.setattr("sources.base.decode_message", flaky_decode)
    blobs = [
        ("1", mail("alice@co.com", "One", DATE, "first").as_bytes()),
        ("broken", mail("bob@co.com", "Two", DATE, "second").as_bytes()),
        ("3", mail("carol@co.com", "Three", DATE, "third").as_bytes()),
    ]

    with ListSource(blobs) as source:
        messages, errors = source.load_messages()

    assert [m.source_id for m in messages] == ["1", "3"]
    assert len(errors) == 1
    assert errors[0].startswith("broken: ")
