"""
Data models for report statistics.

Provides source-agnostic data structures for decoded messages, per-day
activity spans and per-author statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple

DAYS_IN_SPAN = 31


@dataclass(frozen=True)
class MessageRecord:
    """
    Source-agnostic representation of a decoded email message.

    Immutable dataclass holding the fields needed for classification and
    aggregation. The message decoder extracts these from raw RFC 822 blobs.

    Attributes:
        sender_address: Bare address from the 'From' header (None if missing)
        subject: The 'Subject' header value (None if missing)
        date: Message date as carried by the 'Date' header
        body_text: Plain-text body (None if the message has no text part)
        sender_display: Display name from the 'From' header
        recipients: Bare addresses from the 'To' header
        source_id: Position of the message inside its archive
    """
    sender_address: Optional[str]
    subject: Optional[str]
    date: datetime
    body_text: Optional[str] = None
    sender_display: Optional[str] = None
    recipients: Tuple[str, ...] = ()
    source_id: Optional[str] = None

    @property
    def body_size(self) -> int:
        """Length of the body text, 0 when absent."""
        return len(self.body_text) if self.body_text else 0


@dataclass(frozen=True)
class DaySlot:
    """Activity for a single day of month."""
    count: int = 0
    size: int = 0

    def add(self, size: int) -> "DaySlot":
        """Return a slot with one more message of the given size."""
        return DaySlot(count=self.count + 1, size=self.size + size)


class SpanField(Enum):
    """Series that can be extracted from a span."""
    COUNT = "count"
    SIZE = "size"

    def value_of(self, slot: DaySlot) -> int:
        if self is SpanField.COUNT:
            return slot.count
        return slot.size


@dataclass(frozen=True)
class Span:
    """
    Dense per-day histogram covering days 1 through 31.

    Every slot exists even when empty. Index with the day of month:
    ``span[5]`` is the slot for the fifth.
    """
    slots: Tuple[DaySlot, ...] = field(
        default_factory=lambda: tuple(DaySlot() for _ in range(DAYS_IN_SPAN))
    )

    def __post_init__(self):
        if len(self.slots) != DAYS_IN_SPAN:
            raise ValueError(f"Span needs {DAYS_IN_SPAN} slots, got {len(self.slots)}")

    def __getitem__(self, day: int) -> DaySlot:
        if not 1 <= day <= DAYS_IN_SPAN:
            raise IndexError(f"Day {day} outside 1..{DAYS_IN_SPAN}")
        return self.slots[day - 1]

    def __iter__(self) -> Iterator[Tuple[int, DaySlot]]:
        return iter(enumerate(self.slots, start=1))

    def __len__(self) -> int:
        return DAYS_IN_SPAN

    def series(self, span_field: SpanField) -> List[int]:
        """Values of one field for days 1..31, in day order."""
        return [span_field.value_of(slot) for slot in self.slots]

    @property
    def total_count(self) -> int:
        return sum(slot.count for slot in self.slots)

    @property
    def total_size(self) -> int:
        return sum(slot.size for slot in self.slots)

    def to_dict(self) -> dict:
        return {
            str(day): {"count": slot.count, "size": slot.size}
            for day, slot in self
        }


@dataclass(frozen=True)
class Sparklines:
    """Rendered sparklines for the count and size series."""
    count: str
    size: str


@dataclass(frozen=True)
class AuthorStat:
    """
    Activity summary for one author.

    Attributes:
        author: Resolved author key (contact name or raw address)
        span: Per-day histogram of the author's reports
        count: Number of reports
        ratio: Reports per business day of the month
        sparklines: Rendered count and size distributions
    """
    author: str
    span: Span
    count: int
    ratio: float
    sparklines: Sparklines

    @property
    def percentage(self) -> int:
        """Ratio as a truncated integer percentage."""
        return int(self.ratio * 100)

    def to_dict(self) -> dict:
        return {
            "author": self.author,
            "count": self.count,
            "ratio": self.ratio,
            "percentage": self.percentage,
            "sparklines": {"count": self.sparklines.count, "size": self.sparklines.size},
            "span": self.span.to_dict(),
        }


@dataclass
class AnalysisResult:
    """
    Summary of one analysis run.

    Returned by the pipeline so presentation can report both the stats and
    what was left out.
    """
    stats: List[AuthorStat] = field(default_factory=list)
    total_messages: int = 0
    report_messages: int = 0
    decode_errors: List[str] = field(default_factory=list)
    business_days: int = 0

    @property
    def rejected_messages(self) -> int:
        """Decoded messages that were not classified as reports."""
        return self.total_messages - self.report_messages
