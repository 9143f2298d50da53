"""
Per-author report statistics.

Groups report messages by author, builds their daily spans and assembles
the ratio-ordered summary consumed by presentation.

Usage:
    from core.stats import prepare_stats

    stats = prepare_stats(messages, directory, business_days=20)
    for stat in stats:
        print(stat.author, stat.count, stat.percentage, stat.sparklines.count)
"""

import logging
from typing import Dict, Iterable, List, Optional

from core.calendar import validate_business_days
from core.contacts import resolve_author
from core.models import DAYS_IN_SPAN, AuthorStat, DaySlot, MessageRecord, Span, SpanField, Sparklines
from core.rules import ReportClassifier, filter_reports
from core.sparkline import render

logger = logging.getLogger(__name__)


def group_by_author(
    messages: Iterable[MessageRecord],
    directory: Dict[str, str],
    classifier: Optional[ReportClassifier] = None,
) -> Dict[str, List[MessageRecord]]:
    """
    Group report messages by resolved author.

    Args:
        messages: Decoded messages, reports and non-reports alike
        directory: Address -> contact name mapping (may be empty)
        classifier: Report classifier (default patterns if omitted)

    Returns:
        Dict of author key -> messages in encounter order. Authors appear
        in the order their first report was seen.
    """
    authors: Dict[str, List[MessageRecord]] = {}
    for msg in filter_reports(messages, classifier):
        key = resolve_author(msg.sender_address, directory)
        authors.setdefault(key, []).append(msg)
    return authors


def build_span(messages: Iterable[MessageRecord]) -> Span:
    """
    Build the per-day histogram for one author's reports.

    The day of month is taken from the message date as carried by the
    message, without timezone conversion.

    Raises:
        ValueError: If a message date falls outside days 1..31
    """
    slots = [DaySlot() for _ in range(DAYS_IN_SPAN + 1)]
    for msg in messages:
        day = msg.date.day
        if not 1 <= day <= DAYS_IN_SPAN:
            raise ValueError(f"Message {msg.source_id} has day of month {day}")
        slots[day] = slots[day].add(msg.body_size)
    return Span(slots=tuple(slots[1:]))


def sparklines_for(span: Span) -> Sparklines:
    return Sparklines(
        count=render(span.series(SpanField.COUNT)),
        size=render(span.series(SpanField.SIZE)),
    )


def assemble(author_groups: Dict[str, List[MessageRecord]], business_days: int) -> List[AuthorStat]:
    """
    Compute per-author statistics ordered by ascending ratio.

    Authors with equal ratios keep their order in ``author_groups``.

    Args:
        author_groups: Output of group_by_author
        business_days: Business days in the current month

    Returns:
        List of AuthorStat sorted by ratio

    Raises:
        CalendarError: If business_days is zero or negative
    """
    validate_business_days(business_days)

    stats = []
    for author, reports in author_groups.items():
        span = build_span(reports)
        count = len(reports)
        stats.append(AuthorStat(
            author=author,
            span=span,
            count=count,
            ratio=count / business_days,
            sparklines=sparklines_for(span),
        ))
        logger.debug(f"{author}: {count} reports over {business_days} business days")

    return sorted(stats, key=lambda s: s.ratio)


def prepare_stats(
    messages: Iterable[MessageRecord],
    directory: Dict[str, str],
    business_days: int,
    classifier: Optional[ReportClassifier] = None,
) -> List[AuthorStat]:
    """Classify, group and summarize messages in one pass."""
    groups = group_by_author(messages, directory, classifier)
    logger.info(f"Found reports from {len(groups)} authors")
    return assemble(groups, business_days)
