"""
Core report statistics module.

Provides report classification, contact resolution, per-day spans,
sparklines and the ratio-ordered author summary, independent of where
the messages come from.
"""

from core.models import (
    DAYS_IN_SPAN,
    AnalysisResult,
    AuthorStat,
    DaySlot,
    MessageRecord,
    Span,
    SpanField,
    Sparklines,
)
from core.rules import (
    IGNORED_SENDER_PATTERNS,
    REPLY_SUBJECT_PATTERNS,
    ReportClassifier,
    filter_reports,
    is_report,
)
from core.contacts import build_directory, looks_like_address, resolve_author
from core.calendar import (
    BusinessDayCalendar,
    CalendarError,
    FixedBusinessDays,
    business_days_this_month,
)
from core.sparkline import render
from core.stats import assemble, build_span, group_by_author, prepare_stats
from core.config import Config, load_config, create_sample_config

__all__ = [
    "DAYS_IN_SPAN",
    "AnalysisResult",
    "AuthorStat",
    "DaySlot",
    "MessageRecord",
    "Span",
    "SpanField",
    "Sparklines",
    "IGNORED_SENDER_PATTERNS",
    "REPLY_SUBJECT_PATTERNS",
    "ReportClassifier",
    "filter_reports",
    "is_report",
    "build_directory",
    "looks_like_address",
    "resolve_author",
    "BusinessDayCalendar",
    "CalendarError",
    "FixedBusinessDays",
    "business_days_this_month",
    "render",
    "assemble",
    "build_span",
    "group_by_author",
    "prepare_stats",
    "Config",
    "load_config",
    "create_sample_config",
]
