"""
Report classification rules.

Decides whether a decoded message counts as a status report. Automated
senders and replies are rejected; everything else is a report.

Usage:
    from core.rules import ReportClassifier

    classifier = ReportClassifier()
    classifier.is_report(message)  # False for noreply@... or "RE: ..." subjects
"""

import logging
import re
from typing import Iterable, List, Optional

from core.models import MessageRecord

logger = logging.getLogger(__name__)

# Sender addresses of automated notifications.
IGNORED_SENDER_PATTERNS: List[str] = [
    r"^no-?reply@.+$",
]

# Subjects of replies to an earlier report.
REPLY_SUBJECT_PATTERNS: List[str] = [
    r"^RE:",
]


def _compile(patterns: Iterable[str]) -> List[re.Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


class ReportClassifier:
    """
    Classifies messages as reports using sender and subject patterns.

    Patterns are matched case-insensitively. Both pattern lists can be
    replaced, e.g. from the ``ignored_senders`` / ``reply_subjects`` config
    keys.

    Attributes:
        ignored_senders: Compiled sender patterns that reject a message
        reply_subjects: Compiled subject patterns that reject a message
    """

    def __init__(
        self,
        ignored_senders: Optional[Iterable[str]] = None,
        reply_subjects: Optional[Iterable[str]] = None,
    ):
        self.ignored_senders = _compile(
            IGNORED_SENDER_PATTERNS if ignored_senders is None else ignored_senders
        )
        self.reply_subjects = _compile(
            REPLY_SUBJECT_PATTERNS if reply_subjects is None else reply_subjects
        )

    def ignore_sender(self, address: Optional[str]) -> bool:
        """Check if the sender address belongs to an automated sender."""
        if not address:
            return False
        return any(p.search(address) for p in self.ignored_senders)

    def ignore_subject(self, subject: Optional[str]) -> bool:
        """Check if the subject marks the message as a reply."""
        if not subject:
            return False
        return any(p.search(subject) for p in self.reply_subjects)

    def is_report(self, message: MessageRecord) -> bool:
        """
        Decide whether a message is a report.

        Args:
            message: Decoded message

        Returns:
            False for messages without a sender, from automated senders or
            with a reply subject; True otherwise.
        """
        if not message.sender_address:
            logger.debug(f"Message {message.source_id}: no sender, not a report")
            return False
        if self.ignore_sender(message.sender_address):
            return False
        if self.ignore_subject(message.subject):
            return False
        return True


_default_classifier = ReportClassifier()


def is_report(message: MessageRecord, classifier: Optional[ReportClassifier] = None) -> bool:
    """Convenience wrapper using the default classifier."""
    return (classifier or _default_classifier).is_report(message)


def filter_reports(
    messages: Iterable[MessageRecord],
    classifier: Optional[ReportClassifier] = None,
) -> List[MessageRecord]:
    """Keep only report messages, preserving order."""
    classifier = classifier or _default_classifier
    return [msg for msg in messages if classifier.is_report(msg)]
